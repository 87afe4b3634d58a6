"""Template updater: patches sets of a template and rolls the patches back.

Install-time usage:

    storage = FileSystemStorage(Path('site'))
    updater = TemplateUpdater(storage, 'my_module')
    updater.load('templates/page.tpl')
    updater.patch(PatchType.ADD, PatchMethod.TO_BEGINNING, ['header'], '<h1>Hi</h1>')
    updater.patch(PatchType.ADD, PatchMethod.REPLACE, ['body'], 'new', 'old')
    updater.save('templates/page.tpl')

Uninstall-time usage, with nothing but the namespace token:

    updater = TemplateUpdater(storage, 'my_module')
    updater.load('templates/page.tpl')
    updater.rollback()
    updater.save('templates/page.tpl')
"""

import re
from collections.abc import Callable, Iterable
from enum import Enum

from hotlog import get_logger

from tplpatch.exceptions import (
    CannotBackupError,
    CannotLoadError,
    CannotSaveError,
    InvalidPatchMethodError,
    InvalidPatchTypeError,
    InvalidPatternError,
    MissingPatternError,
    UnbalancedMarkersError,
)
from tplpatch.markers import DEFAULT_BRAND, MarkerCodec, MarkerPosition, MarkerType
from tplpatch.operations import (
    append,
    first_match,
    insert_after,
    insert_before,
    prepend,
    replace_all,
)
from tplpatch.sets import SetIndex, TemplateSet, parse_set
from tplpatch.storage import Storage

logger = get_logger(__name__)

WILDCARD = '*'

PatchType = MarkerType


class PatchMethod(str, Enum):
    """How a patch edits its target region."""

    TO_BEGINNING = 'to_beginning'
    TO_END = 'to_end'
    BEFORE = 'before'
    AFTER = 'after'
    REPLACE = 'replace'
    REG_REPLACE = 'reg_replace'

    @classmethod
    def _missing_(cls, value: object) -> 'PatchMethod | None':
        # accept 'to-beginning' as well as 'to_beginning'
        if isinstance(value, str):
            normalized = value.strip().lower().replace('-', '_')
            for member in cls:
                if member.value == normalized:
                    return member
        return None


POSITIONAL_METHODS = frozenset(
    {
        PatchMethod.TO_BEGINNING,
        PatchMethod.TO_END,
        PatchMethod.BEFORE,
        PatchMethod.AFTER,
    },
)
PATTERN_METHODS = frozenset(
    {
        PatchMethod.BEFORE,
        PatchMethod.AFTER,
        PatchMethod.REPLACE,
        PatchMethod.REG_REPLACE,
    },
)


def coerce_patch_type(value: PatchType | str) -> PatchType:
    """Convert a raw value into a PatchType or raise InvalidPatchTypeError."""
    try:
        return PatchType(value)
    except ValueError:
        msg = f"Invalid patch type '{value}' passed"
        raise InvalidPatchTypeError(msg) from None


def coerce_patch_method(value: PatchMethod | str) -> PatchMethod:
    """Convert a raw value into a PatchMethod or raise InvalidPatchMethodError."""
    try:
        return PatchMethod(value)
    except ValueError:
        msg = f"Invalid patch method '{value}' passed"
        raise InvalidPatchMethodError(msg) from None


def validate_patch(
    patch_type: PatchType | str,
    method: PatchMethod | str,
    pattern: str | re.Pattern[str] | None,
) -> tuple[PatchType, PatchMethod]:
    """Check a patch request before anything is touched.

    Returns:
        The coerced patch type and method.

    Raises:
        InvalidPatchTypeError: unknown patch type.
        InvalidPatchMethodError: unknown method, or a positional method
            requested with the `delete` type.
        MissingPatternError: the method searches for a pattern and none
            was given.
        InvalidPatternError: the `reg_replace` pattern does not compile.
    """
    kind = coerce_patch_type(patch_type)
    how = coerce_patch_method(method)
    if kind is PatchType.DELETE and how in POSITIONAL_METHODS:
        msg = f"Invalid patch method '{how.value}' using type '{kind.value}' passed"
        raise InvalidPatchMethodError(msg)
    if how in PATTERN_METHODS and pattern is None:
        msg = f"Patch method '{how.value}' needs a search pattern"
        raise MissingPatternError(msg)
    if how is PatchMethod.REG_REPLACE and isinstance(pattern, str):
        try:
            re.compile(pattern)
        except re.error as e:
            msg = f"Invalid regular expression '{pattern}': {e}"
            raise InvalidPatternError(msg) from e
    return kind, how


class TemplateUpdater:
    """Applies marker-wrapped patches to a template and rolls them back.

    The document string is the only source of truth. Sets are views computed
    from it on demand and cached in a SetIndex; the markers embedded in the
    text are the only record of what was changed.
    """

    def __init__(
        self,
        storage: Storage,
        namespace: str,
        *,
        brand: str = DEFAULT_BRAND,
        check_duplicates: bool = True,
    ) -> None:
        self.storage = storage
        self.namespace = namespace
        self.codec = MarkerCodec(namespace, brand)
        self.check_duplicates = check_duplicates
        self.template: str | None = None
        self._contents = ''
        self._changed = False
        self._index = SetIndex()

    @property
    def changed(self) -> bool:
        """True once an operation altered the document since load/save."""
        return self._changed

    def set_duplicates_checking(self, check_duplicates: bool) -> None:  # noqa: FBT001
        """Turn the duplicate-insertion guard on or off."""
        self.check_duplicates = bool(check_duplicates)

    def set_raw_contents(self, contents: str) -> None:
        """Replace the document, bypassing the storage."""
        self._contents = contents
        self._changed = False
        self._index.invalidate()

    def get_raw_contents(self) -> str:
        """Return the current document."""
        return self._contents

    def load(self, template: str) -> None:
        """Load a template from the storage.

        Raises:
            CannotLoadError: when the storage does not know the template.
        """
        contents = self.storage.load(template)
        self._index.invalidate()
        self._changed = False
        if contents is None:
            self._contents = ''
            self.template = None
            msg = f"Template '{template}' not found"
            raise CannotLoadError(msg)
        self._contents = contents
        self.template = template
        logger.debug('template_loaded', template=template, size=len(contents))

    def save(self, template: str, backup: str = '') -> None:
        """Write the document back if it changed.

        Args:
            template: Template name to write.
            backup: When not empty, the existing template is first renamed
                to this name.

        Raises:
            CannotBackupError: the rename failed; nothing was written.
            CannotSaveError: writing failed.
        """
        if not self._changed:
            logger.debug('template_unchanged', template=template)
            return
        if backup and not self.storage.rename(template, backup):
            msg = f"Cannot backup template '{template}' to '{backup}'"
            raise CannotBackupError(msg)
        if not self.storage.save(template, self._contents):
            msg = f"Cannot save template '{template}'"
            raise CannotSaveError(msg)
        self._changed = False
        logger.info(
            'template_saved',
            template=template,
            backup=backup or None,
            _display_level=1,
        )

    def get_marker(
        self,
        position: MarkerPosition | str,
        marker_type: MarkerType | str,
    ) -> str:
        """Return one of the markers of this updater's namespace."""
        return self.codec.get_marker(position, marker_type)

    def get_sets(self) -> list[TemplateSet]:
        """Return every set of the document."""
        return list(self._index.get(self._contents))

    def get_sets_by_name(self, name: str = '') -> list[str]:
        """Return the raw text of every set carrying `name`.

        An empty name matches nothing; use the `*` wildcard with `patch()` to
        address the whole document.
        """
        if not name:
            return []
        return [s.raw for s in self._index.get(self._contents) if s.has_name(name)]

    def parse_set(self, raw: str) -> TemplateSet | None:
        """Parse one previously matched set; None when `raw` holds no set."""
        return parse_set(raw)

    def set_contents(self, name: str, contents: str) -> None:
        """Set the body of every set carrying `name`."""
        sets = self._index.get(self._contents)
        for index, template_set in enumerate(sets):
            if template_set.has_name(name) and template_set.body != contents:
                self._splice(index, template_set, contents)

    def patch(
        self,
        patch_type: PatchType | str,
        method: PatchMethod | str,
        names: Iterable[str],
        contents: str = '',
        pattern: str | re.Pattern[str] | None = None,
    ) -> bool:
        """Patch every set matched by `names`.

        Args:
            patch_type: `add` or `delete`. `delete` only goes with `replace`
                and `reg_replace`.
            method: One of the PatchMethod values.
            names: Set names; `*` addresses the whole document.
            contents: Text to insert, wrapped in add markers.
            pattern: Literal search text, or a regex for `reg_replace`.

        Returns:
            True when the document changed.
        """
        kind, how = validate_patch(patch_type, method, pattern)
        names = [names] if isinstance(names, str) else list(names)
        insertion = self.codec.wrap(contents, MarkerType.ADD)

        def edit(region: str) -> str:
            return self._edit(region, kind, how, insertion, pattern)

        before = self._contents
        for name in names:
            if name == WILDCARD:
                self._patch_document(edit)
            else:
                self._patch_sets(name, edit)

        changed = before != self._contents
        logger.debug(
            'patch_processed',
            template=self.template,
            type=kind.value,
            method=how.value,
            names=names,
            changed=changed,
        )
        return changed

    def rollback(self, *, strict: bool = True) -> bool:
        """Remove everything this namespace added and re-enable what it disabled.

        Added spans are dropped together with their markers; disabled spans
        lose their markers and become live text again.

        Args:
            strict: Check first that the add markers of the namespace are
                balanced and not nested. Without it malformed add spans may
                be over- or under-matched. Delete markers are stripped one by
                one, so their order never matters.

        Returns:
            True when the document changed.

        Raises:
            UnbalancedMarkersError: in strict mode, when the add markers are
                dangling, nested or out of order.
        """
        if strict:
            self._check_balance(MarkerType.ADD)

        before = self._contents
        contents = self.codec.add_span_pattern().sub('', before)
        contents = self.codec.delete_marker_pattern().sub('', contents)
        if contents == before:
            logger.debug('rollback_nothing_to_do', template=self.template)
            return False

        self._contents = contents
        self._changed = True
        self._index.rebuild(contents)
        logger.info(
            'rollback_applied',
            template=self.template,
            namespace=self.namespace,
            _display_level=1,
        )
        return True

    def _edit(
        self,
        region: str,
        kind: PatchType,
        how: PatchMethod,
        insertion: str,
        pattern: str | re.Pattern[str] | None,
    ) -> str:
        check = self.check_duplicates
        markers = self.codec.marker_pattern()
        if how is PatchMethod.TO_BEGINNING:
            return prepend(region, insertion, check_duplicates=check)
        if how is PatchMethod.TO_END:
            return append(region, insertion, check_duplicates=check)
        if how is PatchMethod.BEFORE:
            return insert_before(region, pattern, insertion, check_duplicates=check, markers=markers)
        if how is PatchMethod.AFTER:
            return insert_after(region, pattern, insertion, check_duplicates=check, markers=markers)

        literal = pattern
        if how is PatchMethod.REG_REPLACE:
            literal = first_match(region, pattern, markers)
            if literal is None:
                return region
        return replace_all(
            region,
            literal,
            insertion,
            self.codec.pair(MarkerType.DELETE),
            keep_original=kind is PatchType.ADD,
            check_duplicates=check,
            markers=markers,
        )

    def _patch_document(self, edit: Callable[[str], str]) -> None:
        contents = edit(self._contents)
        if contents != self._contents:
            self._contents = contents
            self._changed = True
            self._index.invalidate()

    def _patch_sets(self, name: str, edit: Callable[[str], str]) -> None:
        sets = self._index.get(self._contents)
        matched = 0
        for index, template_set in enumerate(sets):
            if not template_set.has_name(name):
                continue
            matched += 1
            body = edit(template_set.body)
            if body != template_set.body:
                self._splice(index, template_set, body)
        if not matched:
            logger.debug('set_not_found', template=self.template, name=name)

    def _splice(self, index: int, template_set: TemplateSet, body: str) -> None:
        updated = template_set.with_body(body)
        # sets never overlap, so the first remaining occurrence is this set
        self._contents = self._contents.replace(template_set.raw, updated.raw, 1)
        self._index.update(index, updated)
        self._changed = True

    def _check_balance(self, marker_type: MarkerType) -> None:
        prefix = f"Unbalanced '{marker_type.value}' markers of namespace '{self.namespace}'"
        depth = 0
        for match in self.codec.token_pattern(marker_type).finditer(self._contents):
            opening = match.group('opening') is not None
            if opening == (depth == 0):
                depth = 1 if opening else 0
                continue
            line = self._contents.count('\n', 0, match.start()) + 1
            problem = 'nested opening' if opening else 'unexpected closing'
            msg = f'{prefix}: {problem} marker at line {line}'
            raise UnbalancedMarkersError(msg)
        if depth:
            msg = f'{prefix}: opening marker is never closed'
            raise UnbalancedMarkersError(msg)
