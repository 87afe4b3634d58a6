"""Set grammar and the lazily built set index.

A set is a named region of a template:

    <!--#set var="name1;name2" filter="..." value="payload"-->

`var` may be prefixed with `GS` or `GD`, the filter attribute is optional and
a single line break right after the tag belongs to the set. The grammar is a
single compiled regex; nothing more elaborate is needed.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, replace

from hotlog import get_logger

logger = get_logger(__name__)

SET_PATTERN = re.compile(
    r'(<!--#set +(GS|GD)?var=")(.+?)"(\s+filter="(.*?)")?'
    r'(\s+value=")(.*?)("\s*-->)(\r?\n?)',
    re.DOTALL,
)


@dataclass(frozen=True)
class TemplateSet:
    """Read view of one set, as matched in the document.

    The fields keep every piece of the original text so that `render()`
    with the unchanged body gives back `raw` byte for byte.
    """

    raw: str
    names: tuple[str, ...]
    body: str
    scope: str = ''
    filter: str | None = None
    head: str = ''
    names_source: str = ''
    filter_source: str = ''
    value_prefix: str = ''
    tail: str = ''

    @classmethod
    def from_match(cls, match: re.Match[str]) -> 'TemplateSet':
        """Build a set view from a SET_PATTERN match."""
        names_source = match.group(3)
        return cls(
            raw=match.group(0),
            names=tuple(name.strip() for name in names_source.split(';')),
            body=match.group(7),
            scope=match.group(2) or '',
            filter=match.group(5),
            head=match.group(1),
            names_source=names_source,
            filter_source=match.group(4) or '',
            value_prefix=match.group(6),
            tail=match.group(8) + match.group(9),
        )

    def has_name(self, name: str) -> bool:
        """Return True when `name` is one of the set names."""
        return name in self.names

    def render(self, body: str | None = None) -> str:
        """Return the set text, optionally with a different body."""
        if body is None:
            body = self.body
        return (
            f'{self.head}{self.names_source}"{self.filter_source}'
            f'{self.value_prefix}{body}{self.tail}'
        )

    def with_body(self, body: str) -> 'TemplateSet':
        """Return a copy of this set carrying `body`."""
        return replace(self, raw=self.render(body), body=body)


def parse_set(raw: str) -> TemplateSet | None:
    """Parse the first set found in `raw`, or return None."""
    match = SET_PATTERN.search(raw)
    if match is None:
        return None
    return TemplateSet.from_match(match)


def scan_sets(document: str) -> list[TemplateSet]:
    """Return every set of the document in source order."""
    return [TemplateSet.from_match(m) for m in SET_PATTERN.finditer(document)]


class SetIndex:
    """Memoized list of the sets of a document.

    The index never owns the text: it is built from the document on first
    access and must be invalidated whenever the document changes in a way the
    index does not track itself (load, raw content replacement, rollback,
    whole-document patches).
    """

    def __init__(self, scanner: Callable[[str], list[TemplateSet]] = scan_sets) -> None:
        self._scanner = scanner
        self._sets: list[TemplateSet] | None = None

    @property
    def is_valid(self) -> bool:
        """True when the index holds a computed list."""
        return self._sets is not None

    def get(self, document: str) -> list[TemplateSet]:
        """Return the sets, scanning `document` if the index is stale."""
        if self._sets is None:
            self._sets = self._scanner(document)
            logger.debug('set_index_built', sets=len(self._sets))
        return self._sets

    def invalidate(self) -> None:
        """Drop the computed list so the next access rescans."""
        if self._sets is not None:
            logger.debug('set_index_invalidated')
        self._sets = None

    def update(self, index: int, template_set: TemplateSet) -> None:
        """Replace one entry after its text was spliced into the document."""
        if self._sets is None:
            msg = 'Cannot update an unbuilt set index'
            raise RuntimeError(msg)
        self._sets[index] = template_set

    def rebuild(self, document: str) -> list[TemplateSet]:
        """Force a full rescan of `document`."""
        self._sets = None
        return self.get(document)
