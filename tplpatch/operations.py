"""Text transformations applied to one region (a set body or a whole document).

Every function takes the region text and returns the new text. When an edit
is skipped (pattern not found, or the same wrapped insertion is already in
place) the region is returned unchanged; skipping is never an error.

The pattern searches accept a `markers` regex. Occurrences overlapping one
of its matches are part of a marker, not of the template text, and are
never edited.
"""

import re

from hotlog import get_logger

from tplpatch.markers import MarkerPair

logger = get_logger(__name__)


def _marker_spans(region: str, markers: re.Pattern[str] | None) -> list[tuple[int, int]]:
    if markers is None:
        return []
    return [m.span() for m in markers.finditer(region)]


def _inside_marker(spans: list[tuple[int, int]], start: int, end: int) -> bool:
    return any(span_start < end and start < span_end for span_start, span_end in spans)


def find_unmarked(
    region: str,
    pattern: str,
    start: int = 0,
    markers: re.Pattern[str] | None = None,
) -> int:
    """Return the index of the first occurrence of `pattern` outside markers.

    Args:
        region: Text to search.
        pattern: Literal text to find; empty never matches.
        start: Index the search starts from.
        markers: Regex of the marker tokens to step over.

    Returns:
        The index of the occurrence, or -1.
    """
    if not pattern:
        return -1
    spans = _marker_spans(region, markers)
    pos = region.find(pattern, start)
    while pos != -1 and _inside_marker(spans, pos, pos + len(pattern)):
        pos = region.find(pattern, pos + 1)
    return pos


def prepend(region: str, insertion: str, *, check_duplicates: bool = True) -> str:
    """Add `insertion` to the beginning of the region."""
    if check_duplicates and region.startswith(insertion):
        logger.debug('duplicate_patch_skipped', method='to_beginning')
        return region
    return insertion + region


def append(region: str, insertion: str, *, check_duplicates: bool = True) -> str:
    """Add `insertion` to the end of the region."""
    if check_duplicates and region.endswith(insertion):
        logger.debug('duplicate_patch_skipped', method='to_end')
        return region
    return region + insertion


def insert_before(
    region: str,
    pattern: str,
    insertion: str,
    *,
    check_duplicates: bool = True,
    markers: re.Pattern[str] | None = None,
) -> str:
    """Insert `insertion` right before the first occurrence of `pattern`."""
    pos = find_unmarked(region, pattern, markers=markers)
    if pos == -1:
        logger.debug('pattern_not_found', method='before', pattern=pattern)
        return region
    if check_duplicates and pos >= len(insertion) and region[pos - len(insertion) : pos] == insertion:
        logger.debug('duplicate_patch_skipped', method='before')
        return region
    return region[:pos] + insertion + region[pos:]


def insert_after(
    region: str,
    pattern: str,
    insertion: str,
    *,
    check_duplicates: bool = True,
    markers: re.Pattern[str] | None = None,
) -> str:
    """Insert `insertion` right after the first occurrence of `pattern`."""
    pos = find_unmarked(region, pattern, markers=markers)
    if pos == -1:
        logger.debug('pattern_not_found', method='after', pattern=pattern)
        return region
    pos += len(pattern)
    if check_duplicates and region.startswith(insertion, pos):
        logger.debug('duplicate_patch_skipped', method='after')
        return region
    return region[:pos] + insertion + region[pos:]


def replace_all(
    region: str,
    pattern: str,
    insertion: str,
    disabled: MarkerPair,
    *,
    keep_original: bool,
    check_duplicates: bool = True,
    markers: re.Pattern[str] | None = None,
) -> str:
    """Replace every occurrence of `pattern` by `insertion`.

    With `keep_original` each occurrence stays in the text, wrapped in the
    `disabled` markers, in front of the insertion; rollback can then restore
    it. Without it the occurrence is dropped.

    With duplicate checking, an occurrence directly preceded by the disabled
    opening marker was patched before: the scan jumps over the whole disabled
    span and the insertion that follows it.

    Args:
        region: Text to scan.
        pattern: Literal text to replace.
        insertion: Already wrapped replacement text.
        disabled: Markers used to disable the original occurrence.
        keep_original: Whether to keep the occurrence as disabled text.
        check_duplicates: Whether to skip already patched occurrences.
        markers: Regex of the marker tokens; occurrences inside them are
            left alone.

    Returns:
        The patched region.
    """
    if not pattern:
        logger.debug('pattern_not_found', method='replace', pattern=pattern)
        return region

    replacement = (disabled.wrap(pattern) if keep_original else '') + insertion
    guard = disabled.opening
    offset = 0
    replaced = 0
    while True:
        pos = find_unmarked(region, pattern, offset, markers)
        if pos == -1:
            break
        if check_duplicates and pos >= len(guard) and region[pos - len(guard) : pos] == guard:
            offset = pos + len(pattern)
            if region.startswith(disabled.closing, offset):
                offset += len(disabled.closing)
                if region.startswith(insertion, offset):
                    offset += len(insertion)
            logger.debug('duplicate_patch_skipped', method='replace', position=pos)
            continue
        region = region[:pos] + replacement + region[pos + len(pattern) :]
        offset = pos + len(replacement)
        replaced += 1

    logger.debug('pattern_replaced', pattern=pattern, occurrences=replaced)
    return region


def first_match(
    region: str,
    regex: str | re.Pattern[str],
    markers: re.Pattern[str] | None = None,
) -> str | None:
    """Return the text of the first regex match outside markers, if any.

    Only the first match is used by `reg_replace`; its literal text is then
    handed to `replace_all`.
    """
    spans = _marker_spans(region, markers)
    for match in re.finditer(regex, region):
        if match.group(0) and not _inside_marker(spans, *match.span()):
            return match.group(0)
    logger.debug('regex_no_match', pattern=getattr(regex, 'pattern', regex))
    return None
