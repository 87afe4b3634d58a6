"""Marker codec.

Every span inserted or disabled by the updater is wrapped in a pair of
markers written in the host template comment syntax (`##-- ... --##`). The
markers carry a namespace token (usually the id of the installing module) so
that rollback can find exactly the spans one installer produced, without any
side-channel change log.

Layout for namespace `mod` and the default brand:

    ##-- TPLPATCH[added] mod { --##          add, opening
    ##-- } TPLPATCH[added] mod --##          add, closing
    ##-- TPLPATCH[deleted] mod { --####--    delete, opening
    --####-- } TPLPATCH[deleted] mod --##    delete, closing

The delete pair opens an extra comment right after its opening marker and
closes it right before its closing marker, so the wrapped original text is
commented out in place rather than removed.
"""

import re
from dataclasses import dataclass
from enum import Enum

from tplpatch.exceptions import InvalidMarkerPositionError, InvalidMarkerTypeError

DEFAULT_BRAND = 'TPLPATCH'
COMMENT_OPEN = '##--'
COMMENT_CLOSE = '--##'


class MarkerPosition(str, Enum):
    """Which side of a wrapped span a marker sits on."""

    OPENING = 'opening'
    CLOSING = 'closing'


class MarkerType(str, Enum):
    """Whether a marker records added text or disabled original text."""

    ADD = 'add'
    DELETE = 'delete'


_TYPE_LABELS = {
    MarkerType.ADD: 'added',
    MarkerType.DELETE: 'deleted',
}


@dataclass(frozen=True)
class MarkerPair:
    """Opening and closing marker of one category."""

    opening: str
    closing: str

    def wrap(self, text: str) -> str:
        """Return `text` enclosed in this pair."""
        return f'{self.opening}{text}{self.closing}'


def coerce_marker_type(value: 'MarkerType | str') -> MarkerType:
    """Convert a raw value into a MarkerType or raise InvalidMarkerTypeError."""
    try:
        return MarkerType(value)
    except ValueError:
        msg = f"Invalid marker type '{value}' passed"
        raise InvalidMarkerTypeError(msg) from None


def coerce_marker_position(value: 'MarkerPosition | str') -> MarkerPosition:
    """Convert a raw value into a MarkerPosition or raise InvalidMarkerPositionError."""
    try:
        return MarkerPosition(value)
    except ValueError:
        msg = f"Invalid marker position '{value}' passed"
        raise InvalidMarkerPositionError(msg) from None


class MarkerCodec:
    """Generates and recognizes the markers of one namespace."""

    def __init__(self, namespace: str, brand: str = DEFAULT_BRAND) -> None:
        self.namespace = namespace
        self.brand = brand

    def get_marker(
        self,
        position: MarkerPosition | str,
        marker_type: MarkerType | str,
    ) -> str:
        """Return the marker string for a position and category.

        Args:
            position: `opening` or `closing`.
            marker_type: `add` or `delete`.

        Returns:
            The marker text as embedded in documents.

        Raises:
            InvalidMarkerTypeError: when `marker_type` is not recognized.
            InvalidMarkerPositionError: when `position` is not recognized.
        """
        # type first: callers rely on the type error winning when both are bad
        kind = coerce_marker_type(marker_type)
        side = coerce_marker_position(position)

        label = f'{self.brand}[{_TYPE_LABELS[kind]}] {self.namespace}'
        if side is MarkerPosition.OPENING:
            marker = f'{COMMENT_OPEN} {label} {{ {COMMENT_CLOSE}'
            if kind is MarkerType.DELETE:
                marker += COMMENT_OPEN
        else:
            marker = f'{COMMENT_OPEN} }} {label} {COMMENT_CLOSE}'
            if kind is MarkerType.DELETE:
                marker = COMMENT_CLOSE + marker
        return marker

    def pair(self, marker_type: MarkerType | str) -> MarkerPair:
        """Return both markers of a category."""
        return MarkerPair(
            opening=self.get_marker(MarkerPosition.OPENING, marker_type),
            closing=self.get_marker(MarkerPosition.CLOSING, marker_type),
        )

    def wrap(self, text: str, marker_type: MarkerType | str) -> str:
        """Return `text` wrapped in the markers of a category."""
        return self.pair(marker_type).wrap(text)

    def add_span_pattern(self) -> re.Pattern[str]:
        """Regex matching one add-wrapped span, content included (non-greedy)."""
        markers = self.pair(MarkerType.ADD)
        return re.compile(
            re.escape(markers.opening) + r'.*?' + re.escape(markers.closing),
            re.DOTALL,
        )

    def delete_marker_pattern(self) -> re.Pattern[str]:
        """Regex matching any single delete marker of this namespace."""
        markers = self.pair(MarkerType.DELETE)
        return re.compile(
            re.escape(markers.opening) + '|' + re.escape(markers.closing),
        )

    def marker_pattern(self) -> re.Pattern[str]:
        """Regex matching any of the four markers of this namespace."""
        markers: list[str] = []
        for marker_type in MarkerType:
            pair = self.pair(marker_type)
            markers += [pair.opening, pair.closing]
        markers.sort(key=len, reverse=True)
        return re.compile('|'.join(re.escape(marker) for marker in markers))

    def token_pattern(self, marker_type: MarkerType | str) -> re.Pattern[str]:
        """Regex matching the opening or the closing marker of a category.

        The opening marker is captured in group `opening`, which lets a scanner
        tell the two sides apart while walking the document in order.
        """
        markers = self.pair(marker_type)
        return re.compile(
            f'(?P<opening>{re.escape(markers.opening)})|{re.escape(markers.closing)}',
        )
