from tplpatch.exceptions.core import TplPatchError


class InvalidArgumentError(TplPatchError, ValueError):
    """Base class for rejected enumerant or argument values."""

    log_category = 'invalid_argument'


class InvalidMarkerTypeError(InvalidArgumentError):
    """Marker type is neither 'add' nor 'delete'."""

    log_category = 'invalid_marker_type'
    code = 4


class InvalidMarkerPositionError(InvalidArgumentError):
    """Marker position is neither 'opening' nor 'closing'."""

    log_category = 'invalid_marker_position'
    code = 5


class InvalidPatchTypeError(InvalidArgumentError):
    """Patch type is neither 'add' nor 'delete'."""

    log_category = 'invalid_patch_type'
    code = 6


class InvalidPatchMethodError(InvalidArgumentError):
    """Unknown patch method, or a method not allowed for the patch type."""

    log_category = 'invalid_patch_method'
    code = 7


class MissingPatternError(InvalidArgumentError):
    """Patch method needs a search pattern but none was passed."""

    log_category = 'missing_patch_pattern'
    code = 8


class UnbalancedMarkersError(TplPatchError):
    """Markers of a namespace are dangling, nested or out of order."""

    log_category = 'unbalanced_markers'
    code = 9


class InvalidPatternError(MissingPatternError):
    """The `reg_replace` search pattern is not a valid regular expression."""

    log_category = 'invalid_patch_pattern'
