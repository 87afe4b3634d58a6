from tplpatch.exceptions.config import (
    ConfigError,
    ConfigValidationError,
)
from tplpatch.exceptions.core import TplPatchError, log_exception
from tplpatch.exceptions.patch import (
    InvalidArgumentError,
    InvalidMarkerPositionError,
    InvalidMarkerTypeError,
    InvalidPatchMethodError,
    InvalidPatchTypeError,
    InvalidPatternError,
    MissingPatternError,
    UnbalancedMarkersError,
)
from tplpatch.exceptions.storage import (
    CannotBackupError,
    CannotLoadError,
    CannotSaveError,
    StorageError,
)

__all__ = [
    'CannotBackupError',
    'CannotLoadError',
    'CannotSaveError',
    'ConfigError',
    'ConfigValidationError',
    'InvalidArgumentError',
    'InvalidMarkerPositionError',
    'InvalidMarkerTypeError',
    'InvalidPatchMethodError',
    'InvalidPatchTypeError',
    'InvalidPatternError',
    'MissingPatternError',
    'StorageError',
    'TplPatchError',
    'UnbalancedMarkersError',
    'log_exception',
]
