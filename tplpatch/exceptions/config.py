from tplpatch.exceptions.core import TplPatchError


class ConfigError(TplPatchError):
    """Base class for configuration-related errors."""

    log_category = 'config_error'


class ConfigValidationError(ConfigError):
    """Patch manifest validation failed (structure, values, etc.)."""

    log_category = 'config_validation_failed'
