from structlog.types import FilteringBoundLogger


class TplPatchError(Exception):
    """Base exception for all tplpatch errors.

    Each exception defines a log_category for consistent logging and a
    numeric code that callers can switch on without matching class names.
    """

    log_category: str = 'tplpatch_error'
    code: int = 0

    @classmethod
    def get_log_category(cls) -> str:
        """Get the log category for this exception type."""
        return cls.log_category


def log_exception(logger: FilteringBoundLogger, exc: Exception) -> None:
    """Log an exception with the appropriate category.

    If the exception is a TplPatchError, uses its log_category and code.
    Otherwise uses a generic category based on exception type.

    Args:
        logger: The logger instance to use (from hotlog.get_logger)
        exc: The exception to log
    """
    if isinstance(exc, TplPatchError):
        logger.exception(exc.get_log_category(), error=str(exc), code=exc.code)
        return
    logger.exception(exc.__class__.__name__.lower(), error=str(exc))
