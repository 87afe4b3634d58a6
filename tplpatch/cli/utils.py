from collections.abc import Callable

import typer
from hotlog import configure_logging, get_logger, resolve_verbosity

from tplpatch.exceptions import log_exception

logger = get_logger(__name__)


def setup_logging(verbose: int) -> None:
    """Configure hotlog from the count of `-v` flags given to `tplpatch`."""
    configure_logging(verbosity=resolve_verbosity(verbose=verbose))
    logger.debug('logging_configured', verbose=verbose)


def run_cli_command(func: Callable[[], int]) -> None:
    """Execute a CLI command function with proper exception handling.

    Any exception is logged and results in typer.Exit(1); successful
    execution results in typer.Exit(exit_code).

    Args:
        func: A callable that takes no arguments and returns an exit code (int)
    """
    try:
        exit_code = func()
    except Exception as err:
        log_exception(logger, err)
        raise typer.Exit(1) from err
    else:
        raise typer.Exit(exit_code)
