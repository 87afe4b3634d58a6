from pathlib import Path

import typer

from tplpatch.cli.utils import run_cli_command
from tplpatch.commands.apply import command

# Module-level constants for Typer options to avoid B008
DEFAULT_CONFIG = Path('tplpatch.yaml')
CONFIG_OPTION = typer.Option(
    DEFAULT_CONFIG,
    '--config',
    help='Path to the tplpatch YAML manifest',
)
CHECK_OPTION = typer.Option(
    default=False,
    help='Show pending changes without saving (exit code 2 when there are some)',
)


def apply(
    config: Path = CONFIG_OPTION,
    *,
    check: bool = CHECK_OPTION,
) -> None:
    """Apply the manifest patches to its templates."""
    run_cli_command(lambda: command(config, check_only=check))
