from pathlib import Path

import typer

from tplpatch.cli.apply import CONFIG_OPTION
from tplpatch.cli.utils import run_cli_command
from tplpatch.commands.rollback import command

CHECK_OPTION = typer.Option(
    default=False,
    help='Show what rollback would remove without saving',
)
LENIENT_OPTION = typer.Option(
    default=False,
    help='Do not refuse templates whose markers are unbalanced',
)


def rollback(
    config: Path = CONFIG_OPTION,
    *,
    check: bool = CHECK_OPTION,
    lenient: bool = LENIENT_OPTION,
) -> None:
    """Remove every patch of the manifest namespace from its templates."""
    run_cli_command(lambda: command(config, check_only=check, strict=not lenient))
