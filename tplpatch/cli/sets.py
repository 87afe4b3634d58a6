from pathlib import Path

import typer

from tplpatch.cli.utils import run_cli_command
from tplpatch.commands.sets import command

TEMPLATE_ARGUMENT = typer.Argument(
    help='Template name, relative to the root directory',
)
ROOT_OPTION = typer.Option(
    Path(),
    '--root',
    help='Directory holding the templates',
)
NAME_OPTION = typer.Option(
    None,
    '--name',
    help='Only list sets carrying this name',
)


def sets(
    template: str = TEMPLATE_ARGUMENT,
    root: Path = ROOT_OPTION,
    name: str | None = NAME_OPTION,
) -> None:
    """List the sets of a template."""
    run_cli_command(lambda: command(template, root, name))
