import typer
from hotlog import get_logger, verbosity_option

from tplpatch.cli.apply import apply
from tplpatch.cli.rollback import rollback
from tplpatch.cli.sets import sets
from tplpatch.cli.utils import setup_logging
from tplpatch.version import __version__

logger = get_logger(__name__)

app = typer.Typer(no_args_is_help=True)

VERSION_OPTION = typer.Option(
    default=False,
    help='Show version and exit',
)


@app.callback(invoke_without_command=True)
def main_callback(
    *,
    verbose: int = verbosity_option,
    version: bool = VERSION_OPTION,
) -> None:
    """tplpatch - Patch template sets and roll the patches back."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(0)

    setup_logging(verbose)


app.command()(apply)
app.command()(rollback)
app.command()(sets)
