import difflib

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from tplpatch.sets import TemplateSet

BODY_PREVIEW_LENGTH = 60


def unified_diff(before: str, after: str, name: str) -> str:
    """Return a unified diff between two versions of a template."""
    return ''.join(
        difflib.unified_diff(
            before.splitlines(keepends=True),
            after.splitlines(keepends=True),
            fromfile=f'a/{name}',
            tofile=f'b/{name}',
        ),
    )


def rich_print_diffs(diffs: list[tuple[str, str]]) -> None:
    """Print diffs using rich formatting.

    Args:
        diffs: List of tuples (template_name, unified_diff)
    """
    console = Console(force_terminal=True)  # Enable colors in CI
    for name, diff in diffs:
        console.rule(f'[bold]{name}')
        syntax = Syntax(diff, 'diff', theme='ansi_dark', word_wrap=False)
        console.print(syntax, soft_wrap=True)


def _preview(body: str) -> str:
    text = body.replace('\r', '\\r').replace('\n', '\\n')
    if len(text) > BODY_PREVIEW_LENGTH:
        return text[: BODY_PREVIEW_LENGTH - 1] + '…'
    return text


def rich_print_sets(template: str, sets: list[TemplateSet]) -> None:
    """Print the sets of a template as a table."""
    table = Table(title=template)
    table.add_column('#', justify='right')
    table.add_column('names')
    table.add_column('scope')
    table.add_column('filter')
    table.add_column('length', justify='right')
    table.add_column('body')
    for position, template_set in enumerate(sets, start=1):
        table.add_row(
            str(position),
            '; '.join(template_set.names),
            template_set.scope,
            template_set.filter or '',
            str(len(template_set.body)),
            _preview(template_set.body),
        )
    Console().print(table)
