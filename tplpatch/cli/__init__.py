"""CLI module for tplpatch.

The CLI layer stays thin: each command module defines a Typer command that
parses arguments and calls the business logic in `tplpatch.commands.*` through
`run_cli_command`, which turns return values into exit codes and logs errors.

- `main.py`: the Typer app, its callback (version, verbosity) and command
  registration.
- `apply.py`, `rollback.py`, `sets.py`: one command each.
"""
