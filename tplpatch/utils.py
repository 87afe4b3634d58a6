from pathlib import Path
from typing import IO, Any


def open_utf8(path: Path, mode: str = 'r', **kwargs: Any) -> IO[Any]:
    """Open a text file as UTF-8 without newline translation.

    Templates may use CRLF line endings; markers and set bodies must be
    written back exactly as they were read.
    """
    return path.open(mode, encoding='utf-8', newline='', **kwargs)


def read_text_utf8(path: Path) -> str:
    """Read a whole file as UTF-8, keeping its line endings."""
    with open_utf8(path) as f:
        return f.read()


def write_text_utf8(path: Path, content: str) -> None:
    """Write `content` as UTF-8, keeping its line endings."""
    with open_utf8(path, 'w') as f:
        f.write(content)
