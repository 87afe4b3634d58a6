from pathlib import Path

from hotlog import get_logger

from tplpatch.utils import read_text_utf8, write_text_utf8

logger = get_logger(__name__)


class FileSystemStorage:
    """Templates stored as files below a root directory."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def path_for(self, name: str) -> Path:
        """Return the file path of a template name."""
        return self.root / name

    def load(self, name: str) -> str | None:
        path = self.path_for(name)
        if not path.is_file():
            logger.debug('template_not_found', template=str(path))
            return None
        try:
            return read_text_utf8(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning('template_read_failed', template=str(path), error=str(e))
            return None

    def save(self, name: str, content: str) -> bool:
        path = self.path_for(name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            write_text_utf8(path, content)
        except OSError as e:
            logger.warning('template_write_failed', template=str(path), error=str(e))
            return False
        logger.debug('template_written', template=str(path), size=len(content))
        return True

    def rename(self, old_name: str, new_name: str) -> bool:
        source = self.path_for(old_name)
        target = self.path_for(new_name)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            source.replace(target)
        except OSError as e:
            logger.warning(
                'template_rename_failed',
                source=str(source),
                target=str(target),
                error=str(e),
            )
            return False
        logger.debug('template_renamed', source=str(source), target=str(target))
        return True
