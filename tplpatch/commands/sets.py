from pathlib import Path

from hotlog import get_logger

from tplpatch.display import rich_print_sets
from tplpatch.storage import FileSystemStorage
from tplpatch.updater import TemplateUpdater

logger = get_logger(__name__)


def command(template: str, root: Path, name: str | None = None) -> int:
    """List the sets of a template, optionally only those carrying `name`."""
    updater = TemplateUpdater(FileSystemStorage(root), namespace='')
    updater.load(template)

    if name:
        sets = [s for s in map(updater.parse_set, updater.get_sets_by_name(name)) if s is not None]
    else:
        sets = updater.get_sets()

    logger.debug('sets_listed', template=template, name=name, count=len(sets))
    rich_print_sets(template, sets)
    return 0 if sets or not name else 1
