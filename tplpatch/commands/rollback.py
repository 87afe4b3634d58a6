from pathlib import Path

from hotlog import get_logger

from tplpatch.commands.apply import build_updater
from tplpatch.config import load_config
from tplpatch.display import rich_print_diffs, unified_diff
from tplpatch.storage import FileSystemStorage
from tplpatch.version import __version__

logger = get_logger(__name__)


def command(config_path: Path, *, check_only: bool, strict: bool = True) -> int:
    """Roll back every template of a manifest for its namespace."""
    logger.info('running_tplpatch_rollback', version=__version__)

    config = load_config(config_path)
    storage = FileSystemStorage(config.root)
    diffs: list[tuple[str, str]] = []

    for template in config.templates:
        updater = build_updater(storage, config)
        updater.load(template.template)
        original = updater.get_raw_contents()
        if not updater.rollback(strict=strict):
            logger.info('template_has_no_patches', template=template.template, _display_level=1)
            continue
        if check_only:
            diffs.append(
                (template.template, unified_diff(original, updater.get_raw_contents(), template.template)),
            )
            continue
        # only apply writes the manifest backup
        updater.save(template.template)

    if check_only:
        if diffs:
            logger.error(
                'check_results',
                pending=[name for name, _ in diffs],
                suggestion='run `tplpatch rollback` to remove the patches',
            )
            rich_print_diffs(diffs)
        return 2 if diffs else 0
    return 0
