from pathlib import Path

from hotlog import get_logger

from tplpatch.config import TemplateConfig, TplPatchConfig, load_config
from tplpatch.display import rich_print_diffs, unified_diff
from tplpatch.storage import FileSystemStorage, Storage
from tplpatch.updater import TemplateUpdater
from tplpatch.version import __version__

logger = get_logger(__name__)


def build_updater(storage: Storage, config: TplPatchConfig) -> TemplateUpdater:
    """Create an updater for the namespace and marker settings of a manifest."""
    return TemplateUpdater(
        storage,
        config.namespace,
        brand=config.brand,
        check_duplicates=config.check_duplicates,
    )


def apply_template(updater: TemplateUpdater, template: TemplateConfig) -> str:
    """Load a template and apply its patches in order.

    Returns:
        The template contents before patching.
    """
    updater.load(template.template)
    original = updater.get_raw_contents()
    for patch in template.patches:
        updater.patch(
            patch.type,
            patch.method,
            patch.names,
            patch.content or '',
            patch.pattern,
        )
    return original


def command(config_path: Path, *, check_only: bool) -> int:
    """Apply the patches of a manifest; with `check_only` only report them."""
    logger.info('running_tplpatch', version=__version__)

    config = load_config(config_path)
    storage = FileSystemStorage(config.root)
    diffs: list[tuple[str, str]] = []

    for template in config.templates:
        updater = build_updater(storage, config)
        original = apply_template(updater, template)
        if not updater.changed:
            logger.info('template_up_to_date', template=template.template, _display_level=1)
            continue
        if check_only:
            diffs.append(
                (template.template, unified_diff(original, updater.get_raw_contents(), template.template)),
            )
            continue
        updater.save(template.template, template.backup or '')

    if check_only:
        if diffs:
            logger.error(
                'check_results',
                pending=[name for name, _ in diffs],
                suggestion='run `tplpatch apply` to apply changes',
            )
            rich_print_diffs(diffs)
        return 2 if diffs else 0
    return 0
