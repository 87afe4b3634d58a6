from pathlib import Path

import yaml
from hotlog import get_logger

from tplpatch.config.models import PatchConfig, TemplateConfig, TplPatchConfig
from tplpatch.exceptions import ConfigValidationError
from tplpatch.utils import open_utf8, read_text_utf8

logger = get_logger(__name__)


def load_config_file(yaml_file: Path) -> TplPatchConfig:
    """Load and validate a YAML manifest without resolving paths.

    Args:
        yaml_file: Path to the YAML manifest.

    Returns:
        A validated TplPatchConfig instance (paths not yet resolved).
    """
    with open_utf8(yaml_file) as f:
        data = yaml.safe_load(f) or {}
    config = TplPatchConfig.model_validate(data)
    config.config_file = yaml_file
    return config


def _resolve_patch(patch: PatchConfig, base_dir: Path) -> PatchConfig:
    """Inline `content_file` so the patch carries its text."""
    if patch.content_file is None:
        return patch.model_copy(update={'content': patch.content or ''})

    path = patch.content_file if patch.content_file.is_absolute() else base_dir / patch.content_file
    if not path.is_file():
        msg = f'Content file does not exist: {path}'
        raise ConfigValidationError(msg)
    logger.debug('content_file_loaded', file=str(path))
    return patch.model_copy(update={'content': read_text_utf8(path), 'content_file': None})


def resolve_config(config: TplPatchConfig) -> TplPatchConfig:
    """Resolve the storage root and content files relative to the manifest."""
    base_dir = config.config_file.resolve().parent if config.config_file else Path.cwd()
    root = config.root if config.root.is_absolute() else base_dir / config.root
    templates = [
        TemplateConfig(
            template=tpl.template,
            backup=tpl.backup,
            patches=[_resolve_patch(p, base_dir) for p in tpl.patches],
        )
        for tpl in config.templates
    ]
    return config.model_copy(update={'root': root.resolve(), 'templates': templates})


def load_config(yaml_file: Path) -> TplPatchConfig:
    """Load and resolve a patch manifest from a YAML file.

    Args:
        yaml_file: Path to the YAML manifest.

    Returns:
        A resolved TplPatchConfig, with an absolute root and every patch
        content inlined.
    """
    config = resolve_config(load_config_file(yaml_file))
    logger.debug(
        'config_loaded',
        config=str(yaml_file),
        namespace=config.namespace,
        templates=[t.template for t in config.templates],
    )
    return config
