from .loader import load_config, load_config_file, resolve_config
from .models import PatchConfig, TemplateConfig, TplPatchConfig

__all__ = [
    # Models
    'PatchConfig',
    'TemplateConfig',
    'TplPatchConfig',
    # Loader
    'load_config',
    'load_config_file',
    'resolve_config',
]
