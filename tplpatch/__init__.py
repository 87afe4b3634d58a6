from .markers import MarkerCodec, MarkerPosition, MarkerType
from .sets import TemplateSet
from .storage import FileSystemStorage, MemoryStorage, Storage
from .updater import PatchMethod, PatchType, TemplateUpdater
from .version import __version__

__all__ = [
    'FileSystemStorage',
    'MarkerCodec',
    'MarkerPosition',
    'MarkerType',
    'MemoryStorage',
    'PatchMethod',
    'PatchType',
    'Storage',
    'TemplateSet',
    'TemplateUpdater',
    '__version__',
]
