"""Template storages.

The updater only needs the three calls of the `Storage` protocol; the two
implementations here cover plain files and in-memory use.
"""

from tplpatch.storage.base import Storage
from tplpatch.storage.filesystem import FileSystemStorage
from tplpatch.storage.memory import MemoryStorage

__all__ = [
    'FileSystemStorage',
    'MemoryStorage',
    'Storage',
]
