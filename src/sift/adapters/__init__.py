"""Store adapters for sift.

- ``sift.adapters.memory``: in-memory transactional store
- ``sift.adapters.siftfile``: the on-disk sift file format
"""

from .memory import MemoryStore, MemoryTransaction, load, save

__all__ = [
    "MemoryStore",
    "MemoryTransaction",
    "load",
    "save",
]
