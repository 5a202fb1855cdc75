"""Key ring: derived keypairs stored by address."""

from ..constants import StoreBackend
from ..crypto.entry import KeyEntry
from .base import KeyRing
from .key_file import KeyFile
from .memory import MemoryKeyRing

__all__ = [
    "KeyRing",
    "MemoryKeyRing",
    "KeyEntry",
    "KeyFile",
    "StoreBackend",
]
