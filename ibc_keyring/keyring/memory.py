"""In-memory key ring."""

import threading
from typing import Dict, List, Optional

from ..constants import StoreBackend
from ..crypto.entry import KeyEntry
from ..exceptions import InvalidKeyError, ValidationError
from ..types.common import Address, AddressLike, Signature
from ..utils.validation import validate_address
from .base import KeyRing

__all__ = ["MemoryKeyRing"]


class MemoryKeyRing(KeyRing):
    """
    Key ring backed by a dict.

    A single lock guards the map, so concurrent readers never observe a
    half-written entry. Derivation runs outside the lock.
    """

    backend = StoreBackend.MEMORY

    def __init__(self) -> None:
        super().__init__()
        self._store: Dict[Address, KeyEntry] = {}
        self._lock = threading.RLock()

    def get(self, address: AddressLike) -> KeyEntry:
        try:
            key = validate_address(address)
        except ValidationError as e:
            raise InvalidKeyError(b"", f"Invalid address: {e}") from e

        with self._lock:
            entry = self._store.get(key)

        if entry is None:
            self._logger.debug(f"No key for address {key.hex()}")
            raise InvalidKeyError(key)
        return entry

    def insert(self, address: AddressLike, entry: KeyEntry) -> Optional[KeyEntry]:
        if not isinstance(entry, KeyEntry):
            raise ValidationError(f"Expected KeyEntry, got {type(entry).__name__}")
        key = validate_address(address)

        with self._lock:
            previous = self._store.get(key)
            self._store[key] = entry

        if previous is None:
            self._logger.info(f"Added key for address {key.hex()}")
        elif previous is not entry:
            self._logger.warning(f"Replaced key for address {key.hex()}")
        return previous

    def sign(self, address: AddressLike, message: bytes) -> Signature:
        with self._lock:
            return super().sign(address, message)

    def addresses(self) -> List[Address]:
        with self._lock:
            return sorted(self._store)

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
