"""Key ring interface."""

import logging
from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Union

from ..constants import StoreBackend
from ..crypto.derivation import derive
from ..crypto.entry import KeyEntry
from ..exceptions import KeyRingError, ValidationError
from ..types.common import Address, AddressLike, Signature
from ..utils.encoding import decode_address
from ..utils.validation import validate_address, validate_message
from .key_file import KeyFile

__all__ = ["KeyRing"]

logger = logging.getLogger(__name__)


class KeyRing(ABC):
    """
    Abstract key store mapping addresses to key entries.

    Backends implement :meth:`get`, :meth:`insert`, :meth:`addresses` and
    ``__len__``; derivation and signing are shared. Use :meth:`init` to
    obtain a store for a backend.
    """

    backend: StoreBackend

    def __init__(self) -> None:
        self._logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @classmethod
    def init(cls, backend: Union[StoreBackend, str] = StoreBackend.MEMORY) -> "KeyRing":
        """
        Create an empty key ring.

        Args:
            backend: Storage backend; only ``StoreBackend.MEMORY`` exists

        Raises:
            KeyRingError: If the backend is unknown
        """
        try:
            backend = StoreBackend(backend)
        except ValueError as e:
            raise KeyRingError(f"Unknown key store backend: {backend!r}") from e

        if backend is StoreBackend.MEMORY:
            from .memory import MemoryKeyRing
            return MemoryKeyRing()

        raise KeyRingError(f"Unsupported key store backend: {backend.value}")

    @abstractmethod
    def get(self, address: AddressLike) -> KeyEntry:
        """
        Return the entry stored for an address.

        Raises:
            InvalidKeyError: If no entry exists
        """
        raise NotImplementedError

    @abstractmethod
    def insert(self, address: AddressLike, entry: KeyEntry) -> Optional[KeyEntry]:
        """
        Store an entry, replacing any existing one.

        Returns:
            The replaced entry, or None
        """
        raise NotImplementedError

    @abstractmethod
    def addresses(self) -> List[Address]:
        """Stored addresses in ascending byte order."""
        raise NotImplementedError

    @abstractmethod
    def __len__(self) -> int:
        raise NotImplementedError

    def __contains__(self, address: object) -> bool:
        try:
            self.get(address)  # type: ignore[arg-type]
        except (KeyRingError, TypeError):
            return False
        return True

    def __iter__(self) -> Iterator[Address]:
        return iter(self.addresses())

    def add_from_mnemonic(self, mnemonic: str) -> Address:
        """
        Derive a keypair from a mnemonic and store it.

        Nothing is stored if derivation fails.

        Raises:
            InvalidMnemonicError: If the phrase is malformed
            PrivateKeyError: If key construction fails
        """
        address, entry = derive(mnemonic)
        self.insert(address, entry)
        return address

    def add_from_key_file(self, key_file: KeyFile) -> Address:
        """
        Restore a key from a chain ``keys add`` document.

        Raises:
            KeyRingError: If the document's address does not match the
                address derived from its mnemonic
        """
        address, entry = derive(key_file.mnemonic)

        try:
            _, expected = decode_address(key_file.address)
        except ValidationError as e:
            raise KeyRingError(f"Invalid address in key file {key_file.name!r}: {e}") from e

        if expected != address:
            raise KeyRingError(
                f"Key file {key_file.name!r} address {key_file.address} does not match "
                f"derived address {address.hex()}",
                data={"expected": expected.hex(), "derived": address.hex()},
            )

        self.insert(address, entry)
        return address

    def sign(self, address: AddressLike, message: bytes) -> Signature:
        """
        Sign a message with the key stored for an address.

        Args:
            address: Signer address
            message: Raw message bytes

        Returns:
            64-byte compact signature (R || S)

        Raises:
            InvalidKeyError: If no entry exists for the address
        """
        message = validate_message(message)
        entry = self.get(address)
        signature = entry.sign(message)
        self._logger.debug(f"Signed {len(message)} bytes with {validate_address(address).hex()}")
        return signature

    def verify(self, address: AddressLike, message: bytes, signature: bytes) -> bool:
        """
        Verify a signature against the key stored for an address.

        Raises:
            InvalidKeyError: If no entry exists for the address
        """
        entry = self.get(address)
        return entry.verify(validate_message(message), signature)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(backend={self.backend.value}, keys={len(self)})"
