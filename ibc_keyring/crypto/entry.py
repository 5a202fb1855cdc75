"""Key entry: a derived keypair held by the key ring."""

from dataclasses import dataclass, field

from ..exceptions import CryptoError
from ..types.common import Address, PublicKeyBytes, Signature
from .hd import HDNode

__all__ = ["KeyEntry"]


@dataclass(frozen=True)
class KeyEntry:
    """
    Extended public key and its extended private key.

    Entries are values: copying one shares the underlying private key
    buffer instead of duplicating it, and the private half never appears
    in ``repr``.
    """

    public_key: HDNode
    private_key: HDNode = field(repr=False)

    def __post_init__(self) -> None:
        if self.public_key.is_private:
            object.__setattr__(self, "public_key", self.public_key.neuter())
        if not self.private_key.is_private:
            raise CryptoError("Key entry requires an extended private key")
        if self.private_key.public_key != self.public_key.public_key:
            raise CryptoError("Public key does not match private key")

    @classmethod
    def from_node(cls, node: HDNode) -> "KeyEntry":
        """Build entry from an extended private key."""
        return cls(public_key=node.neuter(), private_key=node)

    @property
    def public_key_bytes(self) -> PublicKeyBytes:
        """33-byte compressed public key."""
        return self.public_key.public_key.point

    @property
    def address(self) -> Address:
        return self.public_key.public_key.address()

    def sign(self, message: bytes) -> Signature:
        return self.private_key.get_private_key().sign(message)

    def verify(self, message: bytes, signature: bytes) -> bool:
        return self.public_key.public_key.verify(signature, message)

    def __copy__(self) -> "KeyEntry":
        return self

    def __deepcopy__(self, memo: dict) -> "KeyEntry":
        return self

    def wipe(self) -> None:
        """Zero the private scalar. The entry can no longer sign afterwards."""
        self.private_key.get_private_key().wipe()
