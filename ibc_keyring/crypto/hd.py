"""Hierarchical Deterministic key derivation (BIP32) for the IBC key ring."""

import hmac
import hashlib
from typing import Optional, Tuple

from coincurve import PublicKey as SecpPublicKey

from ..constants import (
    BIP32_SEED_KEY,
    HARDENED_OFFSET,
    SECP256K1_ORDER as N,
)
from ..crypto.keys import PrivateKey, PublicKey
from ..exceptions import CryptoError, PrivateKeyError, ValidationError
from ..types.common import ChainCode
from ..utils.encoding import hash160

__all__ = ["HDNode", "parse_path", "format_path"]

MAX_DEPTH = 255


def parse_path(path: str) -> Tuple[int, ...]:
    """
    Parse a BIP32 path like ``m/44'/118'/0'/0/0`` into child indexes.

    Hardened components may be marked with ``'``, ``h`` or ``H``.

    Raises:
        ValidationError: If a component is malformed or out of range
    """
    if not isinstance(path, str):
        raise ValidationError(f"Derivation path must be a string, got {type(path).__name__}")

    components = path.strip().split("/")
    if components[0] not in ("m", "M"):
        raise ValidationError(f"Derivation path must start with 'm': {path!r}")

    indexes = []
    for component in components[1:]:
        hardened = component[-1:] in ("'", "h", "H")
        digits = component[:-1] if hardened else component
        if not (digits.isascii() and digits.isdigit()):
            raise ValidationError(f"Invalid derivation path component: {component!r}")

        index = int(digits)
        if index >= HARDENED_OFFSET:
            raise ValidationError(f"Derivation index out of range: {component!r}")

        indexes.append(index + HARDENED_OFFSET if hardened else index)

    return tuple(indexes)


def format_path(indexes: Tuple[int, ...]) -> str:
    """Inverse of :func:`parse_path`."""
    parts = ["m"]
    for index in indexes:
        if index >= HARDENED_OFFSET:
            parts.append(f"{index - HARDENED_OFFSET}'")
        else:
            parts.append(str(index))
    return "/".join(parts)


class HDNode:
    """
    HD wallet node (BIP32).

    A node with a private key is an extended private key; :meth:`neuter`
    returns the matching extended public key.
    """

    def __init__(
        self,
        private_key: Optional[PrivateKey],
        public_key: PublicKey,
        chain_code: bytes,
        depth: int = 0,
        parent_fingerprint: bytes = b'\x00\x00\x00\x00',
        index: int = 0,
    ):
        if len(chain_code) != 32:
            raise ValidationError(f"Chain code must be 32 bytes, got {len(chain_code)}")
        self.private_key = private_key
        self.public_key = public_key
        self.chain_code = ChainCode(bytes(chain_code))
        self.depth = depth
        self.parent_fingerprint = bytes(parent_fingerprint)
        self.index = index

    @classmethod
    def from_seed(cls, seed: bytes) -> "HDNode":
        """
        Create master node from seed.

        Raises:
            PrivateKeyError: If the seed has the wrong size or yields an
                invalid master key
        """
        if len(seed) < 16 or len(seed) > 64:
            raise PrivateKeyError(f"Seed must be between 16 and 64 bytes, got {len(seed)}")

        h = hmac.new(BIP32_SEED_KEY, seed, hashlib.sha512).digest()

        private_key_bytes = h[:32]
        chain_code = h[32:]

        key_int = int.from_bytes(private_key_bytes, 'big')
        if key_int == 0 or key_int >= N:
            raise PrivateKeyError("Invalid master key")

        private_key = PrivateKey(private_key_bytes)

        return cls(
            private_key=private_key,
            public_key=private_key.public_key(),
            chain_code=chain_code,
        )

    @property
    def is_private(self) -> bool:
        return self.private_key is not None

    @property
    def identifier(self) -> bytes:
        """HASH160 of the public key."""
        return hash160(self.public_key.point)

    @property
    def fingerprint(self) -> bytes:
        """First four bytes of the identifier."""
        return self.identifier[:4]

    def derive(self, index: int) -> "HDNode":
        """
        Derive child node.

        Raises:
            PrivateKeyError: If the child key is invalid
            CryptoError: If hardened derivation is requested on a public node
        """
        if not 0 <= index <= 0xFFFFFFFF:
            raise ValidationError(f"Child index out of range: {index}")
        if self.depth >= MAX_DEPTH:
            raise CryptoError("Maximum derivation depth reached")

        if index >= HARDENED_OFFSET:
            if self.private_key is None:
                raise CryptoError("Cannot do hardened derivation without private key")
            data = b'\x00' + self.private_key.secret + index.to_bytes(4, 'big')
        else:
            data = self.public_key.point + index.to_bytes(4, 'big')

        h = hmac.new(self.chain_code, data, hashlib.sha512).digest()

        tweak = h[:32]
        child_chain_code = h[32:]

        tweak_int = int.from_bytes(tweak, 'big')
        if tweak_int >= N:
            raise PrivateKeyError(f"Invalid child key at index {index}")

        if self.private_key is not None:
            parent_key_int = int.from_bytes(self.private_key.secret, 'big')
            child_private_int = (parent_key_int + tweak_int) % N

            if child_private_int == 0:
                raise PrivateKeyError(f"Invalid child key at index {index}")

            child_private_key = PrivateKey(child_private_int.to_bytes(32, 'big'))
            child_public_key = child_private_key.public_key()
        else:
            child_private_key = None
            try:
                point = SecpPublicKey(self.public_key.point).add(tweak)
            except ValueError as e:
                raise CryptoError(f"Invalid child public key at index {index}") from e
            child_public_key = PublicKey(point.format(compressed=True))

        return HDNode(
            private_key=child_private_key,
            public_key=child_public_key,
            chain_code=child_chain_code,
            depth=self.depth + 1,
            parent_fingerprint=self.fingerprint,
            index=index,
        )

    def derive_path(self, path: str) -> "HDNode":
        """Derive using BIP32 path like m/44'/118'/0'/0/0."""
        node = self
        for index in parse_path(path):
            node = node.derive(index)
        return node

    def neuter(self) -> "HDNode":
        """Return the public-only counterpart of this node."""
        return HDNode(
            private_key=None,
            public_key=self.public_key,
            chain_code=self.chain_code,
            depth=self.depth,
            parent_fingerprint=self.parent_fingerprint,
            index=self.index,
        )

    def get_private_key(self) -> PrivateKey:
        """Get private key object."""
        if self.private_key is None:
            raise CryptoError("This is a public-only node")
        return self.private_key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HDNode):
            return False
        return (
            self.public_key == other.public_key
            and self.chain_code == other.chain_code
            and self.depth == other.depth
            and self.index == other.index
            and self.parent_fingerprint == other.parent_fingerprint
            and self.private_key == other.private_key
        )

    __hash__ = None

    def __repr__(self) -> str:
        kind = "private" if self.is_private else "public"
        return f"HDNode({kind}, depth={self.depth}, index={self.index}, public_key={self.public_key.hex()})"
