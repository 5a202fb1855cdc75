"""Key management for the IBC key ring."""

import hmac
from typing import Union

from coincurve import PrivateKey as SecpPrivateKey, PublicKey as SecpPublicKey

from ..exceptions import CryptoError, ValidationError
from ..types.common import Address, PrivateKeyBytes, PublicKeyBytes, Signature
from ..utils.encoding import hash160
from ..utils.validation import validate_private_key, validate_public_key
from .signature import compact_to_der, der_to_compact

__all__ = ["PrivateKey", "PublicKey", "verify_signature"]


class PrivateKey:
    """
    secp256k1 private key wrapper.
    
    The scalar lives in a mutable buffer so it can be zeroed with
    :meth:`wipe`. Copies share the buffer and pickling is refused, so the
    secret is never duplicated or serialized by this class.
    """
    
    __slots__ = ("_secret", "_wiped")
    
    def __init__(self, key: Union[bytes, bytearray, str]) -> None:
        """
        Initialize private key.
        
        Args:
            key: Private key as 32 bytes or hex string
            
        Raises:
            ValidationError: If key format is invalid
        """
        self._secret = bytearray(validate_private_key(key))
        self._wiped = False
        
    @property
    def secret(self) -> PrivateKeyBytes:
        """Get private key as bytes."""
        self._ensure_alive()
        return PrivateKeyBytes(bytes(self._secret))
        
    @property
    def is_wiped(self) -> bool:
        return self._wiped
        
    def _ensure_alive(self) -> None:
        if self._wiped:
            raise CryptoError("Private key has been wiped")
            
    def _secp(self) -> SecpPrivateKey:
        return SecpPrivateKey(bytes(self._secret))
        
    def public_key(self) -> "PublicKey":
        """Get corresponding compressed public key."""
        self._ensure_alive()
        return PublicKey(self._secp().public_key.format(compressed=True))
        
    def sign(self, message: bytes) -> Signature:
        """
        Sign message bytes.
        
        The message is hashed with SHA256 and signed with RFC 6979
        deterministic ECDSA; the result is low-S.
        
        Args:
            message: Arbitrary message bytes
            
        Returns:
            64-byte compact signature (R || S)
            
        Raises:
            CryptoError: If signing fails
        """
        self._ensure_alive()
        try:
            der = self._secp().sign(bytes(message))
        except (ValueError, TypeError) as e:
            raise CryptoError(f"Signing failed: {e}") from e
        return der_to_compact(der)
        
    def wipe(self) -> None:
        """Overwrite the secret with zeros."""
        for i in range(len(self._secret)):
            self._secret[i] = 0
        self._wiped = True
        
    def __copy__(self) -> "PrivateKey":
        return self
        
    def __deepcopy__(self, memo: dict) -> "PrivateKey":
        return self
        
    def __reduce__(self):
        raise TypeError("PrivateKey cannot be serialized")
        
    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, PrivateKey):
            return False
        return hmac.compare_digest(bytes(self._secret), bytes(other._secret))
        
    def __hash__(self) -> int:
        return id(self)
        
    def __repr__(self) -> str:
        if self._wiped:
            return "PrivateKey(<wiped>)"
        return "PrivateKey(<redacted>)"
        
    __str__ = __repr__


class PublicKey:
    """
    secp256k1 public key wrapper.
    
    Always stored in compressed SEC1 form; an uncompressed key is
    re-encoded on construction.
    """
    
    def __init__(self, key: Union[bytes, str, "PublicKey"]) -> None:
        """
        Initialize public key.
        
        Args:
            key: Public key as bytes, hex string, or another PublicKey
            
        Raises:
            ValidationError: If key format is invalid
        """
        if isinstance(key, PublicKey):
            self._point = key._point
            self._key = key._key
            return
            
        key_bytes = validate_public_key(key)
        try:
            self._key = SecpPublicKey(key_bytes)
        except ValueError as e:
            raise ValidationError(f"Public key is not on the curve: {e}") from e
        self._point = PublicKeyBytes(self._key.format(compressed=True))
        
    @property
    def point(self) -> PublicKeyBytes:
        """Get compressed public key bytes."""
        return self._point
        
    def hex(self) -> str:
        """Get public key as hex string."""
        return self._point.hex()
        
    def address(self) -> Address:
        """RIPEMD160(SHA256(compressed point)), the 20-byte account address."""
        return Address(hash160(self._point))
        
    def verify(self, signature: bytes, message: bytes) -> bool:
        """
        Verify compact signature.
        
        Args:
            signature: 64-byte compact signature
            message: Original message bytes
            
        Returns:
            True if signature is valid
        """
        try:
            der = compact_to_der(bytes(signature))
            return self._key.verify(der, bytes(message))
        except (CryptoError, ValueError, TypeError):
            return False
            
    def __copy__(self) -> "PublicKey":
        return self
        
    def __deepcopy__(self, memo: dict) -> "PublicKey":
        return self
        
    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, PublicKey):
            return False
        return self._point == other._point
        
    def __hash__(self) -> int:
        return hash(self._point)
        
    def __repr__(self) -> str:
        return f"PublicKey({self.hex()})"


def verify_signature(
    public_key: Union[bytes, str, PublicKey],
    message: bytes,
    signature: bytes
) -> bool:
    """
    Verify a compact signature against a public key.
    
    Args:
        public_key: Compressed or uncompressed public key
        message: Original message bytes
        signature: 64-byte compact signature
        
    Returns:
        True if signature is valid
    """
    try:
        key = PublicKey(public_key)
    except ValidationError:
        return False
    return key.verify(signature, message)
