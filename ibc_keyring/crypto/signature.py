"""Signature encoding for the IBC key ring.

Signatures leave this package in compact form: ``R || S`` as two 32-byte
big-endian scalars with no recovery id. libsecp256k1 works with DER, so the
helpers here convert between the two.
"""

from typing import Tuple

from ..constants import SECP256K1_ORDER, SIGNATURE_LENGTH
from ..exceptions import CryptoError
from ..types.common import Signature

__all__ = [
    "parse_der_signature",
    "encode_der_signature",
    "der_to_compact",
    "compact_to_der",
    "split_compact",
    "is_low_s",
]

_HALF_ORDER = SECP256K1_ORDER // 2


def parse_der_signature(signature: bytes) -> Tuple[int, int]:
    """
    Parse DER-encoded signature.
    
    Args:
        signature: DER-encoded signature
        
    Returns:
        Tuple of (r, s)
        
    Raises:
        CryptoError: If signature format is invalid
    """
    try:
        # Parse DER structure
        if signature[0] != 0x30:
            raise ValueError("missing sequence tag")
            
        length = signature[1]
        if length + 2 != len(signature):
            raise ValueError("incorrect length")
            
        # Parse r value
        if signature[2] != 0x02:
            raise ValueError("missing r integer tag")
            
        r_length = signature[3]
        r_bytes = signature[4:4 + r_length]
        if len(r_bytes) != r_length:
            raise ValueError("truncated r value")
        r = int.from_bytes(r_bytes, "big")
        
        # Parse s value
        s_offset = 4 + r_length
        if signature[s_offset] != 0x02:
            raise ValueError("missing s integer tag")
            
        s_length = signature[s_offset + 1]
        s_bytes = signature[s_offset + 2:s_offset + 2 + s_length]
        if len(s_bytes) != s_length or s_offset + 2 + s_length != len(signature):
            raise ValueError("truncated s value")
        s = int.from_bytes(s_bytes, "big")
        
        return r, s
        
    except (IndexError, ValueError) as e:
        raise CryptoError(f"Invalid DER signature: {e}") from e


def encode_der_signature(r: int, s: int) -> bytes:
    """
    Encode signature as DER.
    
    Args:
        r: Signature r value  
        s: Signature s value
        
    Returns:
        DER-encoded signature
    """
    def _encode_int(value: int) -> bytes:
        value_bytes = value.to_bytes(max(1, (value.bit_length() + 7) // 8), "big")
        if value_bytes[0] & 0x80:
            value_bytes = b"\x00" + value_bytes
        return b"\x02" + bytes([len(value_bytes)]) + value_bytes
        
    sequence = _encode_int(r) + _encode_int(s)
    return b"\x30" + bytes([len(sequence)]) + sequence


def der_to_compact(signature: bytes) -> Signature:
    """Convert DER signature to 64-byte ``R || S``."""
    r, s = parse_der_signature(signature)
    if not (0 < r < SECP256K1_ORDER and 0 < s < SECP256K1_ORDER):
        raise CryptoError("Signature scalars out of range")
    return Signature(r.to_bytes(32, "big") + s.to_bytes(32, "big"))


def split_compact(signature: bytes) -> Tuple[int, int]:
    """Split compact signature into (r, s)."""
    if len(signature) != SIGNATURE_LENGTH:
        raise CryptoError(f"Compact signature must be {SIGNATURE_LENGTH} bytes, got {len(signature)}")
    return int.from_bytes(signature[:32], "big"), int.from_bytes(signature[32:], "big")


def compact_to_der(signature: bytes) -> bytes:
    """Convert 64-byte ``R || S`` to DER."""
    r, s = split_compact(signature)
    return encode_der_signature(r, s)


def is_low_s(signature: bytes) -> bool:
    """Check that S is in the lower half of the group order."""
    _, s = split_compact(signature)
    return 0 < s <= _HALF_ORDER
