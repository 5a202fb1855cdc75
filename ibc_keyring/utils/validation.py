"""Validation utilities for the IBC key ring."""

import re
from typing import Union

from ..constants import (
    ADDRESS_LENGTH,
    PRIVATE_KEY_LENGTH,
    SECP256K1_ORDER,
    SIGNATURE_LENGTH,
)
from ..exceptions import ValidationError
from ..types.common import Address

__all__ = [
    "is_valid_private_key",
    "validate_private_key",
    "is_valid_public_key",
    "validate_public_key",
    "is_valid_address",
    "validate_address",
    "validate_message",
    "validate_signature",
]

# Regex patterns
HEX_PATTERN = re.compile(r"^[0-9a-fA-F]*$")


def _hex_or_bytes(value: Union[str, bytes, bytearray], what: str) -> bytes:
    if isinstance(value, str):
        if value.startswith("0x"):
            value = value[2:]
        if not HEX_PATTERN.match(value):
            raise ValidationError(f"{what} must be hexadecimal")
        try:
            return bytes.fromhex(value)
        except ValueError as e:
            raise ValidationError(f"Invalid hex {what.lower()}: {e}") from e
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise ValidationError(f"{what} must be bytes or hex string, got {type(value).__name__}")


def is_valid_private_key(key: Union[str, bytes]) -> bool:
    """
    Check if private key format is valid.
    
    Args:
        key: Private key as hex string or bytes
        
    Returns:
        True if valid, False otherwise
    """
    try:
        validate_private_key(key)
        return True
    except ValidationError:
        return False


def validate_private_key(key: Union[str, bytes, bytearray]) -> bytes:
    """
    Validate private key and return as bytes.
    
    Args:
        key: Private key as hex string or bytes
        
    Returns:
        Private key as 32 bytes
        
    Raises:
        ValidationError: If private key is invalid
    """
    key = _hex_or_bytes(key, "Private key")
            
    if len(key) != PRIVATE_KEY_LENGTH:
        raise ValidationError(f"Private key must be {PRIVATE_KEY_LENGTH} bytes, got {len(key)}")
        
    # Check range
    key_int = int.from_bytes(key, "big")
    
    if key_int == 0:
        raise ValidationError("Private key cannot be zero")
    if key_int >= SECP256K1_ORDER:
        raise ValidationError("Private key exceeds curve order")
        
    return key


def is_valid_public_key(key: Union[str, bytes]) -> bool:
    """Check if public key format is valid."""
    try:
        validate_public_key(key)
        return True
    except ValidationError:
        return False


def validate_public_key(key: Union[str, bytes, bytearray]) -> bytes:
    """
    Validate public key and return as bytes.
    
    Args:
        key: Public key as hex string or bytes
        
    Returns:
        Public key bytes (33 or 65 bytes)
        
    Raises:
        ValidationError: If public key is invalid
    """
    key = _hex_or_bytes(key, "Public key")
            
    if len(key) == 33:
        if key[0] not in (0x02, 0x03):
            raise ValidationError("Compressed public key must start with 0x02 or 0x03")
    elif len(key) == 65:
        if key[0] != 0x04:
            raise ValidationError("Uncompressed public key must start with 0x04")
    else:
        raise ValidationError(f"Public key must be 33 or 65 bytes, got {len(key)}")
        
    return key


def is_valid_address(address: Union[str, bytes]) -> bool:
    """Check if raw account address is valid."""
    try:
        validate_address(address)
        return True
    except ValidationError:
        return False


def validate_address(address: Union[str, bytes, bytearray]) -> Address:
    """
    Validate raw account address and return it as immutable bytes.
    
    Args:
        address: 20-byte address or its hex form
        
    Returns:
        Address bytes
        
    Raises:
        ValidationError: If address is invalid
    """
    address = _hex_or_bytes(address, "Address")
    if len(address) != ADDRESS_LENGTH:
        raise ValidationError(f"Address must be {ADDRESS_LENGTH} bytes, got {len(address)}")
    return Address(address)


def validate_message(message: Union[bytes, bytearray, memoryview]) -> bytes:
    """Messages are signed as raw bytes; text must be encoded by the caller."""
    if not isinstance(message, (bytes, bytearray, memoryview)):
        raise ValidationError(f"Message must be bytes, got {type(message).__name__}")
    return bytes(message)


def validate_signature(signature: Union[str, bytes]) -> bytes:
    """
    Validate a compact (R || S) signature.
    
    Raises:
        ValidationError: If signature has wrong size or out-of-range scalars
    """
    signature = _hex_or_bytes(signature, "Signature")
    if len(signature) != SIGNATURE_LENGTH:
        raise ValidationError(f"Signature must be {SIGNATURE_LENGTH} bytes, got {len(signature)}")
        
    r = int.from_bytes(signature[:32], "big")
    s = int.from_bytes(signature[32:], "big")
    if not (0 < r < SECP256K1_ORDER and 0 < s < SECP256K1_ORDER):
        raise ValidationError("Signature scalars out of range")
        
    return signature
