"""Encoding and decoding utilities for the IBC key ring."""

import hashlib
from typing import List, Tuple, Union

from ..constants import ADDRESS_LENGTH, DEFAULT_ACCOUNT_PREFIX
from ..exceptions import ValidationError
from ..types.common import Address, Bech32Address, HexStr

__all__ = [
    "hex_to_bytes",
    "bytes_to_hex",
    "sha256",
    "ripemd160",
    "hash160",
    "convert_bits",
    "encode_bech32",
    "decode_bech32",
    "encode_address",
    "decode_address",
]

# Constants
BECH32_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
BECH32_MAX_LENGTH = 90


def hex_to_bytes(hex_str: Union[HexStr, str]) -> bytes:
    """
    Convert hex string to bytes.
    
    Args:
        hex_str: Hex string with or without 0x prefix
        
    Returns:
        Decoded bytes
        
    Raises:
        ValidationError: If hex string is invalid
    """
    try:
        # Remove 0x prefix if present
        if isinstance(hex_str, str) and hex_str.startswith("0x"):
            hex_str = hex_str[2:]
        return bytes.fromhex(hex_str)
    except ValueError as e:
        raise ValidationError(f"Invalid hex string: {hex_str}") from e


def bytes_to_hex(data: bytes, prefix: bool = False) -> HexStr:
    """
    Convert bytes to hex string.
    
    Args:
        data: Bytes to encode
        prefix: Add 0x prefix
        
    Returns:
        Hex string
    """
    hex_str = bytes(data).hex()
    if prefix:
        hex_str = f"0x{hex_str}"
    return HexStr(hex_str)


def sha256(data: bytes) -> bytes:
    """SHA256 digest."""
    return hashlib.sha256(data).digest()


def ripemd160(data: bytes) -> bytes:
    """RIPEMD160 digest."""
    return hashlib.new("ripemd160", data).digest()


def hash160(data: bytes) -> bytes:
    """RIPEMD160(SHA256(data))."""
    return ripemd160(sha256(data))


def convert_bits(data: bytes, from_bits: int, to_bits: int, pad: bool = True) -> List[int]:
    """
    Regroup a sequence of integers between bit widths.
    
    Raises:
        ValidationError: If input values or leftover padding are invalid
    """
    acc = 0
    bits = 0
    result = []
    max_value = (1 << to_bits) - 1
    
    for value in data:
        if value < 0 or value >> from_bits:
            raise ValidationError(f"Invalid {from_bits}-bit value: {value}")
        acc = (acc << from_bits) | value
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            result.append((acc >> bits) & max_value)
            
    if pad:
        if bits:
            result.append((acc << (to_bits - bits)) & max_value)
    elif bits >= from_bits or ((acc << (to_bits - bits)) & max_value):
        raise ValidationError("Invalid padding in bit conversion")
        
    return result


def _bech32_polymod(values: List[int]) -> int:
    """Compute Bech32 checksum polymod."""
    generator = [0x3b6a57b2, 0x26508e6d, 0x1ea119fa, 0x3d4233dd, 0x2a1462b3]
    chk = 1
    for value in values:
        top = chk >> 25
        chk = (chk & 0x1ffffff) << 5 ^ value
        for i in range(5):
            chk ^= generator[i] if ((top >> i) & 1) else 0
    return chk


def _bech32_hrp_expand(hrp: str) -> List[int]:
    """Expand human-readable part for Bech32."""
    return [ord(x) >> 5 for x in hrp] + [0] + [ord(x) & 31 for x in hrp]


def encode_bech32(hrp: str, data: bytes) -> str:
    """
    Encode arbitrary bytes as Bech32 (BIP173 checksum, no witness version).
    
    Args:
        hrp: Human-readable part
        data: Payload bytes
        
    Returns:
        Bech32 string
    """
    if not hrp or any(ord(c) < 33 or ord(c) > 126 for c in hrp):
        raise ValidationError(f"Invalid Bech32 prefix: {hrp!r}")
    hrp = hrp.lower()
    
    values = convert_bits(data, 8, 5)
    
    # Calculate checksum
    polymod = _bech32_polymod(_bech32_hrp_expand(hrp) + values + [0, 0, 0, 0, 0, 0]) ^ 1
    checksum = [(polymod >> 5 * (5 - i)) & 31 for i in range(6)]
    
    return hrp + "1" + "".join(BECH32_CHARSET[v] for v in values + checksum)


def decode_bech32(text: str) -> Tuple[str, bytes]:
    """
    Decode Bech32 string.
    
    Args:
        text: Bech32 string
        
    Returns:
        Tuple of (hrp, payload)
        
    Raises:
        ValidationError: If string is invalid
    """
    if text.lower() != text and text.upper() != text:
        raise ValidationError("Invalid Bech32 string: mixed case")
    if len(text) > BECH32_MAX_LENGTH:
        raise ValidationError(f"Invalid Bech32 string: longer than {BECH32_MAX_LENGTH}")
    text = text.lower()
    
    # Find separator
    pos = text.rfind("1")
    if pos < 1 or pos + 7 > len(text):
        raise ValidationError("Invalid Bech32 string: bad separator position")
        
    hrp = text[:pos]
    data = text[pos + 1:]
    
    values = []
    for char in data:
        try:
            values.append(BECH32_CHARSET.index(char))
        except ValueError:
            raise ValidationError(f"Invalid Bech32 character: {char}")
            
    # Verify checksum
    if _bech32_polymod(_bech32_hrp_expand(hrp) + values) != 1:
        raise ValidationError("Invalid Bech32 checksum")
        
    payload = convert_bits(bytes(values[:-6]), 5, 8, pad=False)
    return hrp, bytes(payload)


def encode_address(address: bytes, prefix: str = DEFAULT_ACCOUNT_PREFIX) -> Bech32Address:
    """
    Render a raw account address for display.
    
    Args:
        address: 20-byte raw address
        prefix: Bech32 human-readable prefix
        
    Returns:
        Bech32 address, e.g. ``cosmos1...``
    """
    if len(address) != ADDRESS_LENGTH:
        raise ValidationError(f"Address must be {ADDRESS_LENGTH} bytes, got {len(address)}")
    return Bech32Address(encode_bech32(prefix, bytes(address)))


def decode_address(text: str) -> Tuple[str, Address]:
    """
    Parse a Bech32 account address.
    
    Returns:
        Tuple of (prefix, raw 20-byte address)
        
    Raises:
        ValidationError: If address is invalid
    """
    hrp, payload = decode_bech32(text)
    if len(payload) != ADDRESS_LENGTH:
        raise ValidationError(f"Address must be {ADDRESS_LENGTH} bytes, got {len(payload)}")
    return hrp, Address(payload)
