"""Common type definitions for the IBC key ring."""

from typing import NewType, Union

__all__ = [
    "HexStr",
    "Address",
    "Bech32Address",
    "PrivateKeyBytes",
    "PublicKeyBytes",
    "Signature",
    "ChainCode",
    "Seed",
    "AddressLike",
]

# Basic types
HexStr = NewType("HexStr", str)
"""Hexadecimal string representation."""

# Identifiers
Address = NewType("Address", bytes)
"""20-byte account address, RIPEMD160(SHA256(pubkey))."""

Bech32Address = NewType("Bech32Address", str)
"""Human readable account address, e.g. ``cosmos1...``."""

# Crypto types
PrivateKeyBytes = NewType("PrivateKeyBytes", bytes)
"""32-byte private key."""

PublicKeyBytes = NewType("PublicKeyBytes", bytes)
"""33-byte compressed public key."""

Signature = NewType("Signature", bytes)
"""64-byte compact signature (R || S)."""

ChainCode = NewType("ChainCode", bytes)
"""32-byte BIP32 chain code."""

Seed = NewType("Seed", bytes)
"""64-byte BIP39 seed."""

# Type aliases
AddressLike = Union[Address, bytes, bytearray, str]
"""Raw address bytes or their hex form."""
