"""Type definitions for the IBC key ring."""

from .common import (
    HexStr,
    Address,
    Bech32Address,
    PrivateKeyBytes,
    PublicKeyBytes,
    Signature,
    ChainCode,
    Seed,
    AddressLike,
)

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
