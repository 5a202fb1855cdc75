"""
IBC Key Ring

Deterministic secp256k1 key store for relayer accounts: derives keys from
BIP39 mnemonics along the Cosmos path, keys them by address and signs
messages with them.
"""

from .constants import COSMOS_HD_PATH, StoreBackend
from .exceptions import (
    KeyRingError,
    ValidationError,
    CryptoError,
    InvalidMnemonicError,
    PrivateKeyError,
    InvalidKeyError,
)
from .crypto import KeyEntry, PrivateKey, PublicKey, derive, verify_signature
from .keyring import KeyFile, KeyRing, MemoryKeyRing
from .utils.encoding import encode_address, decode_address

__version__ = "1.0.0"
__author__ = "IBC Key Ring"

__all__ = [
    # Key store
    "KeyRing",
    "MemoryKeyRing",
    "KeyEntry",
    "KeyFile",
    "StoreBackend",
    
    # Derivation
    "COSMOS_HD_PATH",
    "derive",
    "PrivateKey",
    "PublicKey",
    "verify_signature",
    
    # Display
    "encode_address",
    "decode_address",
    
    # Exceptions
    "KeyRingError",
    "ValidationError",
    "CryptoError",
    "InvalidMnemonicError",
    "PrivateKeyError",
    "InvalidKeyError",
]
