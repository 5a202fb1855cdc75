"""Cryptographic utilities for the IBC key ring."""

from ..crypto.keys import PrivateKey, PublicKey, verify_signature
from ..crypto.bip39 import (
    generate_mnemonic,
    validate_mnemonic,
    is_valid_mnemonic,
    mnemonic_to_seed,
)
from ..crypto.hd import HDNode, parse_path, format_path
from ..crypto.entry import KeyEntry
from ..crypto.derivation import derive, derive_node, get_address
from ..crypto.signature import (
    parse_der_signature,
    encode_der_signature,
    der_to_compact,
    compact_to_der,
)

__all__ = [
    # Keys
    "PrivateKey",
    "PublicKey",
    "verify_signature",
    "KeyEntry",
    
    # Mnemonics
    "generate_mnemonic",
    "validate_mnemonic",
    "is_valid_mnemonic",
    "mnemonic_to_seed",
    
    # Derivation
    "HDNode",
    "parse_path",
    "format_path",
    "derive",
    "derive_node",
    "get_address",
    
    # Signatures
    "parse_der_signature",
    "encode_der_signature",
    "der_to_compact",
    "compact_to_der",
]
