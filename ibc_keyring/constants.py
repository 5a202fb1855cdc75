"""Constants for the IBC key ring."""

from enum import Enum

__all__ = [
    "StoreBackend",
    "COSMOS_HD_PATH",
    "HARDENED_OFFSET",
    "SECP256K1_ORDER",
    "BIP32_SEED_KEY",
    "MNEMONIC_LANGUAGE",
    "MNEMONIC_STRENGTHS",
    "PRIVATE_KEY_LENGTH",
    "ADDRESS_LENGTH",
    "SIGNATURE_LENGTH",
    "DEFAULT_ACCOUNT_PREFIX",
    "DEFAULT_KEYRING_BACKEND",
    "DEFAULT_TIMEOUT",
    "READY_POLL_INTERVAL",
    "USER_AGENT",
]


class StoreBackend(Enum):
    """Key store backends."""
    MEMORY = "memory"


# Derivation path for Cosmos SDK accounts (BIP44 coin type 118).
# Must stay fixed: external wallets derive the same address from it.
COSMOS_HD_PATH = "m/44'/118'/0'/0/0"

HARDENED_OFFSET = 0x80000000

# secp256k1 group order
SECP256K1_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

BIP32_SEED_KEY = b"Bitcoin seed"

# BIP39
MNEMONIC_LANGUAGE = "english"
MNEMONIC_STRENGTHS = (128, 160, 192, 224, 256)

# Sizes in bytes
PRIVATE_KEY_LENGTH = 32
ADDRESS_LENGTH = 20
SIGNATURE_LENGTH = 64

# Display
DEFAULT_ACCOUNT_PREFIX = "cosmos"

# Chain harness
DEFAULT_KEYRING_BACKEND = "test"
DEFAULT_TIMEOUT = 30  # seconds
READY_POLL_INTERVAL = 0.5  # seconds
USER_AGENT = "ibc-keyring/1.0.0"
