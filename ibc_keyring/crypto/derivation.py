"""Mnemonic to address derivation.

The path and the address hash are fixed. Any other choice yields addresses
that other Cosmos wallets will not reproduce.
"""

import logging
from typing import Tuple

from ..constants import COSMOS_HD_PATH
from ..exceptions import CryptoError, PrivateKeyError, ValidationError
from ..types.common import Address, PublicKeyBytes, Seed
from ..utils.encoding import hash160
from .bip39 import mnemonic_to_seed
from .entry import KeyEntry
from .hd import HDNode

__all__ = ["derive", "derive_node", "get_address"]

logger = logging.getLogger(__name__)


def get_address(public_key: PublicKeyBytes) -> Address:
    """Return RIPEMD160(SHA256(public_key)) as the raw account address."""
    return Address(hash160(bytes(public_key)))


def derive_node(seed: Seed) -> HDNode:
    """
    Derive the account node for ``COSMOS_HD_PATH`` from a BIP39 seed.

    Raises:
        PrivateKeyError: If master or child key construction fails
    """
    try:
        master = HDNode.from_seed(seed)
        return master.derive_path(COSMOS_HD_PATH)
    except PrivateKeyError:
        raise
    except (CryptoError, ValidationError) as e:
        raise PrivateKeyError(f"Key derivation failed: {e}") from e


def derive(mnemonic: str) -> Tuple[Address, KeyEntry]:
    """
    Derive address and keypair from a mnemonic.

    Args:
        mnemonic: BIP39 phrase; the seed passphrase is always empty

    Returns:
        Tuple of (address, key entry)

    Raises:
        InvalidMnemonicError: If the phrase fails wordlist or checksum checks
        PrivateKeyError: If key construction fails
    """
    seed = mnemonic_to_seed(mnemonic, passphrase="")
    node = derive_node(seed)
    entry = KeyEntry.from_node(node)
    address = get_address(entry.public_key_bytes)
    logger.debug(f"Derived address {address.hex()} at {COSMOS_HD_PATH}")
    return address, entry
