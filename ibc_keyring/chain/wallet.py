"""Wallets created on a test chain."""

from dataclasses import dataclass, field
from typing import NewType

from ..crypto.entry import KeyEntry
from ..types.common import Address

__all__ = ["WalletId", "WalletAddress", "Wallet"]

WalletId = NewType("WalletId", str)
"""Key name inside the chain binary's keyring."""

WalletAddress = NewType("WalletAddress", str)
"""Bech32 address reported by the chain binary."""


@dataclass(frozen=True)
class Wallet:
    """A chain account together with the key derived for it."""

    id: WalletId
    address: WalletAddress
    raw_address: Address = field(repr=False)
    key: KeyEntry = field(repr=False)
