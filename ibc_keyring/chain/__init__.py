"""Harness for driving an external chain binary in tests."""

from .command import ChainCommand
from .process import ChildProcess
from .wallet import Wallet, WalletAddress, WalletId

__all__ = [
    "ChainCommand",
    "ChildProcess",
    "Wallet",
    "WalletAddress",
    "WalletId",
]
