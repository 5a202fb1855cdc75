"""IBC key ring exceptions hierarchy."""

from typing import Any, Optional

__all__ = [
    "KeyRingError",
    "ValidationError",
    "CryptoError",
    "InvalidMnemonicError",
    "PrivateKeyError",
    "InvalidKeyError",
    "ChainError",
    "ChainCommandError",
]


class KeyRingError(Exception):
    """Base exception for all key ring errors."""
    
    def __init__(
        self, 
        message: str, 
        code: Optional[int] = None, 
        data: Optional[Any] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data
        
    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ValidationError(KeyRingError):
    """Raised when validation fails."""
    pass


class CryptoError(KeyRingError):
    """Raised when cryptographic operation fails."""
    pass


class InvalidMnemonicError(CryptoError):
    """Raised when a mnemonic fails wordlist or checksum validation."""
    pass


class PrivateKeyError(CryptoError):
    """Raised when master or derived key construction fails."""
    pass


class InvalidKeyError(KeyRingError):
    """Raised when no key entry exists for an address."""
    
    def __init__(
        self,
        address: bytes,
        message: Optional[str] = None
    ) -> None:
        if message is None:
            message = f"No key found for address {bytes(address).hex()}"
        super().__init__(message)
        self.address = bytes(address)


class ChainError(KeyRingError):
    """Raised when chain harness operation fails."""
    pass


class ChainCommandError(ChainError):
    """Raised when the chain binary exits with an error."""
    
    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        stderr: str = ""
    ) -> None:
        super().__init__(message, code=status, data=stderr)
        self.status = status
        self.stderr = stderr
