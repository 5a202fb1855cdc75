"""BIP39 mnemonic handling for the IBC key ring."""

from mnemonic import Mnemonic

from ..constants import MNEMONIC_LANGUAGE, MNEMONIC_STRENGTHS
from ..exceptions import InvalidMnemonicError
from ..types.common import Seed

__all__ = [
    "generate_mnemonic",
    "normalize_mnemonic",
    "validate_mnemonic",
    "is_valid_mnemonic",
    "mnemonic_to_seed",
]

_mnemo = Mnemonic(MNEMONIC_LANGUAGE)


def generate_mnemonic(strength: int = 256) -> str:
    """Generate BIP39 mnemonic phrase."""
    if strength not in MNEMONIC_STRENGTHS:
        raise ValueError("Strength must be 128, 160, 192, 224, or 256")
    return _mnemo.generate(strength=strength)


def normalize_mnemonic(mnemonic: str) -> str:
    """Collapse runs of whitespace to single spaces."""
    return " ".join(mnemonic.split())


def validate_mnemonic(mnemonic: str) -> str:
    """
    Validate mnemonic against the wordlist and its checksum.
    
    Args:
        mnemonic: Space separated phrase
        
    Returns:
        Normalized phrase
        
    Raises:
        InvalidMnemonicError: If word count, a word or the checksum is wrong
    """
    if not isinstance(mnemonic, str):
        raise InvalidMnemonicError(f"Mnemonic must be a string, got {type(mnemonic).__name__}")
        
    phrase = normalize_mnemonic(mnemonic)
    try:
        _mnemo.to_entropy(phrase)
    except (ValueError, LookupError) as e:
        raise InvalidMnemonicError(f"Invalid mnemonic: {e}", data=str(e)) from e
        
    return phrase


def is_valid_mnemonic(mnemonic: str) -> bool:
    """Check mnemonic without raising."""
    try:
        validate_mnemonic(mnemonic)
        return True
    except InvalidMnemonicError:
        return False


def mnemonic_to_seed(mnemonic: str, passphrase: str = "") -> Seed:
    """Convert validated mnemonic to a 64-byte seed (PBKDF2-HMAC-SHA512)."""
    phrase = validate_mnemonic(mnemonic)
    return Seed(Mnemonic.to_seed(phrase, passphrase=passphrase))
