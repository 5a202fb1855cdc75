"""
IBC Key Ring Usage Examples

Derives a relayer key from a mnemonic, signs with it and shows the
recoverable error paths.
"""

import logging

from ibc_keyring import (
    KeyRing,
    InvalidKeyError,
    InvalidMnemonicError,
    encode_address,
    verify_signature,
)
from ibc_keyring.crypto import generate_mnemonic

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


def derivation_example(keyring: KeyRing) -> bytes:
    """Example 1: Add a key from a fresh mnemonic."""
    print("\n=== Derivation Example ===")
    
    mnemonic = generate_mnemonic(strength=256)
    address = keyring.add_from_mnemonic(mnemonic)
    entry = keyring.get(address)
    
    print(f"Raw address: {address.hex()}")
    print(f"Display:     {encode_address(address)}")
    print(f"Public key:  {entry.public_key_bytes.hex()}")
    return address


def signing_example(keyring: KeyRing, address: bytes) -> None:
    """Example 2: Sign and verify a payload."""
    print("\n=== Signing Example ===")
    
    message = b'{"chain_id":"ibc-0","msgs":[]}'
    signature = keyring.sign(address, message)
    public_key = keyring.get(address).public_key_bytes
    
    print(f"Signature ({len(signature)} bytes): {signature.hex()}")
    print(f"Valid: {verify_signature(public_key, message, signature)}")


def error_example(keyring: KeyRing) -> None:
    """Example 3: Errors are raised, never fatal."""
    print("\n=== Error Handling Example ===")
    
    try:
        keyring.add_from_mnemonic("not a real mnemonic")
    except InvalidMnemonicError as e:
        print(f"Rejected mnemonic: {e}")
        
    try:
        keyring.sign(bytes(20), b"payload")
    except InvalidKeyError as e:
        print(f"Unknown signer: {e}")
        
    print(f"Keys stored: {len(keyring)}")


def main():
    keyring = KeyRing.init()
    address = derivation_example(keyring)
    signing_example(keyring, address)
    error_example(keyring)


if __name__ == "__main__":
    main()
