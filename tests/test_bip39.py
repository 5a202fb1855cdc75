import pytest

from ibc_keyring.crypto.bip39 import (
    generate_mnemonic, validate_mnemonic, is_valid_mnemonic, mnemonic_to_seed
)
from ibc_keyring.exceptions import InvalidMnemonicError

from conftest import ABANDON_MNEMONIC


def test_trezor_seed_vector():
    seed = mnemonic_to_seed(ABANDON_MNEMONIC, passphrase="TREZOR")
    assert seed.hex() == (
        "c55257c360c07c72029aebc1b53c05ed0362ada38ead3e3e9efa3708e5349553"
        "1f09a6987599d18264c1e1c92f2cf141630c7a3c4ab7c81b2f001698e7463b04"
    )


def test_whitespace_is_normalized():
    messy = "  " + ABANDON_MNEMONIC.replace(" ", "   \t") + "\n"
    assert validate_mnemonic(messy) == ABANDON_MNEMONIC
    assert mnemonic_to_seed(messy) == mnemonic_to_seed(ABANDON_MNEMONIC)


@pytest.mark.parametrize("phrase", [
    "abandon " * 11 + "abandon",            # bad checksum
    "abandon " * 10 + "about",              # 11 words
    "abandon " * 11 + "notaword",           # unknown word
    "",
])
def test_invalid_mnemonics(phrase):
    assert not is_valid_mnemonic(phrase)
    with pytest.raises(InvalidMnemonicError) as excinfo:
        validate_mnemonic(phrase)
    assert excinfo.value.__cause__ is not None


def test_non_string_mnemonic():
    with pytest.raises(InvalidMnemonicError):
        validate_mnemonic(None)


def test_generate_mnemonic():
    for strength, words in [(128, 12), (256, 24)]:
        phrase = generate_mnemonic(strength)
        assert len(phrase.split()) == words
        assert is_valid_mnemonic(phrase)
    with pytest.raises(ValueError):
        generate_mnemonic(100)
