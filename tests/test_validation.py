import pytest

from ibc_keyring.constants import SECP256K1_ORDER
from ibc_keyring.utils import validation as v


def test_private_key_validation():
    assert v.validate_private_key("01" * 32) == b"\x01" * 32
    assert v.is_valid_private_key(b"\x01" * 32)
    assert not v.is_valid_private_key(b"\x00" * 32)
    assert not v.is_valid_private_key(SECP256K1_ORDER.to_bytes(32, "big"))
    with pytest.raises(v.ValidationError):
        v.validate_private_key(b"\x01" * 31)


def test_public_key_validation():
    assert v.is_valid_public_key("02" + "11" * 32)
    assert not v.is_valid_public_key("05" + "11" * 32)
    with pytest.raises(v.ValidationError):
        v.validate_public_key(b"\x04" * 33)


def test_address_validation():
    raw = b"\xaa" * 20
    assert v.validate_address(raw) == raw
    assert v.validate_address(bytearray(raw)) == raw
    assert v.validate_address("aa" * 20) == raw
    assert not v.is_valid_address(b"\xaa" * 19)
    with pytest.raises(v.ValidationError):
        v.validate_address(1234)


def test_message_and_signature_validation():
    assert v.validate_message(bytearray(b"abc")) == b"abc"
    with pytest.raises(v.ValidationError):
        v.validate_message("text")
    with pytest.raises(v.ValidationError):
        v.validate_signature(b"\x01" * 63)
    with pytest.raises(v.ValidationError):
        v.validate_signature(b"\x00" * 64)
    assert v.validate_signature(b"\x01" * 64) == b"\x01" * 64
