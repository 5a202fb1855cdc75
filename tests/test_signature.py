import pytest

from ibc_keyring.constants import SECP256K1_ORDER
from ibc_keyring.crypto.keys import PrivateKey
from ibc_keyring.crypto.signature import (
    parse_der_signature, encode_der_signature, der_to_compact,
    compact_to_der, split_compact, is_low_s
)
from ibc_keyring.exceptions import CryptoError

KEY = PrivateKey(b"\x11" * 32)


def test_der_signature_roundtrip():
    sig = encode_der_signature(1, 2)
    assert sig == bytes.fromhex("3006020101020102")
    assert parse_der_signature(sig) == (1, 2)


def test_der_pads_high_bit():
    r = 0x80 << 248
    sig = encode_der_signature(r, 1)
    assert sig[3] == 33 and sig[4] == 0
    assert parse_der_signature(sig) == (r, 1)


@pytest.mark.parametrize("sig", [
    b"",
    bytes.fromhex("3106020101020102"),
    bytes.fromhex("3007020101020102"),
    bytes.fromhex("30060201010302"),
    bytes.fromhex("300602050102"),
])
def test_malformed_der(sig):
    with pytest.raises(CryptoError):
        parse_der_signature(sig)


def test_compact_der_conversion():
    compact = (5).to_bytes(32, "big") + (7).to_bytes(32, "big")
    assert der_to_compact(compact_to_der(compact)) == compact
    assert split_compact(compact) == (5, 7)
    with pytest.raises(CryptoError):
        split_compact(compact[:-1])
    with pytest.raises(CryptoError):
        der_to_compact(encode_der_signature(SECP256K1_ORDER, 1))


def test_signatures_are_fixed_size_low_s_and_deterministic():
    first = KEY.sign(b"message one")
    second = KEY.sign(b"message two")
    assert len(first) == len(second) == 64
    assert first != second
    assert KEY.sign(b"message one") == first
    assert is_low_s(first) and is_low_s(second)


def test_high_s_signature_is_rejected():
    signature = KEY.sign(b"payload")
    r, s = split_compact(signature)
    high = r.to_bytes(32, "big") + (SECP256K1_ORDER - s).to_bytes(32, "big")
    assert not is_low_s(high)
    assert not KEY.public_key().verify(high, b"payload")
