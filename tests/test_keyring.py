import base64
import copy
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from ibc_keyring import (
    KeyRing,
    MemoryKeyRing,
    KeyEntry,
    KeyFile,
    StoreBackend,
    KeyRingError,
    InvalidKeyError,
    InvalidMnemonicError,
    PrivateKeyError,
    derive,
    encode_address,
    decode_address,
    verify_signature,
)
from ibc_keyring.crypto import generate_mnemonic, mnemonic_to_seed, derive_node, get_address

from conftest import (
    ABANDON_MNEMONIC,
    FAUCET_MNEMONIC,
    FAUCET_ADDRESS,
    FAUCET_PUBKEY_B64,
)


def test_init_returns_empty_memory_store():
    keyring = KeyRing.init()
    assert isinstance(keyring, MemoryKeyRing)
    assert keyring.backend is StoreBackend.MEMORY
    assert len(keyring) == 0
    assert KeyRing.init("memory").addresses() == []


def test_init_rejects_unknown_backend():
    with pytest.raises(KeyRingError):
        KeyRing.init("sqlite")


def test_known_vectors():
    keyring = KeyRing.init()

    address = keyring.add_from_mnemonic(FAUCET_MNEMONIC)
    assert encode_address(address) == FAUCET_ADDRESS
    assert keyring.get(address).public_key_bytes == base64.b64decode(FAUCET_PUBKEY_B64)

    address = keyring.add_from_mnemonic(ABANDON_MNEMONIC)
    assert encode_address(address) == "cosmos19rl4cm2hmr8afy4kldpxz3fka4jguq0auqdal4"


def test_address_is_hash160_of_public_key(keyring):
    address = keyring.add_from_mnemonic(ABANDON_MNEMONIC)
    entry = keyring.get(address)
    assert len(address) == 20
    assert address == get_address(entry.public_key_bytes)
    assert address == entry.address
    assert len(entry.public_key_bytes) == 33


def test_derivation_is_deterministic():
    first, second = KeyRing.init(), KeyRing.init()
    a1 = first.add_from_mnemonic(ABANDON_MNEMONIC)
    a2 = second.add_from_mnemonic(ABANDON_MNEMONIC)
    assert a1 == a2
    assert first.get(a1).private_key.private_key == second.get(a2).private_key.private_key
    assert first.sign(a1, b"msg") == second.sign(a2, b"msg")


def test_derive_matches_manual_pipeline():
    address, entry = derive(ABANDON_MNEMONIC)
    node = derive_node(mnemonic_to_seed(ABANDON_MNEMONIC))
    assert node.depth == 5
    assert entry.private_key.private_key == node.private_key
    assert address == node.public_key.address()


def test_sign_round_trip(keyring):
    address = keyring.add_from_mnemonic(generate_mnemonic())
    public_key = keyring.get(address).public_key_bytes
    for message in [b"", b"x", b"\x00" * 1000, "héllo".encode("utf-8")]:
        signature = keyring.sign(address, message)
        assert len(signature) == 64
        assert verify_signature(public_key, message, signature)
        assert keyring.verify(address, message, signature)


def test_signatures_for_different_messages_differ(keyring):
    address = keyring.add_from_mnemonic(ABANDON_MNEMONIC)
    assert keyring.sign(address, b"one") != keyring.sign(address, b"two")


def test_unknown_address_raises_invalid_key(keyring):
    keyring.add_from_mnemonic(ABANDON_MNEMONIC)
    unknown = b"\x01" * 20
    with pytest.raises(InvalidKeyError) as excinfo:
        keyring.get(unknown)
    assert excinfo.value.address == unknown
    with pytest.raises(InvalidKeyError):
        keyring.sign(unknown, b"payload")
    with pytest.raises(InvalidKeyError):
        keyring.sign(b"short", b"payload")
    assert unknown not in keyring


def test_sign_requires_bytes(keyring):
    address = keyring.add_from_mnemonic(ABANDON_MNEMONIC)
    with pytest.raises(KeyRingError):
        keyring.sign(address, "text")


@pytest.mark.parametrize("phrase", [
    "abandon " * 11 + "abandon",
    "abandon " * 10 + "about",
    "legal winner thank year wave sausage worth useful legal winner thank",
])
def test_invalid_mnemonic_leaves_store_unchanged(keyring, phrase):
    keyring.add_from_mnemonic(ABANDON_MNEMONIC)
    with pytest.raises(InvalidMnemonicError):
        keyring.add_from_mnemonic(phrase)
    assert len(keyring) == 1


def test_private_key_failure_leaves_store_unchanged(keyring, monkeypatch):
    def broken(seed):
        raise PrivateKeyError("Invalid master key")
    monkeypatch.setattr("ibc_keyring.crypto.derivation.HDNode.from_seed", broken)
    with pytest.raises(PrivateKeyError):
        keyring.add_from_mnemonic(ABANDON_MNEMONIC)
    assert len(keyring) == 0


def test_insert_overwrites_silently(keyring):
    address = keyring.add_from_mnemonic(ABANDON_MNEMONIC)
    old = keyring.get(address)
    _, new = derive(FAUCET_MNEMONIC)

    previous = keyring.insert(address, new)

    assert previous is old
    assert keyring.get(address) is new
    assert keyring.get(address) is not old
    assert len(keyring) == 1
    assert keyring.insert(b"\x02" * 20, old) is None
    assert len(keyring) == 2


def test_re_adding_same_mnemonic_replaces_entry(keyring):
    address = keyring.add_from_mnemonic(ABANDON_MNEMONIC)
    first = keyring.get(address)
    assert keyring.add_from_mnemonic(ABANDON_MNEMONIC) == address
    assert keyring.get(address) is not first
    assert len(keyring) == 1


def test_insert_rejects_non_entries(keyring):
    with pytest.raises(KeyRingError):
        keyring.insert(b"\x01" * 20, "not an entry")
    with pytest.raises(KeyRingError):
        keyring.insert(b"\x01" * 19, derive(ABANDON_MNEMONIC)[1])


def test_addresses_are_sorted_and_iterable(keyring):
    a1 = keyring.add_from_mnemonic(ABANDON_MNEMONIC)
    a2 = keyring.add_from_mnemonic(FAUCET_MNEMONIC)
    assert keyring.addresses() == sorted([a1, a2])
    assert set(keyring) == {a1, a2}
    assert a1 in keyring and a1.hex() in keyring


def test_key_entry_hides_private_key(keyring):
    address = keyring.add_from_mnemonic(ABANDON_MNEMONIC)
    entry = keyring.get(address)
    secret = entry.private_key.private_key.secret.hex()
    assert secret not in repr(entry)
    assert "private_key" not in repr(entry)
    assert "MemoryKeyRing" in repr(keyring)


def test_key_entry_copy_is_a_value(keyring):
    address = keyring.add_from_mnemonic(ABANDON_MNEMONIC)
    entry = keyring.get(address)
    clone = copy.deepcopy(entry)
    assert clone == entry
    assert clone.private_key.private_key is entry.private_key.private_key


def test_key_entry_rejects_mismatched_halves():
    _, first = derive(ABANDON_MNEMONIC)
    _, second = derive(FAUCET_MNEMONIC)
    with pytest.raises(KeyRingError):
        KeyEntry(public_key=first.public_key, private_key=second.private_key)
    with pytest.raises(KeyRingError):
        KeyEntry(public_key=first.public_key, private_key=first.public_key)


def test_wiped_entry_can_no_longer_sign(keyring):
    address = keyring.add_from_mnemonic(ABANDON_MNEMONIC)
    keyring.get(address).wipe()
    with pytest.raises(KeyRingError):
        keyring.sign(address, b"payload")


def test_add_from_key_file(keyring):
    key_file = KeyFile(
        name="relayer",
        type="local",
        address=FAUCET_ADDRESS,
        pubkey=FAUCET_PUBKEY_B64,
        mnemonic=FAUCET_MNEMONIC,
    )
    address = keyring.add_from_key_file(key_file)
    assert decode_address(FAUCET_ADDRESS)[1] == address
    assert address in keyring


def test_add_from_key_file_rejects_mismatch(keyring):
    key_file = KeyFile(
        name="relayer",
        type="local",
        address=FAUCET_ADDRESS,
        pubkey="",
        mnemonic=ABANDON_MNEMONIC,
    )
    with pytest.raises(KeyRingError):
        keyring.add_from_key_file(key_file)
    assert len(keyring) == 0


def test_key_file_parsing():
    key_file = KeyFile.from_json(
        '{"name":"a","type":"local","address":"cosmos1x","pubkey":"p","mnemonic":"m"}'
    )
    assert key_file.name == "a"
    assert "mnemonic" not in repr(key_file)
    with pytest.raises(KeyRingError):
        KeyFile.from_json("{not json")
    with pytest.raises(KeyRingError):
        KeyFile.from_json('{"name":"a"}')
    with pytest.raises(KeyRingError):
        KeyFile.from_json("[]")


def test_concurrent_insert_and_sign(keyring):
    address, entry = derive(ABANDON_MNEMONIC)
    _, other = derive(FAUCET_MNEMONIC)
    keyring.insert(address, entry)
    valid_keys = {entry.public_key_bytes, other.public_key_bytes}
    stop = threading.Event()

    def writer():
        while not stop.is_set():
            keyring.insert(address, other)
            keyring.insert(address, entry)

    def signer(i):
        message = f"message {i}".encode()
        current = keyring.get(address)
        assert current.public_key_bytes in valid_keys
        signature = keyring.sign(address, message)
        return any(verify_signature(k, message, signature) for k in valid_keys)

    thread = threading.Thread(target=writer)
    thread.start()
    try:
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(signer, range(50)))
    finally:
        stop.set()
        thread.join()

    assert all(results)
    assert len(keyring) == 1
