import pytest
from chainnode_core.constants import DEFAULT_PEER_KEY_BITS
from chainnode_core.crypto import KeyInfo, PeerKeypair, generate_key_info
from chainnode_core.errors import InvalidKeyError


def test_peer_key_defaults(peer_key):
    assert peer_key.key_size == DEFAULT_PEER_KEY_BITS == 2048
    assert peer_key.peer_id().startswith("b")


def test_peer_key_bytes_roundtrip(peer_key):
    restored = PeerKeypair.from_bytes(peer_key.to_bytes())
    assert restored == peer_key
    assert restored.peer_id() == peer_key.peer_id()


def test_peer_key_rejects_garbage():
    with pytest.raises(InvalidKeyError):
        PeerKeypair.from_bytes(b"not a key")


def test_key_info_address_is_stable():
    ki = generate_key_info()
    addr = ki.address()
    assert addr.startswith("t1")
    assert addr == KeyInfo.from_dict(ki.to_dict()).address()
    assert ki.address(network="f")[1:] == addr[1:]


def test_key_info_known_vector():
    # private key 1 -> generator point G
    ki = KeyInfo(private_key=(1).to_bytes(32, "big"))
    assert ki.public_key().hex().startswith("0479be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798")


@pytest.mark.parametrize("ki", [
    KeyInfo(private_key=b"short"),
    KeyInfo(private_key=bytes(32)),
    KeyInfo(private_key=(1).to_bytes(32, "big"), key_type="bls"),
])
def test_malformed_key_info(ki):
    with pytest.raises(InvalidKeyError):
        ki.address()


def test_key_info_from_bad_dict():
    with pytest.raises(InvalidKeyError):
        KeyInfo.from_dict({"type": "secp256k1", "private_key": "!!"})
    with pytest.raises(InvalidKeyError):
        KeyInfo.from_dict({"type": "secp256k1"})


@pytest.mark.parametrize("data", [["abc"], "abc", {"private_key": 5}])
def test_key_info_from_non_mapping(data):
    with pytest.raises(InvalidKeyError):
        KeyInfo.from_dict(data)
