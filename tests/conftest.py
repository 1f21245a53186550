import pytest

from chainnode_core.crypto import generate_key_info, generate_peer_key
from chainnode_core.genesis import make_genesis_func
from chainnode_core.repo import MemRepo


@pytest.fixture(scope="session")
def peer_key():
    # RSA-2048 generation is slow; share one key across the session
    return generate_peer_key()


@pytest.fixture
def repo():
    return MemRepo()


@pytest.fixture
def gen():
    return make_genesis_func(allocations={generate_key_info().address(): 1000})
