"""
chainnode_core.blockstore
-------------------------
Content-addressed views over a raw datastore.

- Blockstore: raw bytes keyed by CID under the /blocks/ namespace
- ObjectStore: canonical-JSON objects stored as blocks

CIDs are "b" + base32(multihash), multihash being sha2-256 (0x12, 0x20, digest).
"""

from __future__ import annotations
import json
from typing import Any

from .constants import BLOCKS_PREFIX
from .storage import Datastore
from .utils import b32e, canonical_json, sha256

_SHA2_256 = bytes([0x12, 0x20])


def compute_cid(data: bytes) -> str:
    return "b" + b32e(_SHA2_256 + sha256(data))


class BlockNotFoundError(KeyError):
    pass


class Blockstore:
    def __init__(self, datastore: Datastore):
        self.datastore = datastore

    def put(self, data: bytes) -> str:
        cid = compute_cid(data)
        key = BLOCKS_PREFIX + cid
        if not self.datastore.has(key):
            self.datastore.put(key, data)
        return cid

    def get(self, cid: str) -> bytes:
        data = self.datastore.get(BLOCKS_PREFIX + cid)
        if data is None:
            raise BlockNotFoundError(cid)
        return data

    def has(self, cid: str) -> bool:
        return self.datastore.has(BLOCKS_PREFIX + cid)


class ObjectStore:
    def __init__(self, blockstore: Blockstore):
        self.blocks = blockstore

    def put(self, obj: Any) -> str:
        return self.blocks.put(canonical_json(obj))

    def get(self, cid: str) -> Any:
        return json.loads(self.blocks.get(cid).decode("utf-8"))
