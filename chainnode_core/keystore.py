"""
chainnode_core.keystore
-----------------------
Named peer keys backed by a datastore.

`put` overwrites whatever is stored under the alias; callers that need
create-only semantics must check `has` themselves.
"""

from __future__ import annotations
from typing import List, Optional

from .crypto import PeerKeypair
from .errors import KeystoreError
from .storage import Datastore


def _validate_alias(alias: str) -> None:
    if not alias:
        raise KeystoreError("key alias must not be empty")
    if "/" in alias or alias.startswith("."):
        raise KeystoreError(f"invalid key alias: {alias!r}")


class Keystore:
    def __init__(self, datastore: Datastore):
        self.datastore = datastore

    def put(self, alias: str, key: PeerKeypair) -> None:
        _validate_alias(alias)
        self.datastore.put(alias, key.to_bytes())

    def get(self, alias: str) -> Optional[PeerKeypair]:
        _validate_alias(alias)
        raw = self.datastore.get(alias)
        if raw is None:
            return None
        return PeerKeypair.from_bytes(raw)

    def has(self, alias: str) -> bool:
        _validate_alias(alias)
        return self.datastore.has(alias)

    def list(self) -> List[str]:
        return [k.lstrip("/") for k, _ in self.datastore.query()]
