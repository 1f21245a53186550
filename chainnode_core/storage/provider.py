# chainnode_core/storage/provider.py
from __future__ import annotations
from typing import List, Optional, Tuple


class Datastore:
    """
    Raw key-value datastore interface.

    Keys are "/"-separated strings, values are bytes. Writes overwrite.
    """
    def put(self, key: str, value: bytes) -> None: ...
    def get(self, key: str) -> Optional[bytes]: ...
    def has(self, key: str) -> bool: ...
    def delete(self, key: str) -> None: ...
    def query(self, prefix: str = "") -> List[Tuple[str, bytes]]: ...
    def close(self) -> None:
        return


class NamespacedDatastore(Datastore):
    """Prefixes every key, so several stores can share one backing datastore."""

    def __init__(self, child: Datastore, prefix: str):
        self.child = child
        self.prefix = "/" + prefix.strip("/")

    def _key(self, key: str) -> str:
        return self.prefix + "/" + key.lstrip("/")

    def put(self, key: str, value: bytes) -> None:
        self.child.put(self._key(key), value)

    def get(self, key: str) -> Optional[bytes]:
        return self.child.get(self._key(key))

    def has(self, key: str) -> bool:
        return self.child.has(self._key(key))

    def delete(self, key: str) -> None:
        self.child.delete(self._key(key))

    def query(self, prefix: str = "") -> List[Tuple[str, bytes]]:
        cut = len(self.prefix)
        return [(k[cut:], v) for k, v in self.child.query(self._key(prefix))]
