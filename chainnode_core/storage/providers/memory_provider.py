from typing import Optional, List, Tuple
from chainnode_core.storage.provider import Datastore


class InMemoryDatastore(Datastore):
    def __init__(self):
        # dicts keep insertion order; query() relies on it
        self.data = {}

    def put(self, key: str, value: bytes):
        self.data[key] = bytes(value)

    def get(self, key: str) -> Optional[bytes]:
        return self.data.get(key)

    def has(self, key: str) -> bool:
        return key in self.data

    def delete(self, key: str):
        self.data.pop(key, None)

    def query(self, prefix: str = "") -> List[Tuple[str, bytes]]:
        return [(k, v) for k, v in self.data.items() if k.startswith(prefix)]
