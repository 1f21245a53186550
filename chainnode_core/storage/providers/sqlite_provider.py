from __future__ import annotations
from typing import Optional, List, Tuple
import sqlite3, os
from chainnode_core.storage.provider import Datastore


class SQLiteDatastore(Datastore):
    def __init__(self, path="db/chain.db"):
        # If no directory, default to current working directory
        dir_path = os.path.dirname(path) or "."
        os.makedirs(dir_path, exist_ok=True)
        self.path = path
        self.db = sqlite3.connect(path, check_same_thread=False)

        self._init()

    def _init(self) -> None:
        # seq preserves insertion order across overwrites of other keys
        self.db.execute("""CREATE TABLE IF NOT EXISTS kv(
            seq INTEGER PRIMARY KEY AUTOINCREMENT,
            k TEXT NOT NULL UNIQUE,
            v BLOB NOT NULL
        )""")
        self.db.commit()

    def put(self, key: str, value: bytes) -> None:
        self.db.execute(
            "INSERT INTO kv(k,v) VALUES(?,?) ON CONFLICT(k) DO UPDATE SET v=excluded.v",
            (key, sqlite3.Binary(value)),
        )
        self.db.commit()

    def get(self, key: str) -> Optional[bytes]:
        cur = self.db.execute("SELECT v FROM kv WHERE k=?", (key,))
        row = cur.fetchone()
        if not row: return None
        return bytes(row[0])

    def has(self, key: str) -> bool:
        cur = self.db.execute("SELECT 1 FROM kv WHERE k=?", (key,))
        return cur.fetchone() is not None

    def delete(self, key: str) -> None:
        self.db.execute("DELETE FROM kv WHERE k=?", (key,))
        self.db.commit()

    def query(self, prefix: str = "") -> List[Tuple[str, bytes]]:
        cur = self.db.execute("SELECT k, v FROM kv ORDER BY seq")
        return [(k, bytes(v)) for k, v in cur.fetchall() if k.startswith(prefix)]

    def close(self):
        self.db.close()
