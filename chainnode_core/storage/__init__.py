# chainnode_core/storage/__init__.py
from __future__ import annotations

from .provider import Datastore, NamespacedDatastore
from .providers.memory_provider import InMemoryDatastore
from .providers.sqlite_provider import SQLiteDatastore
import os


def load_datastore(config: dict | None = None) -> Datastore:
    """
    Factory resolver for selecting the datastore backend.

        - sqlite (default)
        - memory
    """
    config = config or {}
    provider = config.get("provider") or os.getenv("CHAINNODE_DATASTORE_PROVIDER", "sqlite")

    if provider == "memory":
        return InMemoryDatastore()

    if provider == "sqlite":
        db_path = config.get("sqlite_path") or os.getenv("CHAINNODE_DB_PATH", "db/chain.db")
        return SQLiteDatastore(db_path)

    raise ValueError(f"Unknown datastore provider: {provider}")


__all__ = [
    "Datastore",
    "NamespacedDatastore",
    "InMemoryDatastore",
    "SQLiteDatastore",
    "load_datastore",
]
