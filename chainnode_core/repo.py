"""
chainnode_core.repo
-------------------
Node repositories: the persistent home of chain data, peer keys, wallet keys
and configuration.

- MemRepo: everything in memory (tests, throwaway nodes)
- FSRepo: a directory holding config.json and SQLite datastores

Repos are not synchronized; one writer at a time.
"""

from __future__ import annotations
import copy, os
from typing import Optional

from .config import Config, load_config, save_config
from .constants import (
    CONFIG_FILENAME, DATASTORE_FILENAME, KEYSTORE_FILENAME, KEYSTORE_PREFIX,
    WALLET_FILENAME, WALLET_PREFIX,
)
from .errors import RepoError, RepoExistsError
from .keystore import Keystore
from .logger import get_logger
from .storage import Datastore, InMemoryDatastore, NamespacedDatastore, SQLiteDatastore

log = get_logger("chainnode.repo")


class Repo:
    # Interface
    def datastore(self) -> Datastore: ...
    def keystore(self) -> Keystore: ...
    def wallet_datastore(self) -> Datastore: ...
    def config(self) -> Config: ...
    def replace_config(self, cfg: Config) -> None: ...
    def close(self) -> None:
        return


class MemRepo(Repo):
    def __init__(self, cfg: Optional[Config] = None):
        self._config = cfg if cfg is not None else Config()
        self.stored_config = copy.deepcopy(self._config)
        self._datastore = InMemoryDatastore()
        self._keystore_ds = InMemoryDatastore()
        self._keystore = Keystore(NamespacedDatastore(self._keystore_ds, KEYSTORE_PREFIX))
        self._wallet_ds = NamespacedDatastore(InMemoryDatastore(), WALLET_PREFIX)

    def datastore(self) -> Datastore:
        return self._datastore

    def keystore(self) -> Keystore:
        return self._keystore

    def wallet_datastore(self) -> Datastore:
        return self._wallet_ds

    def config(self) -> Config:
        return self._config

    def replace_config(self, cfg: Config) -> None:
        self._config = cfg
        self.stored_config = copy.deepcopy(cfg)


class FSRepo(Repo):
    def __init__(self, path: str):
        self.path = path
        self._config_path = os.path.join(path, CONFIG_FILENAME)
        if not os.path.isfile(self._config_path):
            raise RepoError(f"no repo found at {path}")
        try:
            self._config = load_config(self._config_path)
        except (ValueError, OSError) as e:
            raise RepoError(f"invalid config in {self._config_path}: {e}") from e
        self._datastore = SQLiteDatastore(os.path.join(path, DATASTORE_FILENAME))
        self._keystore_ds = SQLiteDatastore(os.path.join(path, KEYSTORE_FILENAME))
        self._keystore = Keystore(NamespacedDatastore(self._keystore_ds, KEYSTORE_PREFIX))
        self._wallet_root = SQLiteDatastore(os.path.join(path, WALLET_FILENAME))
        self._wallet_ds = NamespacedDatastore(self._wallet_root, WALLET_PREFIX)

    def datastore(self) -> Datastore:
        return self._datastore

    def keystore(self) -> Keystore:
        return self._keystore

    def wallet_datastore(self) -> Datastore:
        return self._wallet_ds

    def config(self) -> Config:
        return self._config

    def replace_config(self, cfg: Config) -> None:
        save_config(cfg, self._config_path)
        self._config = cfg

    def close(self) -> None:
        self._datastore.close()
        self._keystore_ds.close()
        self._wallet_root.close()


def init_fs_repo(path: str, cfg: Optional[Config] = None) -> None:
    """Create an empty repo directory with an initial config. Refuses non-empty dirs."""
    if os.path.isdir(path) and os.listdir(path):
        raise RepoExistsError(f"repo directory {path} is not empty")
    os.makedirs(path, exist_ok=True)
    save_config(cfg or Config(), os.path.join(path, CONFIG_FILENAME))
    log.info(f"[REPO] initialized empty repo at {path}")


def open_fs_repo(path: str) -> FSRepo:
    return FSRepo(path)
