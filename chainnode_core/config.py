# chainnode_core/config.py

from __future__ import annotations
from typing import Any, Dict, List
import json, os
from pydantic import BaseModel, ConfigDict, Field


class _Section(BaseModel):
    # fields this package doesn't know about are kept and written back verbatim
    model_config = ConfigDict(extra="allow")


class APIConfig(_Section):
    address: str = "/ip4/127.0.0.1/tcp/3453"
    access_control_allow_origin: List[str] = Field(default_factory=lambda: ["http://localhost:8080"])


class SwarmConfig(_Section):
    address: str = "/ip4/0.0.0.0/tcp/6000"


class DatastoreConfig(_Section):
    type: str = "sqlite"
    path: str = "chain.db"


class WalletConfig(_Section):
    default_address: str = ""


class BootstrapConfig(_Section):
    addresses: List[str] = Field(default_factory=list)
    min_peer_threshold: int = 0
    period: str = "1m"


class MpoolConfig(_Section):
    max_pool_size: int = 10000
    max_nonce_gap: int = 100


class Config(_Section):
    """
    Node configuration, persisted as one JSON document.

    Unknown sections, and unknown keys inside known sections, survive a
    load/save round trip untouched.
    """
    api: APIConfig = Field(default_factory=APIConfig)
    swarm: SwarmConfig = Field(default_factory=SwarmConfig)
    datastore: DatastoreConfig = Field(default_factory=DatastoreConfig)
    wallet: WalletConfig = Field(default_factory=WalletConfig)
    bootstrap: BootstrapConfig = Field(default_factory=BootstrapConfig)
    mpool: MpoolConfig = Field(default_factory=MpoolConfig)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Raises pydantic.ValidationError (a ValueError) on malformed sections."""
        return cls.model_validate(data)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, sort_keys=True)


def load_config(path: str) -> Config:
    with open(path, "r", encoding="utf-8") as f:
        return Config.from_dict(json.load(f))


def save_config(cfg: Config, path: str) -> None:
    # write-then-rename so a crash never leaves a truncated config
    tmp = path + ".tmp"
    with open(tmp, "w", encoding="utf-8") as f:
        f.write(cfg.to_json())
    os.replace(tmp, path)
