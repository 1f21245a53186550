"""
chainnode_core.genesis
----------------------
Installs genesis chain state into a repo.

The genesis block itself is computed by a caller-supplied GenesisFunc that writes
whatever it needs into the block/object stores and returns the GenesisBlock.
Installation records the block as the chain's genesis and current head.
"""

from __future__ import annotations
import json
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .blockstore import Blockstore, ObjectStore
from .constants import CHAIN_HEAD_KEY, GENESIS_KEY
from .context import Context
from .logger import get_logger
from .storage import Datastore
from .utils import canonical_json

log = get_logger("chainnode.genesis")


class GenesisNotStoredError(Exception):
    pass


@dataclass
class GenesisBlock:
    cid: str
    state_root: str = ""
    timestamp: int = 0
    height: int = 0
    parents: List[str] = field(default_factory=list)


GenesisFunc = Callable[[Context, Blockstore, ObjectStore], GenesisBlock]


def install_genesis(ctx: Context, repo, bs: Blockstore, cst: ObjectStore, gen: GenesisFunc) -> str:
    ctx.check()
    genesis = gen(ctx, bs, cst)
    ctx.check()
    if not bs.has(genesis.cid):
        raise GenesisNotStoredError(f"genesis block {genesis.cid} missing from blockstore")

    ds = repo.datastore()
    ds.put(GENESIS_KEY, genesis.cid.encode("ascii"))
    ds.put(CHAIN_HEAD_KEY, canonical_json([genesis.cid]))
    log.info(f"[GENESIS] installed {genesis.cid}")
    return genesis.cid


def genesis_cid(ds: Datastore) -> Optional[str]:
    raw = ds.get(GENESIS_KEY)
    return raw.decode("ascii") if raw is not None else None


def chain_head(ds: Datastore) -> List[str]:
    raw = ds.get(CHAIN_HEAD_KEY)
    return json.loads(raw.decode("utf-8")) if raw is not None else []


def make_genesis_func(allocations: Optional[Dict[str, int]] = None, timestamp: int = 0) -> GenesisFunc:
    """
    Default genesis: a parentless height-0 block whose state root maps each
    allocated address to its starting balance. Deterministic for equal inputs.
    """
    allocations = dict(allocations or {})

    def gen(ctx: Context, bs: Blockstore, cst: ObjectStore) -> GenesisBlock:
        ctx.check()
        state = {"actors": {addr: {"balance": str(amount)} for addr, amount in allocations.items()}}
        state_root = cst.put(state)
        block = {"height": 0, "parents": [], "state_root": state_root, "timestamp": timestamp}
        cid = cst.put(block)
        return GenesisBlock(cid=cid, state_root=state_root, timestamp=timestamp)

    return gen
