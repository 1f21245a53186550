"""
chainnode_core.node.bootstrap
-----------------------------
One-shot bootstrap of a freshly created repo into a usable node.

Stages, in order, each failing fast with a stage-specific BootstrapError:

1. build block/object store views over the repo datastore
2. install genesis state                          -> GenesisError
3. store the peer identity under "self"           -> IdentityError
4. open the wallet backend                        -> WalletOpenError
5. generate or import the default wallet key      -> KeyProvisionError
6. import additional keys, in order               -> KeyImportError
7. derive the default key's address               -> AddressDerivationError
8. write wallet.default_address into the config   -> ConfigPersistError

Nothing is rolled back: a failure at stage N leaves stages 1..N-1 applied.
Running init twice without the original peer key replaces the node identity.
The caller must hold exclusive access to the repo for the whole call.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from chainnode_core.blockstore import Blockstore, ObjectStore
from chainnode_core.constants import PEER_KEY_ALIAS
from chainnode_core.context import Context
from chainnode_core.crypto import KeyInfo, PeerKeypair, generate_peer_key
from chainnode_core.errors import (
    AddressDerivationError, ConfigPersistError, GenesisError, IdentityError,
    KeyImportError, KeyProvisionError, WalletOpenError,
)
from chainnode_core.genesis import GenesisFunc, install_genesis
from chainnode_core.keystore import Keystore
from chainnode_core.logger import get_logger
from chainnode_core.repo import Repo
from chainnode_core.wallet import DSBackend, Wallet

log = get_logger("chainnode.node")


@dataclass
class InitOptions:
    """
    Overrides for init. Usable directly as an option: its peer/default keys
    override when set and its import list is appended.
    """
    peer_key: Optional[PeerKeypair] = None
    default_key: Optional[KeyInfo] = None
    import_keys: List[KeyInfo] = field(default_factory=list)

    def __call__(self, target: "InitOptions") -> None:
        if self.peer_key is not None:
            target.peer_key = self.peer_key
        if self.default_key is not None:
            target.default_key = self.default_key
        target.import_keys.extend(self.import_keys)


InitOpt = Callable[[InitOptions], None]


def peer_key_opt(key: PeerKeypair) -> InitOpt:
    """Sets the node's 'self' peer identity. If unspecified, init generates one."""
    def opt(cfg: InitOptions) -> None:
        cfg.peer_key = key
    return opt


def default_key_opt(ki: KeyInfo) -> InitOpt:
    """Sets the key for the wallet's default account. If unspecified, init generates one."""
    def opt(cfg: InitOptions) -> None:
        cfg.default_key = ki
    return opt


def import_key_opt(ki: KeyInfo) -> InitOpt:
    """Imports `ki` into the wallet during init, after the default key."""
    def opt(cfg: InitOptions) -> None:
        cfg.import_keys.append(ki)
    return opt


def init(ctx: Optional[Context], repo: Repo, gen: GenesisFunc, *opts: InitOpt) -> None:
    """
    Initialize `repo` with genesis state and keys.

    Always sets the config's wallet default address (to the supplied default key
    or a newly generated one) and otherwise leaves the config object intact.
    """
    ctx = ctx or Context.background()
    cfg = InitOptions()
    for o in opts:
        o(cfg)

    log.info("[INIT] installing genesis")
    try:
        bs = Blockstore(repo.datastore())
        cst = ObjectStore(bs)
        install_genesis(ctx, repo, bs, cst, gen)
    except Exception as e:
        log.error(f"[INIT] genesis failed: {e}")
        raise GenesisError("could not init node") from e

    init_peer_key(repo.keystore(), cfg.peer_key)

    try:
        backend = DSBackend(repo.wallet_datastore())
    except Exception as e:
        log.error(f"[INIT] wallet open failed: {e}")
        raise WalletOpenError("failed to open wallet datastore") from e
    w = Wallet(backend)

    default_key = init_default_key(w, cfg.default_key)
    import_init_keys(w, cfg.import_keys)
    address = commit_config(repo, default_key)
    log.info(f"[INIT] repo initialized default_address={address}")


def init_peer_key(store: Keystore, key: Optional[PeerKeypair]) -> None:
    if key is None:
        try:
            key = generate_peer_key()
        except Exception as e:
            log.error(f"[INIT] peer key generation failed: {e}")
            raise IdentityError("failed to create peer key") from e
    try:
        store.put(PEER_KEY_ALIAS, key)
    except Exception as e:
        log.error(f"[INIT] peer key store failed: {e}")
        raise IdentityError("failed to store private key") from e
    log.info(f"[INIT] peer identity {key.peer_id()}")


def init_default_key(w: Wallet, ki: Optional[KeyInfo]) -> KeyInfo:
    if ki is None:
        try:
            ki = w.new_key_info()
        except Exception as e:
            log.error(f"[INIT] default key generation failed: {e}")
            raise KeyProvisionError("failed to create default key") from e
    else:
        try:
            w.import_key(ki)
        except Exception as e:
            log.error(f"[INIT] default key import failed: {e}")
            raise KeyProvisionError("failed to import default key") from e
    return ki


def import_init_keys(w: Wallet, import_keys: List[KeyInfo]) -> None:
    for i, ki in enumerate(import_keys):
        try:
            w.import_key(ki)
        except Exception as e:
            log.error(f"[INIT] import of key {i} failed: {e}")
            raise KeyImportError(i) from e


def commit_config(repo: Repo, default_key: KeyInfo) -> str:
    """Point the config's default wallet address at `default_key` and persist the whole config."""
    try:
        address = default_key.address()
    except Exception as e:
        log.error(f"[INIT] address derivation failed: {e}")
        raise AddressDerivationError("failed to extract address from default key") from e

    repo.config().wallet.default_address = address
    try:
        repo.replace_config(repo.config())
    except Exception as e:
        log.error(f"[INIT] config write failed: {e}")
        raise ConfigPersistError("failed to write config") from e
    return address
