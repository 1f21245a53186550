"""
chainnode_core.wallet
---------------------
Wallet of secp256k1 key records.

- DSBackend: persists KeyInfo entries in a datastore, keyed by address
- Wallet: front over one or more backends; new keys go to the first one

Entries are only ever added; insertion order is preserved.
"""

from __future__ import annotations
import json
from typing import List, Optional

from .crypto import KeyInfo, generate_key_info
from .errors import DuplicateKeyError, InvalidKeyError, WalletBackendError
from .logger import get_logger
from .storage import Datastore

log = get_logger("chainnode.wallet")


class DSBackend:
    def __init__(self, datastore: Datastore):
        self.datastore = datastore
        self._addresses: List[str] = []
        self._load()

    def _load(self) -> None:
        # every stored entry must decode and match its key
        try:
            entries = self.datastore.query()
        except Exception as e:
            raise WalletBackendError(f"failed to read wallet datastore: {e}") from e
        for key, raw in entries:
            address = key.lstrip("/")
            try:
                ki = KeyInfo.from_dict(json.loads(raw.decode("utf-8")))
                derived = ki.address(network=address[:1])
            except (ValueError, TypeError) as e:
                raise WalletBackendError(f"corrupt wallet entry {address}: {e}") from e
            if derived != address:
                raise WalletBackendError(f"wallet entry {address} does not match its key")
            self._addresses.append(address)

    def import_key(self, ki: KeyInfo) -> str:
        address = ki.address()
        if address in self._addresses:
            raise DuplicateKeyError(f"key for {address} already in wallet")
        self.datastore.put(address, json.dumps(ki.to_dict()).encode("utf-8"))
        self._addresses.append(address)
        log.debug(f"[WALLET] stored key {address}")
        return address

    def new_key_info(self) -> KeyInfo:
        ki = generate_key_info()
        self.import_key(ki)
        return ki

    def addresses(self) -> List[str]:
        return list(self._addresses)

    def has_address(self, address: str) -> bool:
        return address in self._addresses

    def get_key_info(self, address: str) -> Optional[KeyInfo]:
        if address not in self._addresses:
            return None
        raw = self.datastore.get(address)
        return KeyInfo.from_dict(json.loads(raw.decode("utf-8")))


class Wallet:
    def __init__(self, *backends: DSBackend):
        if not backends:
            raise WalletBackendError("wallet needs at least one backend")
        self.backends = list(backends)

    def new_key_info(self) -> KeyInfo:
        """Generate a key, persist it in the first backend and return it."""
        return self.backends[0].new_key_info()

    def import_key(self, ki: KeyInfo) -> str:
        """Validate `ki` by deriving its address, then persist it."""
        if ki is None:
            raise InvalidKeyError("no key info to import")
        return self.backends[0].import_key(ki)

    def has_address(self, address: str) -> bool:
        return any(b.has_address(address) for b in self.backends)

    def addresses(self) -> List[str]:
        return [a for b in self.backends for a in b.addresses()]
