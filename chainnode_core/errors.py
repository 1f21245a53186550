"""
chainnode_core.errors
---------------------
Exception hierarchy for repo bootstrap.

Stage errors (subclasses of BootstrapError) are what `init` raises; each one names
the stage that failed and chains the underlying cause via `raise ... from err`.
The lower-level errors are raised by the collaborators (wallet, keystore, repo,
context) and surface as the `__cause__` of a stage error.
"""

from __future__ import annotations
from typing import Optional


class BootstrapError(Exception):
    stage: str = "bootstrap"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or f"{self.stage} failed")
        self.message = message or f"{self.stage} failed"

    def __str__(self) -> str:
        cause = self.__cause__
        if cause is not None:
            return f"{self.message}: {cause}"
        return self.message


class GenesisError(BootstrapError):
    stage = "genesis"


class IdentityError(BootstrapError):
    stage = "peer identity"


class WalletOpenError(BootstrapError):
    stage = "wallet open"


class KeyProvisionError(BootstrapError):
    stage = "default key"


class KeyImportError(BootstrapError):
    """An additional key failed to import; `index` is its position in the import list."""
    stage = "key import"

    def __init__(self, index: int, message: Optional[str] = None):
        self.index = index
        super().__init__(message or f"failed to import key at position {index}")


class AddressDerivationError(BootstrapError):
    stage = "address derivation"


class ConfigPersistError(BootstrapError):
    stage = "config persist"


# --------- collaborator errors ----------
class InvalidKeyError(ValueError):
    pass


class WalletBackendError(Exception):
    pass


class DuplicateKeyError(WalletBackendError):
    pass


class KeystoreError(Exception):
    pass


class RepoError(Exception):
    pass


class RepoExistsError(RepoError):
    pass


class ContextCancelledError(Exception):
    pass


class DeadlineExceededError(ContextCancelledError):
    pass
