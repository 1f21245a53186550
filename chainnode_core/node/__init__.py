# chainnode_core/node/__init__.py

from .bootstrap import (
    InitOptions,
    InitOpt,
    init,
    peer_key_opt,
    default_key_opt,
    import_key_opt,
    init_peer_key,
    init_default_key,
    import_init_keys,
    commit_config,
)

__all__ = [
    "InitOptions",
    "InitOpt",
    "init",
    "peer_key_opt",
    "default_key_opt",
    "import_key_opt",
    "init_peer_key",
    "init_default_key",
    "import_init_keys",
    "commit_config",
]
