"""
ChainNode Core Package
======================
Primitives for turning an empty node repository into a usable node.

Provides:
- Genesis installation over a content-addressed block/object store
- RSA peer identity and secp256k1 wallet keys
- Pluggable key-value storage (memory, SQLite) and repo layouts
- The one-shot `init` bootstrap procedure
"""

__version__ = "0.3.0"
