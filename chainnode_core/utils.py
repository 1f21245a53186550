"""
chainnode_core.utils
--------------------
Lightweight helpers for base64/base32 encoding, hashing and canonical JSON.
Canonical JSON keeps object CIDs deterministic for identical inputs.
"""

from __future__ import annotations
import base64, json, hashlib
from typing import Any


def b64e(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")

def b64d(s: str) -> bytes:
    return base64.b64decode(s.encode("ascii"), validate=True)

def b32e(b: bytes) -> str:
    # lower-case, unpadded, as used in CIDs and addresses
    return base64.b32encode(b).decode("ascii").lower().rstrip("=")

def canonical_json(obj: Any) -> bytes:
    return json.dumps(obj, separators=(",", ":"), sort_keys=True, ensure_ascii=False).encode("utf-8")

def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()

def blake2b(data: bytes, size: int) -> bytes:
    return hashlib.blake2b(data, digest_size=size).digest()
