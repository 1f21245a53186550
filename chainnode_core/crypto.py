from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict
from cryptography.hazmat.primitives.asymmetric import rsa, ec
from cryptography.hazmat.primitives import serialization
from .constants import (
    DEFAULT_NETWORK, DEFAULT_PEER_KEY_BITS, PEER_KEY_ALGORITHM, PROTOCOL_SECP256K1, RSA_PUBLIC_EXPONENT,
    SECP256K1, SUPPORTED_KEY_TYPES, ADDRESS_PAYLOAD_LEN, ADDRESS_CHECKSUM_LEN,
)
from .errors import InvalidKeyError
from .utils import b32e, b64e, b64d, blake2b, sha256

"""
chainnode_core.crypto
---------------------
Key material for a node:

- PeerKeypair: RSA keypair identifying the node on the network layer
- KeyInfo: secp256k1 wallet key with a derivable address

Address format: <network><protocol><base32(blake2b-160(pubkey) || checksum)>,
checksum = blake2b-32(protocol || payload).
"""

# --------- Peer identity (RSA) ----------
class PeerKeypair:
    def __init__(self, private_key: rsa.RSAPrivateKey):
        self._sk = private_key

    @classmethod
    def from_bytes(cls, raw: bytes) -> "PeerKeypair":
        try:
            sk = serialization.load_der_private_key(raw, password=None)
        except (ValueError, TypeError) as e:
            raise InvalidKeyError(f"invalid peer key: {e}") from e
        if not isinstance(sk, rsa.RSAPrivateKey):
            raise InvalidKeyError("peer key is not an RSA key")
        return cls(sk)

    def to_bytes(self) -> bytes:
        return self._sk.private_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )

    def public_bytes(self) -> bytes:
        return self._sk.public_key().public_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )

    @property
    def key_size(self) -> int:
        return self._sk.key_size

    def peer_id(self) -> str:
        # sha2-256 multihash of the public key, base32
        return "b" + b32e(bytes([0x12, 0x20]) + sha256(self.public_bytes()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PeerKeypair):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __hash__(self) -> int:
        return hash(self.to_bytes())

    def __repr__(self) -> str:
        return f"PeerKeypair({PEER_KEY_ALGORITHM}-{self.key_size}, id={self.peer_id()})"


def generate_peer_key(bits: int = DEFAULT_PEER_KEY_BITS) -> PeerKeypair:
    sk = rsa.generate_private_key(public_exponent=RSA_PUBLIC_EXPONENT, key_size=bits)
    return PeerKeypair(sk)


# --------- Wallet keys (secp256k1) ----------
@dataclass(frozen=True)
class KeyInfo:
    """
    Private key material for one wallet account.

    Immutable: the address is derived on demand, never stored, so a KeyInfo
    can be imported as-is into any wallet.
    """
    private_key: bytes = field(repr=False)
    key_type: str = SECP256K1

    def _signing_key(self) -> ec.EllipticCurvePrivateKey:
        if self.key_type not in SUPPORTED_KEY_TYPES:
            raise InvalidKeyError(f"unsupported key type: {self.key_type!r}")
        if not isinstance(self.private_key, (bytes, bytearray)) or len(self.private_key) != 32:
            raise InvalidKeyError("secp256k1 private key must be 32 bytes")
        try:
            return ec.derive_private_key(int.from_bytes(self.private_key, "big"), ec.SECP256K1())
        except ValueError as e:
            raise InvalidKeyError(f"invalid secp256k1 private key: {e}") from e

    def public_key(self) -> bytes:
        return self._signing_key().public_key().public_bytes(
            encoding=serialization.Encoding.X962,
            format=serialization.PublicFormat.UncompressedPoint,
        )

    def address(self, network: str = DEFAULT_NETWORK) -> str:
        payload = blake2b(self.public_key(), ADDRESS_PAYLOAD_LEN)
        protocol = bytes([PROTOCOL_SECP256K1])
        checksum = blake2b(protocol + payload, ADDRESS_CHECKSUM_LEN)
        return f"{network}{PROTOCOL_SECP256K1}{b32e(payload + checksum)}"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.key_type, "private_key": b64e(bytes(self.private_key))}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KeyInfo":
        try:
            raw = b64d(data["private_key"])
        except (KeyError, ValueError, AttributeError, TypeError) as e:
            raise InvalidKeyError(f"malformed key info: {e}") from e
        return cls(private_key=raw, key_type=data.get("type", SECP256K1))


def generate_key_info() -> KeyInfo:
    sk = ec.generate_private_key(ec.SECP256K1())
    return KeyInfo(private_key=sk.private_numbers().private_value.to_bytes(32, "big"))
