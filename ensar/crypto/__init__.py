"""
Cryptographic primitives for ENSAR.

This module provides:
- Keccak-256 hashing (the registrar contract's sha3)
- A canonical hex adapter that always yields 0x-prefixed output
- ENS namehash for deriving registry nodes
- Random hashes used as decoy auction identifiers

Design Notes:
-------------
The registrar contract hashes with Ethereum's Keccak-256, which is not the
same as NIST SHA3-256 (different padding). Every identifier, secret
commitment and sealed bid produced here must match what the contract
computes, so all hashing funnels through keccak256().
"""

import secrets
from typing import Union

from Crypto.Hash import keccak


# =============================================================================
# Constants
# =============================================================================

# Size of a Keccak-256 digest
HASH_SIZE = 32

# Length of a 0x-prefixed digest string
HEX_HASH_LENGTH = 2 + 2 * HASH_SIZE

ZERO_HASH = "0x" + "00" * HASH_SIZE


# =============================================================================
# Hashing
# =============================================================================


def keccak256(data: bytes) -> bytes:
    """
    Compute Keccak-256 hash (Ethereum-style).

    Used for: identifiers, secret commitments, sealed bids, namehash.
    """
    k = keccak.new(digest_bits=256)
    k.update(data)
    return k.digest()


def sha3(data: Union[str, bytes]) -> str:
    """
    Hash a string or bytes and return canonical 0x-prefixed hex.

    Strings are hashed over their UTF-8 encoding, the same way the contract
    hashes a name label. Output is always lower-case and 66 characters long.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    elif not isinstance(data, (bytes, bytearray)):
        raise TypeError(f"sha3 expects str or bytes, got {type(data).__name__}")
    return bytes_to_hex(keccak256(bytes(data)))


def namehash(name: str) -> str:
    """
    Compute the EIP-137 namehash of a dotted name.

    namehash('') is 32 zero bytes; each label is folded in from the right:
    node = keccak256(node || keccak256(label)).
    """
    node = bytes(HASH_SIZE)
    if name:
        for label in reversed(name.split(".")):
            node = keccak256(node + keccak256(label.encode("utf-8")))
    return bytes_to_hex(node)


def random_hash() -> str:
    """Hash of 32 bytes of fresh OS entropy."""
    return sha3(secrets.token_bytes(HASH_SIZE))


# =============================================================================
# Utility Functions
# =============================================================================


def bytes_to_hex(data: bytes) -> str:
    """Convert bytes to hex string with 0x prefix."""
    return "0x" + data.hex()


def hex_to_bytes(hex_str: str) -> bytes:
    """Convert hex string (with or without 0x prefix) to bytes."""
    if hex_str.startswith("0x") or hex_str.startswith("0X"):
        hex_str = hex_str[2:]
    return bytes.fromhex(hex_str)


__all__ = [
    "HASH_SIZE",
    "HEX_HASH_LENGTH",
    "ZERO_HASH",
    "keccak256",
    "sha3",
    "namehash",
    "random_hash",
    "bytes_to_hex",
    "hex_to_bytes",
]
