"""
Bid - a sealed bid and the plaintext needed to reveal it.

The ledger only ever sees sha_bid until the reveal. The caller must keep the
whole Bid (in particular secret and value) until the reveal window, since
nothing else can reconstruct it.

Sealed bid encoding, matching the registrar contract's shaBid:

    sha_bid = keccak256(hash[32] || owner[20] || value[32, big-endian] || salt[32])

where salt is hex_secret = keccak256(secret).
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict

from ensar.crypto import bytes_to_hex, hex_to_bytes, keccak256
from ensar.utils.validation import validate_address, validate_hash, validate_integer


def seal_bid(hash: str, owner: str, value: int, salt: str) -> str:
    """
    Compute a sealed bid locally.

    Args:
        hash: Identifier of the name (0x, 32 bytes)
        owner: Address refunds and the deed go to (0x, 20 bytes)
        value: True bid value in wei
        salt: Secret commitment (0x, 32 bytes)

    Returns:
        0x-prefixed sealed bid hash
    """
    for ok, error in (
        validate_hash(hash, "hash"),
        validate_address(owner),
        validate_integer(value, "value"),
        validate_hash(salt, "salt"),
    ):
        if not ok:
            raise ValueError(error)

    packed = (
        hex_to_bytes(hash)
        + hex_to_bytes(owner)
        + value.to_bytes(32, "big")
        + hex_to_bytes(salt)
    )
    return bytes_to_hex(keccak256(packed))


@dataclass(frozen=True)
class Bid:
    """
    A sealed bid as built by Registrar.bid_factory.

    Attributes:
        name: Normalized name
        hash: Identifier, sha3(name)
        value: True bid value in wei
        owner: Bidder address
        secret: Caller's secret, never sent before the reveal
        hex_secret: sha3(secret), sent at reveal
        sha_bid: Sealed bid submitted with the deposit
    """
    name: str
    hash: str
    value: int
    owner: str
    secret: str
    hex_secret: str
    sha_bid: str

    def expected_commitment(self) -> str:
        """Recompute sha_bid from the plaintext fields."""
        return seal_bid(self.hash, self.owner, self.value, self.hex_secret)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe form for the caller to store until the reveal."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Bid":
        return cls(
            name=data["name"],
            hash=data["hash"],
            value=int(data["value"]),
            owner=data["owner"],
            secret=data["secret"],
            hex_secret=data["hex_secret"],
            sha_bid=data["sha_bid"],
        )
