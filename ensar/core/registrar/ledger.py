"""
Ledger - the capability surface the registrar client needs from a chain.

The client never speaks RPC itself. A Ledger implementation wraps whatever
transport the caller uses (an RPC provider, a test chain, a recording fake)
and exposes the registry and registrar contract calls below as coroutines.

Implementations should raise LedgerCallFailure for transport errors and
reverts. The registrar passes those through unchanged.
"""

from dataclasses import dataclass
from typing import List, Optional, Protocol, Tuple, runtime_checkable

ZERO_ADDRESS = "0x" + "00" * 20

# (status, deed address, registration date, value, highest bid)
EntryRecord = Tuple[int, str, int, int, int]

# (creation date, owner)
DeedRecord = Tuple[int, str]


@dataclass
class TxParams:
    """
    Transaction parameters for a ledger write.

    value is the ether sent with the call; for new_bid it is the deposit
    that masks the true bid value.
    """
    sender: Optional[str] = None
    value: int = 0
    gas: Optional[int] = None


@runtime_checkable
class Ledger(Protocol):
    """Registry, deed and registrar contract calls."""

    # -- Reads ---------------------------------------------------------------

    async def resolve_owner(self, tld: str) -> str:
        """Owner of the tld node in the registry, i.e. the registrar address."""
        ...

    async def entries(self, registrar: str, hash: str) -> EntryRecord:
        ...

    async def deed_info(self, address: str) -> DeedRecord:
        ...

    async def balance_of(self, address: str) -> int:
        ...

    async def sealed_bids(self, registrar: str, sha_bid: str) -> str:
        """Deed address stored for a sealed bid, zero address once revealed."""
        ...

    async def sha_bid(
        self, registrar: str, hash: str, owner: str, value: int, salt: str
    ) -> str:
        """The contract's own sealed-bid hash. Does not change state."""
        ...

    # -- Writes (each returns a transaction hash) ---------------------------

    async def start_auctions(self, registrar: str, hashes: List[str], tx: TxParams) -> str:
        ...

    async def new_bid(self, registrar: str, sha_bid: str, tx: TxParams) -> str:
        ...

    async def unseal_bid(
        self,
        registrar: str,
        hash: str,
        owner: str,
        value: int,
        salt: str,
        tx: TxParams,
    ) -> str:
        ...

    async def finalize_auction(self, registrar: str, hash: str, tx: TxParams) -> str:
        ...
