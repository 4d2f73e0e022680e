"""
Shared fixtures: an in-memory ledger that records every call.

FakeLedger keeps just enough registrar bookkeeping (entries, sealed bids,
deeds) to walk a name through open -> bid -> reveal -> finalize. It is a test
double, not a model of the real contract.
"""

import asyncio
from typing import Dict, List, Optional, Set, Tuple

import pytest

from ensar.core.config import RegistrarConfig
from ensar.core.registrar import (
    LedgerCallFailure,
    Registrar,
    Status,
    TxParams,
    ZERO_ADDRESS,
    seal_bid,
)
from ensar.crypto import keccak256, hex_to_bytes, bytes_to_hex

REGISTRAR_ADDRESS = "0x" + "ab" * 20
ALICE = "0x" + "11" * 20
BOB = "0x" + "22" * 20

DAY = 24 * 60 * 60
AUCTION_LENGTH = 5 * DAY
START_TIME = 1_480_000_000

WRITE_METHODS = ("start_auctions", "new_bid", "unseal_bid", "finalize_auction")


def run(coro):
    """Drive a coroutine to completion."""
    return asyncio.run(coro)


class FakeLedger:
    """Recording ledger double with a settable clock."""

    def __init__(self, registrar: str = REGISTRAR_ADDRESS, now: int = START_TIME):
        self.registrar = registrar
        self.now = now
        self.calls: List[Tuple[str, tuple]] = []
        self.fail_on: Set[str] = set()

        self.entries_: Dict[str, list] = {}
        self.sealed: Dict[str, str] = {}
        self.deeds: Dict[str, Tuple[int, str]] = {}
        self.balances: Dict[str, int] = {}
        self._tx_counter = 0

    # -- helpers ------------------------------------------------------------

    def _record(self, method: str, *args):
        self.calls.append((method, args))
        if method in self.fail_on:
            raise LedgerCallFailure(method, "injected failure")

    def _tx(self) -> str:
        self._tx_counter += 1
        return bytes_to_hex(keccak256(self._tx_counter.to_bytes(8, "big")))

    @property
    def writes(self) -> List[Tuple[str, tuple]]:
        return [c for c in self.calls if c[0] in WRITE_METHODS]

    def calls_to(self, method: str) -> List[tuple]:
        return [args for name, args in self.calls if name == method]

    def _entry(self, hash: str) -> list:
        return self.entries_.setdefault(hash, [Status.OPEN, ZERO_ADDRESS, 0, 0, 0])

    # -- reads --------------------------------------------------------------

    async def resolve_owner(self, tld: str) -> str:
        self._record("resolve_owner", tld)
        return self.registrar if tld == "eth" else ZERO_ADDRESS

    async def entries(self, registrar: str, hash: str):
        self._record("entries", registrar, hash)
        status, deed, registration_date, value, highest = self._entry(hash)
        return int(status), deed, registration_date, value, highest

    async def deed_info(self, address: str):
        self._record("deed_info", address)
        return self.deeds[address]

    async def balance_of(self, address: str) -> int:
        self._record("balance_of", address)
        return self.balances.get(address, 0)

    async def sealed_bids(self, registrar: str, sha_bid: str) -> str:
        self._record("sealed_bids", registrar, sha_bid)
        return self.sealed.get(sha_bid, ZERO_ADDRESS)

    async def sha_bid(self, registrar, hash, owner, value, salt) -> str:
        self._record("sha_bid", registrar, hash, owner, value, salt)
        return seal_bid(hash, owner, value, salt)

    # -- writes -------------------------------------------------------------

    async def start_auctions(self, registrar, hashes, tx: TxParams) -> str:
        self._record("start_auctions", registrar, list(hashes), tx)
        for h in hashes:
            entry = self._entry(h)
            if entry[0] == Status.OPEN:
                entry[0] = Status.AUCTION
                entry[2] = self.now + AUCTION_LENGTH
        return self._tx()

    async def new_bid(self, registrar, sha_bid, tx: TxParams) -> str:
        self._record("new_bid", registrar, sha_bid, tx)
        deed = "0x" + keccak256(hex_to_bytes(sha_bid))[-20:].hex()
        self.sealed[sha_bid] = deed
        self.deeds[deed] = (self.now, tx.sender)
        self.balances[deed] = tx.value
        return self._tx()

    async def unseal_bid(self, registrar, hash, owner, value, salt, tx: TxParams) -> str:
        self._record("unseal_bid", registrar, hash, owner, value, salt, tx)
        sha = seal_bid(hash, owner, value, salt)
        deed = self.sealed.pop(sha, None)
        if deed is None:
            raise LedgerCallFailure("unseal_bid", "no matching sealed bid")

        entry = self._entry(hash)
        if value > entry[4]:
            # New highest bid: the old highest bid sets the price
            entry[3] = entry[4]
            entry[4] = value
            entry[1] = deed
            self.balances[deed] = value
        else:
            entry[3] = max(entry[3], value)
            self.balances[deed] = 0
        return self._tx()

    async def finalize_auction(self, registrar, hash, tx: TxParams) -> str:
        self._record("finalize_auction", registrar, hash, tx)
        entry = self._entry(hash)
        if entry[0] != Status.AUCTION or entry[1] == ZERO_ADDRESS:
            raise LedgerCallFailure("finalize_auction", "nothing to finalize")
        entry[0] = Status.OWNED
        entry[3] = entry[3] or entry[4]
        self.balances[entry[1]] = entry[3]
        return self._tx()


@pytest.fixture
def ledger():
    return FakeLedger()


@pytest.fixture
def config():
    return RegistrarConfig()


@pytest.fixture
def registrar(ledger, config):
    reg = run(Registrar.connect(ledger, config))
    ledger.calls.clear()
    return reg
