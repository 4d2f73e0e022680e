"""
Registrar - client for the sealed-bid auction registrar of a top level domain.

Auction lifecycle driven from the client side:
1. open_auction: start an auction, hidden among random decoy hashes
2. bid_factory + submit_bid: seal a bid and send it with a covering deposit
3. unseal_bid: reveal the plaintext during the reveal window
4. finalize_auction: after the registration date, let the contract assign
   the name to the highest bidder

Usage:

    registrar = await Registrar.connect(ledger)

    await registrar.open_auction("foobarbaz", TxParams(sender=me))
    bid = await registrar.bid_factory("foobarbaz", me, 10**18, "secret")
    await registrar.submit_bid(bid, TxParams(sender=me, value=2 * 10**18))
    ...
    await registrar.unseal_bid(bid, TxParams(sender=me))
    ...
    await registrar.finalize_auction("foobarbaz", TxParams(sender=me))

All checks that can fail without the ledger (name length, deposit) run
before any call is made. Ledger failures are raised unchanged; nothing is
retried.
"""

import secrets
from typing import List, Optional

from ensar.core.config import RegistrarConfig
from ensar.core.registrar.bid import Bid
from ensar.core.registrar.entry import Deed, Entry
from ensar.core.registrar.errors import InsufficientDeposit, NameTooShort, RegistrarNotFound
from ensar.core.registrar.ledger import Ledger, TxParams
from ensar.core.registrar.normalize import Normalizer, normalise
from ensar.crypto import namehash, random_hash, sha3
from ensar.utils.logger import get_logger
from ensar.utils.validation import is_hash

logger = get_logger("registrar")


class Registrar:
    """
    Client for one registrar contract.

    Build it with Registrar.connect(), which resolves the registrar address
    first. The constructor itself does no I/O.
    """

    def __init__(
        self,
        ledger: Ledger,
        address: str,
        config: Optional[RegistrarConfig] = None,
        normalizer: Normalizer = normalise,
    ):
        self.ledger = ledger
        self.address = address
        self.config = config or RegistrarConfig()
        self.normalizer = normalizer
        self.tld = self.config.tld
        self.min_length = self.config.min_length
        self.root_node = namehash(self.tld)

    @classmethod
    async def connect(
        cls,
        ledger: Ledger,
        config: Optional[RegistrarConfig] = None,
        normalizer: Normalizer = normalise,
    ) -> "Registrar":
        """
        Resolve the registrar for config.tld and return a ready client.

        Raises:
            RegistrarNotFound: the registry has no owner for the tld
        """
        config = config or RegistrarConfig()
        address = await ledger.resolve_owner(config.tld)
        if not address or int(address, 16) == 0:
            logger.warning(f"No registrar owns .{config.tld}")
            raise RegistrarNotFound(config.tld)

        logger.info(f"Connected to .{config.tld} registrar at {address}")
        return cls(ledger, address, config=config, normalizer=normalizer)

    # =========================================================================
    # Name handling
    # =========================================================================

    def _check_length(self, name: str) -> None:
        if len(name) < self.min_length:
            logger.warning(f"Rejected {name!r}: shorter than {self.min_length} characters")
            raise NameTooShort(name, self.min_length)

    def _normalise(self, name: str) -> str:
        """Normalise and enforce the minimum length."""
        normalised = self.normalizer(name)
        self._check_length(normalised)
        return normalised

    # =========================================================================
    # Queries
    # =========================================================================

    async def get_deed(self, address: str) -> Deed:
        """
        Get the properties of a Deed at a given address.

        Also used by get_entry.
        """
        creation_date, owner = await self.ledger.deed_info(address)
        balance = await self.ledger.balance_of(address)
        return Deed(
            address=address,
            balance=int(balance),
            creation_date=int(creation_date),
            owner=owner,
        )

    async def get_entry(self, name_or_hash: str) -> Entry:
        """
        Get the entry for a name, or for an identifier given as 0x hex.

        When looked up by identifier, the entry's name is the identifier.
        """
        if is_hash(name_or_hash):
            name = hash_ = name_or_hash.lower()
        else:
            name = self.normalizer(name_or_hash)
            hash_ = sha3(name)

        status, deed_address, registration_date, value, highest_bid = (
            await self.ledger.entries(self.address, hash_)
        )
        logger.debug(f"Entry {hash_[:10]}...: status={status} deed={deed_address}")

        if int(deed_address, 16) != 0:
            deed = await self.get_deed(deed_address)
        else:
            deed = Deed.empty(deed_address)

        return Entry(
            name=name,
            hash=hash_,
            status=status,
            deed=deed,
            registration_date=int(registration_date),
            value=int(value),
            highest_bid=int(highest_bid),
            min_length=self.min_length,
            window=self.config.reveal_window,
        )

    # =========================================================================
    # Auction
    # =========================================================================

    def _decoy_batch(self, target: str) -> List[str]:
        """
        Random decoys with the target at a uniformly random position.

        All hashes in the batch are distinct.
        """
        size = self.config.decoy_count
        hashes: List[str] = []
        while len(hashes) < size:
            candidate = random_hash()
            if candidate != target and candidate not in hashes:
                hashes.append(candidate)
        hashes[secrets.randbelow(size)] = target
        return hashes

    async def open_auction(self, name: str, tx: Optional[TxParams] = None) -> str:
        """
        Open an auction for the desired name.

        Auctions are also opened on randomly generated hashes so an observer
        cannot tell which name the sender is interested in.

        Returns:
            Transaction hash
        """
        hash_ = sha3(self._normalise(name))
        hashes = self._decoy_batch(hash_)

        tx_hash = await self.ledger.start_auctions(self.address, hashes, tx or TxParams())
        logger.info(f"startAuctions sent with {len(hashes)} hashes: {tx_hash}")
        return tx_hash

    async def bid_factory(self, name: str, owner: str, value: int, secret: str) -> Bid:
        """
        Construct a Bid.

        The sealed bid comes from the registrar contract's shaBid view, so it
        is exactly what the contract will recompute at reveal time. Keep the
        returned Bid until the reveal window.
        """
        normalised = self._normalise(name)
        hash_ = sha3(normalised)
        hex_secret = sha3(secret)
        sha_bid = await self.ledger.sha_bid(self.address, hash_, owner, value, hex_secret)

        return Bid(
            name=normalised,
            hash=hash_,
            value=value,
            owner=owner,
            secret=secret,
            hex_secret=hex_secret,
            sha_bid=sha_bid,
        )

    async def submit_bid(self, bid: Bid, tx: TxParams) -> str:
        """
        Submit a sealed bid and deposit.

        tx.value is the deposit and must be at least bid.value; the true
        value stays hidden inside the sealed bid.

        Raises:
            InsufficientDeposit: before anything is sent
        """
        if tx.value < bid.value:
            logger.warning(f"Deposit {tx.value} does not cover bid on {bid.name!r}")
            raise InsufficientDeposit(tx.value, bid.value)

        tx_hash = await self.ledger.new_bid(self.address, bid.sha_bid, tx)
        logger.info(f"newBid sent for {bid.sha_bid[:10]}...: {tx_hash}")
        return tx_hash

    async def unseal_bid(self, bid: Bid, tx: Optional[TxParams] = None) -> str:
        """
        Reveal a bid during the reveal period.

        The contract rebuilds the sealed bid from these parameters and matches
        it to the stored deposit, refunding whatever is not at stake. It
        rejects the call if no such sealed bid was submitted.
        """
        tx_hash = await self.ledger.unseal_bid(
            self.address,
            bid.hash,
            bid.owner,
            bid.value,
            bid.hex_secret,
            tx or TxParams(),
        )
        logger.info(f"unsealBid sent for {bid.sha_bid[:10]}...: {tx_hash}")
        return tx_hash

    async def is_bid_revealed(self, bid: Bid) -> bool:
        """Whether a bid has been revealed (its sealed bid record cleared)."""
        deed = await self.ledger.sealed_bids(self.address, bid.sha_bid)
        return int(deed, 16) == 0

    async def finalize_auction(self, name: str, tx: Optional[TxParams] = None) -> str:
        """
        Finalize the auction.

        After the registration date the contract makes the highest bidder the
        owner of the name's node.
        """
        hash_ = sha3(self.normalizer(name))
        tx_hash = await self.ledger.finalize_auction(self.address, hash_, tx or TxParams())
        logger.info(f"finalizeAuction sent for {hash_[:10]}...: {tx_hash}")
        return tx_hash

    # =========================================================================
    # Not yet implemented
    # =========================================================================

    async def transfer(self, name: str, new_owner: str, tx: Optional[TxParams] = None) -> str:
        """The owner of a name may transfer it, and its deed, at any time."""
        raise NotImplementedError("transfer is not implemented")

    async def release_deed(self, name: str, tx: Optional[TxParams] = None) -> str:
        """After one year the owner can release the name and get the deposit back."""
        raise NotImplementedError("release_deed is not implemented")

    async def invalidate_name(self, name: str, tx: Optional[TxParams] = None) -> str:
        """Invalidate a registered name shorter than the minimum length."""
        raise NotImplementedError("invalidate_name is not implemented")

    async def transfer_registrars(self, name: str, tx: Optional[TxParams] = None) -> str:
        """Move a deed to a newer registrar during an upgrade."""
        raise NotImplementedError("transfer_registrars is not implemented")


__all__ = ["Registrar"]
