"""
Entry - auction and ownership state of a name.

An Entry is a snapshot of what the registrar contract stores for one
identifier. Its mode is never stored: it is derived from the status, the
registration date and the clock each time it is read.

Timeline of an auction (status AUCTION), relative to registration_date:

    ----- AUCTION -----|-- REVEAL --|-- FINALIZE --|--- FINALIZE_OPEN ---
                   -window          0           +window

The registration date itself belongs to FINALIZE.
"""

import time
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional

from ensar.core.registrar.ledger import ZERO_ADDRESS

# Default length of the reveal and finalize windows, in seconds
DEFAULT_WINDOW = 24 * 60 * 60

DEFAULT_MIN_LENGTH = 7


# =============================================================================
# Enums
# =============================================================================


class Status(IntEnum):
    """Status code stored by the registrar contract."""
    OPEN = 0       # No auction yet
    AUCTION = 1    # Auction running or awaiting finalization
    OWNED = 2      # Auction finalized, name has an owner


class Mode(str, Enum):
    """Derived phase of a name, as shown to a bidder."""
    INVALID = "invalid"                # Too short and never auctioned
    CAN_INVALIDATE = "can-invalidate"  # Too short but auctioned anyway
    OPEN = "open"                      # An auction can be started
    AUCTION = "auction"                # Sealed bids accepted
    REVEAL = "reveal"                  # Last window before the deadline
    FINALIZE = "finalize"              # Deadline passed, finalize now
    FINALIZE_OPEN = "finalize-open"    # Finalization overdue
    OWNED = "owned"


# =============================================================================
# State Machine
# =============================================================================


def compute_mode(
    name: str,
    status: Status,
    registration_date: float,
    now: float,
    min_length: int = DEFAULT_MIN_LENGTH,
    window: int = DEFAULT_WINDOW,
) -> Mode:
    """
    Classify a name's auction phase.

    Args:
        name: Normalized name (its length is checked against min_length)
        status: Registrar status code
        registration_date: Auction deadline, unix seconds
        now: Current time, unix seconds
        min_length: Shortest name the registrar treats as valid
        window: Length of the reveal and finalize windows, seconds

    Returns:
        The Mode for this instant
    """
    status = Status(status)

    if len(name) < min_length:
        return Mode.INVALID if status == Status.OPEN else Mode.CAN_INVALIDATE

    if status == Status.OPEN:
        return Mode.OPEN

    if status == Status.AUCTION:
        remaining = registration_date - now
        if remaining > window:
            return Mode.AUCTION
        if remaining > 0:
            return Mode.REVEAL
        if remaining >= -window:
            return Mode.FINALIZE
        return Mode.FINALIZE_OPEN

    return Mode.OWNED


# =============================================================================
# Data Structures
# =============================================================================


@dataclass(frozen=True)
class Deed:
    """
    Escrow contract holding a bid's deposit or a name's locked value.

    When the entry has no deed, address is the zero address and the other
    fields are all None.
    """
    address: str
    balance: Optional[int] = None
    creation_date: Optional[int] = None
    owner: Optional[str] = None

    def __post_init__(self):
        present = [v is not None for v in (self.balance, self.creation_date, self.owner)]
        if any(present) and not all(present):
            raise ValueError("Deed balance, creation_date and owner must be set together")

    @classmethod
    def empty(cls, address: str = ZERO_ADDRESS) -> "Deed":
        """The no-deed sentinel."""
        return cls(address=address)

    @property
    def exists(self) -> bool:
        return self.owner is not None


@dataclass(frozen=True)
class Entry:
    """
    Registrar record for one name.

    name is the normalized name, or the identifier itself when the entry
    was looked up by hash and the name is unknown.
    """
    name: str
    hash: str
    status: Status
    deed: Deed
    registration_date: int
    value: int
    highest_bid: int
    min_length: int = DEFAULT_MIN_LENGTH
    window: int = DEFAULT_WINDOW

    def __post_init__(self):
        object.__setattr__(self, "status", Status(self.status))
        if self.status == Status.OPEN and self.deed.exists:
            raise ValueError(f"Open entry {self.hash} cannot have a deed")
        if self.status == Status.OWNED and not self.deed.exists:
            raise ValueError(f"Owned entry {self.hash} must have a deed")

    def mode_at(self, now: float) -> Mode:
        """Mode at a given unix time."""
        return compute_mode(
            self.name,
            self.status,
            self.registration_date,
            now,
            min_length=self.min_length,
            window=self.window,
        )

    @property
    def mode(self) -> Mode:
        """Mode right now."""
        return self.mode_at(time.time())
