"""
Registrar Module.

Client for the sealed-bid auction registrar:
- Entry state machine (Status, Mode, compute_mode)
- Sealed bids (Bid, seal_bid)
- Ledger capability protocol
- Auction orchestration (Registrar)
"""

from ensar.core.registrar.errors import (
    RegistrarError,
    NameTooShort,
    InsufficientDeposit,
    NormalizationError,
    LedgerCallFailure,
    RegistrarNotFound,
)

from ensar.core.registrar.ledger import (
    Ledger,
    TxParams,
    ZERO_ADDRESS,
)

from ensar.core.registrar.entry import (
    Status,
    Mode,
    Deed,
    Entry,
    compute_mode,
    DEFAULT_WINDOW,
)

from ensar.core.registrar.bid import Bid, seal_bid
from ensar.core.registrar.normalize import Normalizer, normalise
from ensar.core.registrar.registrar import Registrar

__all__ = [
    # Errors
    "RegistrarError",
    "NameTooShort",
    "InsufficientDeposit",
    "NormalizationError",
    "LedgerCallFailure",
    "RegistrarNotFound",
    # Ledger
    "Ledger",
    "TxParams",
    "ZERO_ADDRESS",
    # Entry
    "Status",
    "Mode",
    "Deed",
    "Entry",
    "compute_mode",
    "DEFAULT_WINDOW",
    # Bid
    "Bid",
    "seal_bid",
    # Normalisation
    "Normalizer",
    "normalise",
    # Orchestration
    "Registrar",
]
