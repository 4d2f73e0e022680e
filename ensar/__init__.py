"""
ENS Auction Registrar client (ENSAR)

Client-side protocol library for the sealed-bid name auction registrar:
- Sealed bid construction and commitment hashing
- Entry state machine (auction phases from ledger state and time)
- Decoy batches hiding which name an auction was opened for
- Commit/reveal/finalize calls through a pluggable ledger
"""

__version__ = "0.6.4"
