"""
Registrar errors.

Every failure is a fresh instance carrying the values that caused it, so
callers can match on the type and still report the context.
"""


class RegistrarError(Exception):
    """Base class for all registrar client failures."""


class NameTooShort(RegistrarError, ValueError):
    """Name is shorter than the registrar's minimum length."""

    def __init__(self, name: str, min_length: int):
        self.name = name
        self.min_length = min_length
        super().__init__(
            f"Name is too short: {name!r} has {len(name)} characters, "
            f"minimum is {min_length}"
        )


class InsufficientDeposit(RegistrarError, ValueError):
    """Deposit sent with a sealed bid does not cover the bid value."""

    def __init__(self, deposit: int, value: int):
        self.deposit = deposit
        self.value = value
        super().__init__(
            f"Deposit must be at least the value of the bid "
            f"(deposit {deposit} < value {value})"
        )


class NormalizationError(RegistrarError, ValueError):
    """Name contains characters the normalizer does not allow."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Cannot normalise {name!r}: {reason}")


class LedgerCallFailure(RegistrarError):
    """
    A ledger read or write failed (transport error, revert, bad response).

    Raised by ledger adapters. The registrar lets it through untouched.
    """

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Ledger call {operation} failed: {reason}")


class RegistrarNotFound(RegistrarError):
    """The registry has no registrar for the requested top level domain."""

    def __init__(self, tld: str):
        self.tld = tld
        super().__init__(f"No registrar owns the {tld!r} domain")
