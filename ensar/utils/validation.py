"""
Input Validation - shape checks for values crossing the ledger boundary.

Addresses and hashes arrive from callers and from the ledger as 0x-prefixed
hex strings. These helpers follow a (is_valid, error_message) convention so
callers can decide whether to raise or branch.
"""

import re
from typing import Any, Tuple

# =============================================================================
# Constants
# =============================================================================

ADDRESS_SIZE = 20
HASH_SIZE = 32

MIN_AMOUNT = 0
MAX_UINT256 = 2**256 - 1

_HEX_RE = re.compile(r"^0x[0-9a-fA-F]*$")


# =============================================================================
# Validation Functions
# =============================================================================


def validate_hex(value: Any, name: str, expected_bytes: int) -> Tuple[bool, str]:
    """
    Validate a 0x-prefixed hex string of a fixed byte length.

    Args:
        value: Value to validate
        name: Field name for error messages
        expected_bytes: Exact expected length in bytes

    Returns:
        (is_valid, error_message)
    """
    if not isinstance(value, str):
        return False, f"{name} must be str, got {type(value).__name__}"

    if not _HEX_RE.match(value):
        return False, f"{name} must be 0x-prefixed hex"

    digits = len(value) - 2
    if digits != expected_bytes * 2:
        return False, f"{name} must be {expected_bytes} bytes, got {digits / 2:g}"

    return True, ""


def validate_address(address: Any) -> Tuple[bool, str]:
    """Validate an account or contract address."""
    return validate_hex(address, "address", ADDRESS_SIZE)


def validate_hash(hash_value: Any, name: str = "hash") -> Tuple[bool, str]:
    """Validate a 32-byte hash."""
    return validate_hex(hash_value, name, HASH_SIZE)


def validate_integer(
    value: Any,
    name: str,
    min_val: int = MIN_AMOUNT,
    max_val: int = MAX_UINT256,
) -> Tuple[bool, str]:
    """
    Validate integer within bounds.

    bool is rejected even though it subclasses int.

    Returns:
        (is_valid, error_message)
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False, f"{name} must be int, got {type(value).__name__}"

    if value < min_val:
        return False, f"{name} must be >= {min_val}, got {value}"

    if value > max_val:
        return False, f"{name} must be <= {max_val}, got {value}"

    return True, ""


def is_hash(value: Any) -> bool:
    """True if value looks like a 32-byte hash with a 0x or 0X prefix."""
    if isinstance(value, str) and value.startswith("0X"):
        value = "0x" + value[2:]
    return validate_hash(value)[0]
