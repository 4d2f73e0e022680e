"""
Registrar client configuration for ENSAR.

Defines the namespace, name-length rule, decoy batch size and the auction
timing window. Values are fixed once a Registrar is constructed.
"""

import os
from dataclasses import dataclass, fields
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values

from ensar.utils.logger import get_logger
from ensar.utils.validation import validate_address, validate_integer

logger = get_logger("config")

# Prefix for configuration read from the environment or a dotenv file
ENV_PREFIX = "ENSAR_"

# Public ENS registry (Ropsten, and the same address on main net)
DEFAULT_ENS_ADDRESS = "0x112234455c3a32fd11230c42e7bccd4a84e02010"

HOUR = 60 * 60


@dataclass(frozen=True)
class RegistrarConfig:
    """Client-side registrar parameters"""

    # Namespace
    tld: str = "eth"
    ens_address: str = DEFAULT_ENS_ADDRESS

    # Auction rules
    min_length: int = 7  # Names shorter than this can be invalidated
    decoy_count: int = 10  # Hashes per startAuctions batch, target included
    reveal_window: int = 24 * HOUR  # Seconds either side of the registration date

    # Logging
    log_level: str = "INFO"

    def __post_init__(self):
        """Reject values the registrar cannot work with"""
        checks = (
            validate_integer(self.min_length, "min_length"),
            validate_integer(self.decoy_count, "decoy_count", min_val=1),
            validate_integer(self.reveal_window, "reveal_window", min_val=1),
            validate_address(self.ens_address),
        )
        for ok, error in checks:
            if not ok:
                raise ValueError(error)
        if not self.tld:
            raise ValueError("tld must not be empty")


def _coerce(values: Mapping[str, Optional[str]]) -> Dict[str, object]:
    """Map ENSAR_* keys onto RegistrarConfig fields, converting ints."""
    kwargs: Dict[str, object] = {}
    for f in fields(RegistrarConfig):
        raw = values.get(ENV_PREFIX + f.name.upper())
        if raw is None:
            continue
        if f.type in (int, "int"):
            try:
                kwargs[f.name] = int(raw)
            except ValueError:
                raise ValueError(f"{ENV_PREFIX}{f.name.upper()} must be an integer, got {raw!r}")
        else:
            kwargs[f.name] = raw
    return kwargs


def load_config(config_path: Optional[str] = None) -> RegistrarConfig:
    """
    Load configuration from a dotenv file and the environment.

    Process environment variables take precedence over the file. Unset
    fields keep their defaults.

    Args:
        config_path: Optional path to a dotenv file

    Returns:
        RegistrarConfig instance
    """
    values: Dict[str, Optional[str]] = {}
    if config_path:
        values.update(dotenv_values(config_path))
        logger.debug(f"Loaded configuration file {config_path}")

    values.update({k: v for k, v in os.environ.items() if k.startswith(ENV_PREFIX)})

    return RegistrarConfig(**_coerce(values))
