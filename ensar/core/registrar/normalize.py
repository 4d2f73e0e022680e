"""
Default name normaliser.

Maps a label to the canonical form that gets hashed, using the UTS-46
mapping from the idna package with STD3 rules and non-transitional
processing. Deviation characters such as 'ß' and final sigma are kept, so
the result matches what the registrar hashes for the same name.

Callers can pass their own normaliser to Registrar.connect(); any callable
str -> str that raises NormalizationError works.
"""

from typing import Callable

import idna

from ensar.core.registrar.errors import NormalizationError

Normalizer = Callable[[str], str]


def normalise(name: str) -> str:
    """
    Normalise a single label.

    Raises:
        NormalizationError: name is empty, has a dot after mapping, or has
            a codepoint UTS-46 disallows
    """
    if not isinstance(name, str):
        raise NormalizationError(repr(name), "name must be a string")

    try:
        mapped = idna.uts46_remap(name, std3_rules=True, transitional=False)
    except idna.IDNAError as e:
        raise NormalizationError(name, str(e)) from e

    if not mapped:
        raise NormalizationError(name, "name is empty")

    # Fullwidth and ideographic full stops map to '.'
    if "." in mapped:
        raise NormalizationError(name, "labels cannot contain '.'")

    return mapped
