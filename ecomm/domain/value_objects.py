"""Value Objects for the domain layer.

Value objects are immutable objects that are defined by their attributes
rather than identity. They are interchangeable when their values are equal.
"""

import itertools
import os
import re
import time
from dataclasses import dataclass
from decimal import ROUND_CEILING, Decimal
from typing import Self

from ecomm.domain.exceptions import InvalidIdentifierError

# ============================================================================
# Typed Identifiers
# ============================================================================


_HEX_ID = re.compile(r"[0-9a-fA-F]{24}")
_counter = itertools.count(int.from_bytes(os.urandom(3), "big"))
_process_bytes = os.urandom(5)


@dataclass(frozen=True)
class CatalogId:
    """Strongly-typed catalog identifier.

    Identifiers are 12 bytes rendered as 24 lowercase hexadecimal
    characters: a 4-byte creation timestamp, 5 bytes of per-process
    randomness and a 3-byte counter. Categories and products share the
    format.
    """

    value: str

    @classmethod
    def generate(cls) -> Self:
        """Generate a new identifier.

        Returns:
            New CatalogId.
        """
        timestamp = int(time.time()).to_bytes(4, "big")
        counter = (next(_counter) % 0xFFFFFF).to_bytes(3, "big")
        return cls(value=(timestamp + _process_bytes + counter).hex())

    @classmethod
    def from_string(cls, value: str, field: str = "id") -> Self:
        """Parse an identifier from its hexadecimal representation.

        Args:
            value: 24 hexadecimal characters, any case.
            field: Argument name reported on failure.

        Returns:
            CatalogId instance.

        Raises:
            InvalidIdentifierError: If value is not 24 hex characters.
        """
        if not isinstance(value, str) or not _HEX_ID.fullmatch(value):
            raise InvalidIdentifierError(str(value), field=field)
        return cls(value=value.lower())

    def __str__(self) -> str:
        """Return string representation.

        Returns:
            Lowercase hex string.
        """
        return self.value


# ============================================================================
# Money
# ============================================================================


CENT = Decimal("0.01")


def round_up_to_cents(value: Decimal | float | int) -> Decimal:
    """Round a monetary amount up to two decimal places.

    Ceiling, never half-up or half-even: 19.001 becomes 19.01.
    Floats go through their shortest repr so 19.01 stays 19.01.

    Args:
        value: Raw stored amount.

    Returns:
        Amount quantized to cents.
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_CEILING)
