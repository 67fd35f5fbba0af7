"""Domain layer module.

Contains identifiers, money rounding, and the catalog error taxonomy.
"""

from ecomm.domain.exceptions import (
    CatalogError,
    CategoryIntegrityError,
    CategoryNotFoundError,
    DeadlineExceededError,
    InternalError,
    InvalidArgumentError,
    InvalidIdentifierError,
    NotFoundError,
    StorageError,
)
from ecomm.domain.value_objects import CatalogId, round_up_to_cents

__all__ = [
    # Exceptions
    "CatalogError",
    "CategoryIntegrityError",
    "CategoryNotFoundError",
    "DeadlineExceededError",
    "InternalError",
    "InvalidArgumentError",
    "InvalidIdentifierError",
    "NotFoundError",
    "StorageError",
    # Value objects
    "CatalogId",
    "round_up_to_cents",
]
