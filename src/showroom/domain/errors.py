"""Shared domain error messages and error types."""

from decimal import Decimal
from typing import Any, Optional


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field} {value!r}: {reason}")


class NotFoundError(DomainError):
    """Requested catalog entry does not exist."""

    def __init__(self, brand: str, model: str):
        self.brand = brand
        self.model = model
        super().__init__(model_not_found(brand, model))


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DuplicateKeyError(ConflictError):
    """A catalog entry with the same brand and model already exists."""

    def __init__(self, brand: str, model: str):
        self.brand = brand
        self.model = model
        super().__init__(duplicate_model(brand, model))


class OutOfStockError(DomainError):
    """Sale attempted on a model with no remaining stock."""

    def __init__(self, brand: str, model: str, price: Optional[Decimal] = None):
        self.brand = brand
        self.model = model
        self.price = price
        super().__init__(model_out_of_stock(brand, model))


class AssetError(DomainError):
    """Image asset could not be fetched, written or removed."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")


class AssetFetchError(AssetError):
    """Image source is malformed, unreachable or unreadable."""


class AssetWriteError(AssetError):
    """Managed image file could not be written."""


class AssetDeleteError(AssetError):
    """Managed image file could not be removed."""


class PersistenceError(Exception):
    """A catalog rewrite or sales-log append failed.

    Kept apart from DomainError so callers can tell a storage failure, which
    may be worth retrying, from a rejected request.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not write {path}: {reason}")


def model_not_found(brand: str, model: str) -> str:
    """Return message for missing catalog entry."""
    return f"Model '{brand} {model}' not found"


def duplicate_model(brand: str, model: str) -> str:
    """Return message for duplicate catalog key."""
    return f"Model '{brand} {model}' already exists"


def model_out_of_stock(brand: str, model: str) -> str:
    """Return message when a sale finds no stock."""
    return f"Model '{brand} {model}' is out of stock"
