"""Domain model entities for showroom.

These are pure data classes representing business concepts, independent of
how they are stored on disk. Stores hand out these frozen values, so a caller
holding an entry can never mutate catalog state behind the store's back.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


def catalog_key(brand: str, model: str) -> tuple[str, str]:
    """Return the case-insensitive identity key for a brand and model."""
    return (brand.strip().casefold(), model.strip().casefold())


@dataclass(frozen=True)
class CatalogEntry:
    """A tracked vehicle model with price, stock and optional image."""

    brand: str
    model: str
    price: Decimal
    quantity: int
    image_path: str = ""

    @property
    def key(self) -> tuple[str, str]:
        return catalog_key(self.brand, self.model)

    @property
    def in_stock(self) -> bool:
        return self.quantity > 0


@dataclass(frozen=True)
class SaleRecord:
    """One completed sale, fixed at the price charged."""

    timestamp: datetime
    brand: str
    model: str
    sale_price: Decimal

    @property
    def key(self) -> tuple[str, str]:
        return catalog_key(self.brand, self.model)


@dataclass(frozen=True)
class EntryResult:
    """Outcome of an add or update.

    ``image_failed`` is set when an image source was given but could not be
    stored; the entry itself was still saved.
    """

    entry: CatalogEntry
    image_failed: bool = False


@dataclass(frozen=True)
class SaleResult:
    """Post-sale catalog entry together with the sale it produced."""

    entry: CatalogEntry
    sale: SaleRecord


@dataclass(frozen=True)
class BestSeller:
    """Model with the most recorded sales."""

    brand: str
    model: str
    units: int

    def label(self) -> str:
        return f"{self.brand} {self.model} ({self.units} units)"
