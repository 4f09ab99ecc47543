"""Inventory domain service: the entry point collaborators call into."""

from datetime import date
from decimal import Decimal
from typing import Any, Optional

import structlog

from showroom.domain.assets import AssetManager
from showroom.domain.catalog import CatalogStore
from showroom.domain.entities import BestSeller, CatalogEntry, EntryResult, SaleRecord, SaleResult
from showroom.domain.errors import NotFoundError, PersistenceError
from showroom.domain.ledger import SalesLedger
from showroom.domain.reports import QueryReportEngine

log = structlog.get_logger()


class InventoryService:
    """Service for managing the catalog, recording sales and reporting.

    All methods are synchronous. Domain failures are raised as DomainError
    subclasses; storage failures as PersistenceError.
    """

    def __init__(self, catalog: CatalogStore, ledger: SalesLedger, assets: AssetManager):
        """Initialize inventory service.

        Args:
            catalog: Catalog store
            ledger: Sales ledger
            assets: Asset manager shared with the catalog store
        """
        self.catalog = catalog
        self.ledger = ledger
        self.assets = assets
        self.reports = QueryReportEngine(catalog, ledger)

    def load(self) -> None:
        """Load the catalog and the sales log from disk."""
        self.catalog.load()
        self.ledger.load()

    def add_entry(
        self,
        brand: str,
        model: str,
        price: Any,
        quantity: Any,
        image_source: str = "",
    ) -> EntryResult:
        """Add a new model.

        Args:
            brand: Brand name
            model: Model name
            price: Price, greater than zero
            quantity: Stock quantity, not negative
            image_source: Optional image URL or local file path

        Returns:
            EntryResult; ``image_failed`` is set if the image could not be stored

        Raises:
            DuplicateKeyError: If the model already exists
            ValidationError: If a field is invalid
        """
        return self.catalog.create(brand, model, price, quantity, image_source)

    def update_entry(
        self,
        brand: str,
        model: str,
        new_brand: Optional[str] = None,
        new_model: Optional[str] = None,
        new_price: Any = None,
        new_quantity: Any = None,
        image_source: str = "",
    ) -> EntryResult:
        """Update an existing model; None leaves a field unchanged.

        Raises:
            NotFoundError: If the model does not exist
            DuplicateKeyError: If renaming onto another existing model
            ValidationError: If a field is invalid
        """
        return self.catalog.update(
            brand,
            model,
            new_brand=new_brand,
            new_model=new_model,
            new_price=new_price,
            new_quantity=new_quantity,
            new_image_source=image_source,
        )

    def remove_entry(self, brand: str, model: str) -> CatalogEntry:
        """Remove a model and its image. Returns the removed entry."""
        return self.catalog.remove(brand, model)

    def sell(self, brand: str, model: str) -> SaleResult:
        """Sell one unit of a model at its current price.

        The stock decrement and the sales-log append are separate writes; if
        the append fails the decrement stands and PersistenceError propagates.

        Raises:
            NotFoundError: If the model does not exist
            OutOfStockError: If the model has no stock left
        """
        entry = self.catalog.sell(brand, model)
        try:
            sale = self.ledger.record(entry.brand, entry.model, entry.price)
        except PersistenceError:
            log.error(
                "sale_not_recorded",
                brand=entry.brand,
                model=entry.model,
                remaining=entry.quantity,
            )
            raise
        return SaleResult(entry=entry, sale=sale)

    def get_entry(self, brand: str, model: str) -> Optional[CatalogEntry]:
        """Get a model by case-insensitive brand and model, or None."""
        return self.catalog.get(brand, model)

    def require_entry(self, brand: str, model: str) -> CatalogEntry:
        """Get a model or raise NotFoundError."""
        entry = self.catalog.get(brand, model)
        if entry is None:
            raise NotFoundError(brand, model)
        return entry

    def all_entries(self) -> tuple[CatalogEntry, ...]:
        return self.catalog.snapshot()

    def all_brands(self) -> list[str]:
        return self.catalog.all_brands()

    def entries_for_brand(self, brand: str) -> list[CatalogEntry]:
        return self.catalog.models_of_brand(brand)

    def filter(
        self,
        text: str = "",
        min_price: Any = None,
        max_price: Any = None,
        in_stock_only: bool = False,
    ) -> list[CatalogEntry]:
        return self.reports.filter(text, min_price, max_price, in_stock_only)

    def all_sales(self) -> tuple[SaleRecord, ...]:
        return self.ledger.all()

    def sales_history(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[SaleRecord]:
        return self.reports.sales_history(start_date, end_date)

    def total_inventory_value(self) -> Decimal:
        return self.reports.total_inventory_value()

    def total_revenue(self) -> Decimal:
        return self.reports.total_revenue()

    def total_units_sold(self) -> int:
        return self.reports.total_units_sold()

    def best_seller(self) -> Optional[BestSeller]:
        return self.reports.best_seller()

    def best_selling_model(self) -> str:
        return self.reports.best_selling_model()

    def store_image(self, source: str, brand: str, model: str) -> Optional[str]:
        """Store an image for a brand and model; None if it failed.

        May block on network or disk I/O.
        """
        return self.assets.store(source, brand, model)
