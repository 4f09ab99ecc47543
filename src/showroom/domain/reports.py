"""Query and report service over catalog and sales snapshots."""

from collections import Counter
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from showroom.domain.catalog import CatalogStore
from showroom.domain.entities import BestSeller, CatalogEntry, SaleRecord
from showroom.domain.ledger import SalesLedger
from showroom.domain.validation import to_decimal

NO_SALES_YET = "N/A (No sales yet)"


class QueryReportEngine:
    """Read-only views derived from the catalog and the sales ledger.

    Every method works on a fresh snapshot, so results are a pure function of
    the stores' state at the time of the call and its arguments.
    """

    def __init__(self, catalog: CatalogStore, ledger: SalesLedger):
        self.catalog = catalog
        self.ledger = ledger

    def filter(
        self,
        text: str = "",
        min_price: Any = None,
        max_price: Any = None,
        in_stock_only: bool = False,
    ) -> list[CatalogEntry]:
        """Filter catalog entries.

        Args:
            text: Case-insensitive substring of brand or model; empty matches all
            min_price: Inclusive lower price bound, or None for no bound
            max_price: Inclusive upper price bound, or None for no bound
            in_stock_only: If True, only entries with stock left

        Returns:
            Matching entries sorted by brand, then model
        """
        query = (text or "").strip().casefold()
        low = None if min_price is None else to_decimal("min_price", min_price)
        high = None if max_price is None else to_decimal("max_price", max_price)

        matches = []
        for entry in self.catalog.snapshot():
            if query and query not in entry.brand.casefold() and query not in entry.model.casefold():
                continue
            if low is not None and entry.price < low:
                continue
            if high is not None and entry.price > high:
                continue
            if in_stock_only and entry.quantity <= 0:
                continue
            matches.append(entry)
        return sorted(matches, key=lambda entry: (entry.brand, entry.model))

    def total_inventory_value(self) -> Decimal:
        """Sum of price times quantity over all entries."""
        return sum(
            (entry.price * entry.quantity for entry in self.catalog.snapshot()),
            Decimal("0"),
        )

    def total_revenue(self) -> Decimal:
        """Sum of all recorded sale prices."""
        return sum((sale.sale_price for sale in self.ledger.all()), Decimal("0"))

    def total_units_sold(self) -> int:
        return len(self.ledger.all())

    def best_seller(self) -> Optional[BestSeller]:
        """Model with the most sales.

        Ties go to the lexicographically smallest (brand, model).
        """
        counts = Counter((sale.brand, sale.model) for sale in self.ledger.all())
        if not counts:
            return None
        (brand, model), units = min(counts.items(), key=lambda item: (-item[1], item[0]))
        return BestSeller(brand=brand, model=model, units=units)

    def best_selling_model(self) -> str:
        """Best seller as ``"<brand> <model> (<n> units)"`` or NO_SALES_YET."""
        best = self.best_seller()
        return best.label() if best is not None else NO_SALES_YET

    def sales_history(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[SaleRecord]:
        """Sales within an inclusive date range, newest first."""
        sales = [
            sale
            for sale in self.ledger.all()
            if (start_date is None or sale.timestamp.date() >= start_date)
            and (end_date is None or sale.timestamp.date() <= end_date)
        ]
        return sorted(sales, key=lambda sale: sale.timestamp, reverse=True)
