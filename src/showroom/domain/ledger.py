"""Sales ledger: append-only history of completed sales."""

import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

import structlog

from showroom.domain.entities import SaleRecord
from showroom.domain.errors import PersistenceError
from showroom.domain.validation import require_name, require_price
from showroom.storage.flatfile import append_line, read_lines
from showroom.storage.mappers import MalformedLineError, line_to_sale, sale_to_line

log = structlog.get_logger()


class SalesLedger:
    """Owns the sale records and the sales-log file they are appended to."""

    def __init__(self, path: Path, clock: Callable[[], datetime] = datetime.now):
        """Initialize sales ledger.

        Args:
            path: Sales-log data file
            clock: Source of sale timestamps
        """
        self.path = Path(path)
        self._clock = clock
        self._sales: tuple[SaleRecord, ...] = ()
        self._lock = threading.Lock()

    def load(self) -> int:
        """Load sale records, skipping malformed lines.

        Returns:
            Number of records loaded
        """
        sales = []
        with self._lock:
            try:
                lines = read_lines(self.path)
            except OSError as e:
                log.error("sales_log_load_failed", path=str(self.path), error=str(e))
                lines = []

            for line_number, line in enumerate(lines, start=1):
                if not line.strip():
                    continue
                try:
                    sales.append(line_to_sale(line))
                except MalformedLineError as e:
                    log.warning(
                        "sale_line_skipped",
                        path=str(self.path),
                        line_number=line_number,
                        reason=str(e),
                    )
            self._sales = tuple(sales)
        log.info("sales_log_loaded", path=str(self.path), sales=len(sales))
        return len(sales)

    def record(self, brand: str, model: str, price: Any) -> SaleRecord:
        """Record a sale at the current time and append it to the sales log.

        Raises:
            ValidationError: If brand, model or price is invalid
            PersistenceError: If the sales log could not be appended to; the
                sale is then not recorded in memory either
        """
        brand = require_name("brand", brand)
        model = require_name("model", model)
        price = require_price(price)

        with self._lock:
            sale = SaleRecord(
                timestamp=self._clock().replace(microsecond=0),
                brand=brand,
                model=model,
                sale_price=price,
            )
            try:
                append_line(self.path, sale_to_line(sale))
            except OSError as e:
                log.error("sales_log_write_failed", path=str(self.path), error=str(e))
                raise PersistenceError(str(self.path), str(e)) from e
            self._sales = self._sales + (sale,)

        log.info("sale_recorded", brand=brand, model=model, price=str(price))
        return sale

    def all(self) -> tuple[SaleRecord, ...]:
        """Point-in-time copy of all sale records, in recording order."""
        return self._sales

    def __len__(self) -> int:
        return len(self._sales)
