"""Mapper functions to convert between domain entities and data-file lines.

Catalog lines hold five comma-separated fields
``brand,model,price,quantity,image_path``; the image path is the last field
and is taken verbatim, so it may itself contain commas. Sales lines hold
``timestamp,brand,model,sale_price`` with a ``yyyy-MM-dd HH:mm:ss`` timestamp.
"""

from datetime import datetime

from showroom.domain.entities import CatalogEntry, SaleRecord
from showroom.domain.errors import ValidationError
from showroom.domain.validation import require_name, require_price, require_quantity

FIELD_DELIMITER = ","
CATALOG_FIELD_COUNT = 5
SALE_FIELD_COUNT = 4
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class MalformedLineError(ValueError):
    """A data-file line that cannot be turned into an entity."""


def _split(line: str, count: int) -> list[str]:
    parts = line.split(FIELD_DELIMITER, count - 1)
    if len(parts) < count:
        raise MalformedLineError(f"expected {count} fields, found {len(parts)}")
    return [part.strip() for part in parts]


def entry_to_line(entry: CatalogEntry) -> str:
    """Convert a catalog entry to its data-file line."""
    return FIELD_DELIMITER.join(
        [entry.brand, entry.model, str(entry.price), str(entry.quantity), entry.image_path]
    )


def line_to_entry(line: str) -> CatalogEntry:
    """Parse a catalog data-file line.

    Raises:
        MalformedLineError: If the line has too few fields or invalid values
    """
    brand, model, price, quantity, image_path = _split(line, CATALOG_FIELD_COUNT)
    try:
        return CatalogEntry(
            brand=require_name("brand", brand),
            model=require_name("model", model),
            price=require_price(price),
            quantity=require_quantity(quantity),
            image_path=image_path,
        )
    except ValidationError as e:
        raise MalformedLineError(str(e)) from e


def sale_to_line(sale: SaleRecord) -> str:
    """Convert a sale record to its data-file line."""
    return FIELD_DELIMITER.join(
        [sale.timestamp.strftime(TIMESTAMP_FORMAT), sale.brand, sale.model, str(sale.sale_price)]
    )


def line_to_sale(line: str) -> SaleRecord:
    """Parse a sales-log data-file line.

    Raises:
        MalformedLineError: If the line has too few fields or invalid values
    """
    timestamp, brand, model, sale_price = _split(line, SALE_FIELD_COUNT)
    try:
        parsed_timestamp = datetime.strptime(timestamp, TIMESTAMP_FORMAT)
    except ValueError as e:
        raise MalformedLineError(f"invalid timestamp {timestamp!r}") from e
    try:
        return SaleRecord(
            timestamp=parsed_timestamp,
            brand=require_name("brand", brand),
            model=require_name("model", model),
            sale_price=require_price(sale_price),
        )
    except ValidationError as e:
        raise MalformedLineError(str(e)) from e
