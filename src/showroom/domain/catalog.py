"""Catalog store: the authoritative set of catalog entries and its data file."""

import threading
from dataclasses import replace
from pathlib import Path
from typing import Any, Optional

import structlog

from showroom.domain.assets import AssetManager
from showroom.domain.entities import CatalogEntry, EntryResult, catalog_key
from showroom.domain.errors import (
    DuplicateKeyError,
    NotFoundError,
    OutOfStockError,
    PersistenceError,
    ValidationError,
)
from showroom.domain.validation import require_name, require_price, require_quantity
from showroom.storage.flatfile import read_lines, rewrite_lines
from showroom.storage.mappers import MalformedLineError, entry_to_line, line_to_entry

log = structlog.get_logger()

Key = tuple[str, str]


class CatalogStore:
    """Owns the catalog entries and the file they are persisted to.

    Mutations are serialized by a lock and build a new mapping which replaces
    the published one only after the file has been rewritten, so readers
    always see either the state before or after a mutation and never wait on
    file I/O.
    """

    def __init__(self, path: Path, assets: AssetManager):
        """Initialize catalog store.

        Args:
            path: Catalog data file
            assets: Asset manager used to swap and delete entry images
        """
        self.path = Path(path)
        self.assets = assets
        self._entries: dict[Key, CatalogEntry] = {}
        self._lock = threading.Lock()

    def load(self) -> int:
        """Load entries from the data file, skipping malformed lines.

        Returns:
            Number of entries loaded
        """
        entries: dict[Key, CatalogEntry] = {}
        with self._lock:
            try:
                lines = read_lines(self.path)
            except OSError as e:
                log.error("catalog_load_failed", path=str(self.path), error=str(e))
                lines = []

            for line_number, line in enumerate(lines, start=1):
                if not line.strip():
                    continue
                try:
                    entry = line_to_entry(line)
                except MalformedLineError as e:
                    log.warning(
                        "catalog_line_skipped",
                        path=str(self.path),
                        line_number=line_number,
                        reason=str(e),
                    )
                    continue
                if entry.key in entries:
                    log.warning(
                        "catalog_line_skipped",
                        path=str(self.path),
                        line_number=line_number,
                        reason=f"duplicate model {entry.brand} {entry.model}",
                    )
                    continue
                entries[entry.key] = entry

            self._entries = entries
        log.info("catalog_loaded", path=str(self.path), entries=len(entries))
        return len(entries)

    def _persist(self, entries: dict[Key, CatalogEntry]) -> None:
        try:
            rewrite_lines(self.path, [entry_to_line(entry) for entry in entries.values()])
        except OSError as e:
            log.error("catalog_write_failed", path=str(self.path), error=str(e))
            raise PersistenceError(str(self.path), str(e)) from e

    def _validated(self, entry: CatalogEntry) -> CatalogEntry:
        image_path = (entry.image_path or "").strip()
        if image_path and not self.assets.is_managed(image_path):
            raise ValidationError("image_path", entry.image_path, "not a managed image path")
        return CatalogEntry(
            brand=require_name("brand", entry.brand),
            model=require_name("model", entry.model),
            price=require_price(entry.price),
            quantity=require_quantity(entry.quantity),
            image_path=image_path,
        )

    def _require(self, brand: str, model: str) -> CatalogEntry:
        entry = self._entries.get(catalog_key(brand, model))
        if entry is None:
            raise NotFoundError(brand, model)
        return entry

    def add(self, entry: CatalogEntry) -> CatalogEntry:
        """Add an entry whose image, if any, is already stored.

        Raises:
            DuplicateKeyError: If an entry with the same brand and model exists
            ValidationError: If a field violates the entry invariants
            PersistenceError: If the data file could not be rewritten
        """
        entry = self._validated(entry)
        with self._lock:
            if entry.key in self._entries:
                raise DuplicateKeyError(entry.brand, entry.model)
            updated = dict(self._entries)
            updated[entry.key] = entry
            self._persist(updated)
            self._entries = updated
        log.info("model_added", brand=entry.brand, model=entry.model, quantity=entry.quantity)
        return entry

    def create(
        self,
        brand: str,
        model: str,
        price: Any,
        quantity: Any,
        image_source: str = "",
    ) -> EntryResult:
        """Create an entry, storing its image from ``image_source`` first.

        The duplicate check happens before the image is stored, so an existing
        entry's image is never overwritten by a rejected add. If the image
        cannot be stored the entry is added without one.

        Raises:
            DuplicateKeyError: If an entry with the same brand and model exists
            ValidationError: If a field violates the entry invariants
            PersistenceError: If the data file could not be rewritten
        """
        entry = CatalogEntry(
            brand=require_name("brand", brand),
            model=require_name("model", model),
            price=require_price(price),
            quantity=require_quantity(quantity),
        )
        source = (image_source or "").strip()
        image_failed = False

        with self._lock:
            if entry.key in self._entries:
                raise DuplicateKeyError(entry.brand, entry.model)

            if source:
                stored = self.assets.store(source, entry.brand, entry.model)
                if stored is None:
                    image_failed = True
                    log.warning("image_add_failed", brand=entry.brand, model=entry.model, source=source)
                else:
                    entry = replace(entry, image_path=stored)

            updated = dict(self._entries)
            updated[entry.key] = entry
            try:
                self._persist(updated)
            except PersistenceError:
                self.assets.delete(entry.image_path)
                raise
            self._entries = updated

        log.info("model_added", brand=entry.brand, model=entry.model, quantity=entry.quantity)
        return EntryResult(entry=entry, image_failed=image_failed)

    def update(
        self,
        brand: str,
        model: str,
        new_brand: Optional[str] = None,
        new_model: Optional[str] = None,
        new_price: Any = None,
        new_quantity: Any = None,
        new_image_source: str = "",
    ) -> EntryResult:
        """Update an entry in place.

        Fields passed as None keep their current value. A non-empty
        ``new_image_source`` that differs from the stored image path is stored
        under the new brand and model; the old image is deleted once the
        catalog has been saved. If the new image cannot be stored the old path
        is kept and the other fields are still updated.

        Raises:
            NotFoundError: If no entry matches brand and model
            DuplicateKeyError: If the new brand and model belong to another entry
            ValidationError: If a field violates the entry invariants
            PersistenceError: If the data file could not be rewritten
        """
        source = (new_image_source or "").strip()
        image_failed = False

        with self._lock:
            current = self._require(brand, model)
            entry = CatalogEntry(
                brand=current.brand if new_brand is None else require_name("brand", new_brand),
                model=current.model if new_model is None else require_name("model", new_model),
                price=current.price if new_price is None else require_price(new_price),
                quantity=current.quantity if new_quantity is None else require_quantity(new_quantity),
                image_path=current.image_path,
            )
            if entry.key != current.key and entry.key in self._entries:
                raise DuplicateKeyError(entry.brand, entry.model)

            if source and source != current.image_path:
                stored = self.assets.store(source, entry.brand, entry.model)
                if stored is None:
                    image_failed = True
                    log.warning(
                        "image_update_failed",
                        brand=entry.brand,
                        model=entry.model,
                        kept=current.image_path,
                    )
                else:
                    entry = replace(entry, image_path=stored)

            # Rebuild so a renamed entry keeps its position in the file
            updated = {
                (entry.key if key == current.key else key): (entry if key == current.key else value)
                for key, value in self._entries.items()
            }
            # Legacy and current path forms can name the same file
            image_changed = self.assets.resolve(entry.image_path) != self.assets.resolve(
                current.image_path
            )
            try:
                self._persist(updated)
            except PersistenceError:
                if image_changed:
                    self.assets.delete(entry.image_path)
                raise
            self._entries = updated

            if image_changed:
                self.assets.delete(current.image_path)

        log.info(
            "model_updated",
            brand=current.brand,
            model=current.model,
            new_brand=entry.brand,
            new_model=entry.model,
        )
        return EntryResult(entry=entry, image_failed=image_failed)

    def remove(self, brand: str, model: str) -> CatalogEntry:
        """Remove an entry and delete its image.

        Image deletion is best-effort and happens after the catalog is saved.

        Raises:
            NotFoundError: If no entry matches brand and model
            PersistenceError: If the data file could not be rewritten
        """
        with self._lock:
            current = self._require(brand, model)
            updated = {key: value for key, value in self._entries.items() if key != current.key}
            self._persist(updated)
            self._entries = updated
            self.assets.delete(current.image_path)
        log.info("model_removed", brand=current.brand, model=current.model)
        return current

    def sell(self, brand: str, model: str) -> CatalogEntry:
        """Take one unit out of stock.

        Returns:
            The entry after the sale

        Raises:
            NotFoundError: If no entry matches brand and model
            OutOfStockError: If the entry has no stock left
            PersistenceError: If the data file could not be rewritten
        """
        with self._lock:
            current = self._require(brand, model)
            if current.quantity <= 0:
                raise OutOfStockError(current.brand, current.model, current.price)
            entry = replace(current, quantity=current.quantity - 1)
            updated = dict(self._entries)
            updated[entry.key] = entry
            self._persist(updated)
            self._entries = updated
        log.info("model_sold", brand=entry.brand, model=entry.model, remaining=entry.quantity)
        return entry

    def get(self, brand: str, model: str) -> Optional[CatalogEntry]:
        """Get an entry by case-insensitive brand and model."""
        return self._entries.get(catalog_key(brand, model))

    def all_brands(self) -> list[str]:
        """Distinct brands, sorted."""
        return sorted({entry.brand for entry in self._entries.values()})

    def models_of_brand(self, brand: str) -> list[CatalogEntry]:
        """Entries whose brand matches case-insensitively."""
        wanted = brand.strip().casefold()
        return [entry for entry in self._entries.values() if entry.brand.casefold() == wanted]

    def snapshot(self) -> tuple[CatalogEntry, ...]:
        """Point-in-time copy of all entries."""
        return tuple(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

