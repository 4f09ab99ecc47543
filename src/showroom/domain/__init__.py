"""Domain layer for showroom application."""

__all__ = [
    "AssetManager",
    "CatalogStore",
    "InventoryService",
    "QueryReportEngine",
    "SalesLedger",
]

_EXPORTS = {
    "AssetManager": "showroom.domain.assets",
    "CatalogStore": "showroom.domain.catalog",
    "InventoryService": "showroom.domain.inventory",
    "QueryReportEngine": "showroom.domain.reports",
    "SalesLedger": "showroom.domain.ledger",
}


# Import services lazily; the storage layer imports domain entities directly
def __getattr__(name):
    if name in _EXPORTS:
        import importlib

        return getattr(importlib.import_module(_EXPORTS[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
