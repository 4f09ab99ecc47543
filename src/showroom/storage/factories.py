"""Factory functions for creating a service over a data directory."""

import os
from pathlib import Path
from typing import Optional

import httpx

from showroom.domain.assets import AssetManager
from showroom.domain.catalog import CatalogStore
from showroom.domain.inventory import InventoryService
from showroom.domain.ledger import SalesLedger

DATA_DIR_ENV = "SHOWROOM_DATA_DIR"
INVENTORY_FILE = "inventory.csv"
SALES_LOG_FILE = "sales_log.csv"


def resolve_data_dir(data_dir: Optional[str] = None) -> Path:
    """Return the data directory, creating it if needed.

    Args:
        data_dir: Data directory. If None, checks the SHOWROOM_DATA_DIR
            environment variable, then defaults to ~/.showroom
    """
    if data_dir is None:
        data_dir = os.environ.get(DATA_DIR_ENV)

    if data_dir is None:
        path = Path.home() / ".showroom"
    else:
        path = Path(data_dir).expanduser()
    path.mkdir(parents=True, exist_ok=True)
    return path


def create_inventory_service(
    data_dir: Optional[str] = None,
    client: Optional[httpx.Client] = None,
) -> InventoryService:
    """Create a loaded InventoryService backed by files in ``data_dir``.

    Args:
        data_dir: Data directory (see resolve_data_dir)
        client: Optional HTTP client for fetching remote images

    Returns:
        InventoryService with catalog and sales log loaded
    """
    root = resolve_data_dir(data_dir)
    assets = AssetManager(root, client=client)
    catalog = CatalogStore(root / INVENTORY_FILE, assets)
    ledger = SalesLedger(root / SALES_LOG_FILE)
    service = InventoryService(catalog, ledger, assets)
    service.load()
    return service
