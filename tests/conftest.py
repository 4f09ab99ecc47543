"""Shared pytest fixtures for showroom tests."""

import shutil
import tempfile
from datetime import datetime, timedelta
from pathlib import Path

import httpx
import pytest
import structlog

from showroom.domain.assets import AssetManager
from showroom.domain.catalog import CatalogStore
from showroom.domain.ledger import SalesLedger
from showroom.storage.factories import create_inventory_service

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x01" * 64


class TickingClock:
    """Clock that advances one minute per call."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        now = self.current
        self.current = now + timedelta(minutes=1)
        return now


def image_handler(request: httpx.Request) -> httpx.Response:
    """Fake image host used instead of the network."""
    if request.url.host == "unreachable.test":
        raise httpx.ConnectError("Name or service not known", request=request)
    path = request.url.path
    if path.endswith(".jpg") or path.endswith(".jpeg"):
        return httpx.Response(200, content=JPEG_BYTES, headers={"content-type": "image/jpeg"})
    if path.endswith(".png") or path == "/render":
        return httpx.Response(200, content=PNG_BYTES, headers={"content-type": "image/png"})
    if path.endswith(".html"):
        return httpx.Response(200, text="<html>gallery</html>", headers={"content-type": "text/html"})
    return httpx.Response(404, text="not found")


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo any structlog configuration a CLI test installed."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def data_dir():
    """Create a temporary data directory for testing."""
    path = Path(tempfile.mkdtemp(prefix="showroom-"))
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def http_client():
    """HTTP client answering from image_handler."""
    client = httpx.Client(transport=httpx.MockTransport(image_handler))
    yield client
    client.close()


@pytest.fixture
def assets(data_dir, http_client):
    """Create an AssetManager over the temporary data directory."""
    return AssetManager(data_dir, client=http_client)


@pytest.fixture
def catalog(data_dir, assets):
    """Create a loaded, empty CatalogStore."""
    store = CatalogStore(data_dir / "inventory.csv", assets)
    store.load()
    return store


@pytest.fixture
def clock():
    return TickingClock(datetime(2024, 3, 1, 10, 0, 0, 123456))


@pytest.fixture
def ledger(data_dir, clock):
    """Create a loaded, empty SalesLedger with a predictable clock."""
    sales = SalesLedger(data_dir / "sales_log.csv", clock=clock)
    sales.load()
    return sales


@pytest.fixture
def service(data_dir, http_client):
    """Create an InventoryService over the temporary data directory."""
    return create_inventory_service(str(data_dir), client=http_client)


@pytest.fixture
def sample_image(data_dir):
    """A local JPEG outside the managed image directory."""
    source_dir = data_dir.parent / f"{data_dir.name}-sources"
    source_dir.mkdir()
    path = source_dir / "corolla.JPG"
    path.write_bytes(JPEG_BYTES)
    yield path
    shutil.rmtree(source_dir, ignore_errors=True)


@pytest.fixture
def sample_entries(service):
    """Populate the catalog with a few models."""
    service.add_entry("Toyota", "Corolla", "20000.00", 5)
    service.add_entry("Toyota", "Camry", "28000.00", 0)
    service.add_entry("Honda", "Civic", "24000.00", 3)
    service.add_entry("BMW", "X5", "65000.00", 1)
    return service


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
