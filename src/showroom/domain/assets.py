"""Managed image storage keyed by catalog identity."""

import os
import re
from pathlib import Path, PurePosixPath
from typing import Optional
from urllib.parse import urlparse

import httpx
import structlog

from showroom.domain.errors import AssetDeleteError, AssetError, AssetFetchError, AssetWriteError
from showroom.storage.flatfile import write_bytes_atomic

log = structlog.get_logger()

DEFAULT_IMAGE_DIR = "images"
DEFAULT_FETCH_TIMEOUT = 15.0
ALLOWED_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif")
DEFAULT_EXTENSION = ".png"

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9_\s-]")
_WHITESPACE = re.compile(r"\s+")


def safe_name(brand: str, model: str) -> str:
    """Build a filesystem-safe base name from a brand and model."""
    name = _UNSAFE_CHARS.sub("", f"{brand}_{model}").strip()
    return _WHITESPACE.sub("_", name)


def is_remote(source: str) -> bool:
    return source.lower().startswith("http")


def image_extension(source: str) -> str:
    """Return the allowed extension of ``source`` or the default ``.png``.

    For URLs only the path is inspected, so query strings are ignored.
    """
    path = urlparse(source).path if is_remote(source) else source
    suffix = PurePosixPath(path.replace("\\", "/")).suffix.lower()
    return suffix if suffix in ALLOWED_EXTENSIONS else DEFAULT_EXTENSION


class AssetManager:
    """Stores, resolves and deletes image files under the data directory.

    Images live in ``<data_dir>/<image_dir_name>/<brand>_<model>.<ext>`` and are
    referred to by the relative path ``<image_dir_name>/<file name>``. Storing
    an image for a key that already has one with the same extension replaces
    the file in place.
    """

    def __init__(
        self,
        data_dir: Path,
        image_dir_name: str = DEFAULT_IMAGE_DIR,
        client: Optional[httpx.Client] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize asset manager.

        Args:
            data_dir: Data root the relative image paths are resolved against
            image_dir_name: Name of the image directory inside the data root
            client: Optional HTTP client used for remote sources
            timeout: Fetch timeout in seconds; defaults to SHOWROOM_FETCH_TIMEOUT or 15
        """
        if timeout is None:
            timeout = float(os.environ.get("SHOWROOM_FETCH_TIMEOUT", DEFAULT_FETCH_TIMEOUT))

        self.data_dir = Path(data_dir)
        self.image_dir_name = image_dir_name
        self.image_dir = self.data_dir / image_dir_name
        self.timeout = timeout
        self._client = client

    def relative_path(self, filename: str) -> str:
        return f"{self.image_dir_name}/{filename}"

    def store(self, source: str, brand: str, model: str) -> Optional[str]:
        """Fetch an image and store it under the name derived from brand and model.

        Args:
            source: HTTP(S) URL or local file path
            brand: Brand the image belongs to
            model: Model the image belongs to

        Returns:
            Relative path of the stored image, or None if it could not be
            fetched or written. A failed store never touches an existing image.
        """
        source = (source or "").strip()
        if not source:
            return None

        filename = safe_name(brand, model) + image_extension(source)
        try:
            data = self.fetch(source)
            self._write(filename, data)
        except AssetError as e:
            log.warning(
                "image_store_failed",
                source=source,
                brand=brand,
                model=model,
                reason=e.reason,
            )
            return None

        relative = self.relative_path(filename)
        log.info("image_stored", source=source, path=relative, size=len(data))
        return relative

    def fetch(self, source: str) -> bytes:
        """Read image bytes from a URL or local path.

        Raises:
            AssetFetchError: If the source is malformed, unreachable or unreadable
        """
        if is_remote(source):
            return self._fetch_remote(source)
        return self._fetch_local(source)

    def _fetch_remote(self, url: str) -> bytes:
        parsed = urlparse(url)
        if parsed.scheme.lower() not in ("http", "https") or not parsed.netloc:
            raise AssetFetchError(url, "malformed URL")

        try:
            if self._client is not None:
                resp = self._client.get(url, timeout=self.timeout, follow_redirects=True)
            else:
                with httpx.Client() as client:
                    resp = client.get(url, timeout=self.timeout, follow_redirects=True)
            resp.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise AssetFetchError(url, str(e) or type(e).__name__) from e

        content_type = resp.headers.get("content-type", "")
        if "text/html" in content_type:
            raise AssetFetchError(url, "response is not an image")
        if not resp.content:
            raise AssetFetchError(url, "empty response")
        log.debug("image_downloaded", url=url, size=len(resp.content))
        return resp.content

    def _fetch_local(self, source: str) -> bytes:
        path = Path(source).expanduser()
        if not path.is_file() or not os.access(path, os.R_OK):
            raise AssetFetchError(source, "local file not found or not readable")
        try:
            return path.read_bytes()
        except OSError as e:
            raise AssetFetchError(source, str(e)) from e

    def _write(self, filename: str, data: bytes) -> Path:
        target = self.image_dir / filename
        try:
            write_bytes_atomic(target, data)
        except OSError as e:
            raise AssetWriteError(str(target), str(e)) from e
        return target

    def resolve(self, relative_path: str) -> Optional[Path]:
        """Map a recorded image path to its file in the image directory.

        Accepts ``images/<file>`` as well as the older ``data/images/<file>``
        form. Returns None for anything that does not name a file directly
        inside the image directory.
        """
        if not relative_path or not relative_path.strip():
            return None
        parts = PurePosixPath(relative_path.strip().replace("\\", "/")).parts
        if len(parts) < 2 or parts[-2] != self.image_dir_name:
            return None
        if parts[-1] in (".", ".."):
            return None
        return self.image_dir / parts[-1]

    def is_managed(self, relative_path: str) -> bool:
        return self.resolve(relative_path) is not None

    def exists(self, relative_path: str) -> bool:
        target = self.resolve(relative_path)
        return target is not None and target.is_file()

    def delete(self, relative_path: str) -> bool:
        """Delete a managed image.

        A blank path or a missing file is a no-op and counts as success. Any
        other failure is logged and reported as False, never raised.
        """
        if not relative_path or not relative_path.strip():
            return True

        target = self.resolve(relative_path)
        if target is None:
            log.warning("image_delete_skipped", path=relative_path, reason="not a managed image path")
            return False

        try:
            self._unlink(target)
        except AssetDeleteError as e:
            log.warning("image_delete_failed", path=relative_path, reason=e.reason)
            return False
        return True

    def _unlink(self, target: Path) -> None:
        try:
            target.unlink()
        except FileNotFoundError:
            log.debug("image_delete_missing", path=str(target))
            return
        except OSError as e:
            raise AssetDeleteError(str(target), str(e)) from e
        log.info("image_deleted", path=str(target))
