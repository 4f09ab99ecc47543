"""Line-oriented file primitives shared by the catalog, ledger and image store."""

import os
import tempfile
from pathlib import Path

ENCODING = "utf-8"


def read_lines(path: Path) -> list[str]:
    """Return the lines of a data file without line terminators.

    A missing file is created empty (with its parent directories) so that a
    fresh data directory loads as an empty store.
    """
    path = Path(path)
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch()
        return []
    with path.open("r", encoding=ENCODING, newline="") as f:
        return [line.rstrip("\r\n") for line in f]


def write_bytes_atomic(path: Path, data: bytes) -> None:
    """Write ``data`` to ``path`` through a temporary file and rename it into place.

    Readers see either the previous content or the complete new content. On
    failure the temporary file is removed and the original OSError propagates.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


def rewrite_lines(path: Path, lines: list[str]) -> None:
    """Replace the whole file with ``lines``, one per line."""
    content = "".join(f"{line}\n" for line in lines)
    write_bytes_atomic(path, content.encode(ENCODING))


def append_line(path: Path, line: str) -> None:
    """Append a single line to the end of the file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding=ENCODING, newline="") as f:
        f.write(f"{line}\n")
        f.flush()
