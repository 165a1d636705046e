"""
File-backed Key-Value Store.

One UTF-8 file per key inside a data directory. Writes go to a temporary
file in the same directory and are moved into place with os.replace, so a
reader sees either the old value or the new one.

Bytes that are not valid UTF-8 come back as lone surrogates
(errors="surrogateescape") and are written back unchanged, so a damaged
file can be read, inspected and copied without losing data.
"""

import os
import re
import tempfile
from pathlib import Path

from blogpad.backend.core.logging import get_logger

logger = get_logger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")
_ERRORS = "surrogateescape"


class JsonFileStore:
    """Stores each key as <data_dir>/<key>.json."""

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = Path(data_dir)

    def _path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key) or key in {".", ".."}:
            raise ValueError(f"Invalid store key: {key!r}")
        return self.data_dir / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8", errors=_ERRORS)

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=self.data_dir, prefix=f".{key}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", errors=_ERRORS) as f:
                f.write(value)
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.debug("Store key written", extra={"key": key, "bytes": len(value)})

    def delete(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)
