"""Local filesystem implementation of the key-value store."""

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from fitness_coach.services.store import KeyValueStore

_logger = logging.getLogger(__name__)


@dataclass
class FileKeyValueStore(KeyValueStore):
    """Stores each namespace as a JSON file inside a directory."""

    directory: Path

    def read(self, key: str) -> str | None:
        """Return the file contents for a key, or None when missing."""
        try:
            data = self._path(key).read_bytes()
        except FileNotFoundError:
            return None
        # Undecodable bytes are passed through as corrupt text for the codec.
        return data.decode("utf-8", errors="replace")

    def write(self, key: str, raw: str) -> None:
        """Atomically replace the file for a key."""
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self._path(key)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.directory, prefix=f".{key}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(raw)
            os.replace(tmp_name, target)
        except Exception:
            _logger.exception("Failed to write store key=%s", key)
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def remove(self, key: str) -> None:
        """Delete the file for a key if it exists."""
        self._path(key).unlink(missing_ok=True)

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid store key: {key!r}")
        return self.directory / f"{key}.json"
