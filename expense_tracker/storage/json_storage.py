# expense_tracker/storage/json_storage.py

"""Key-value storage kept in a single JSON file.

The file holds one JSON object mapping keys to serialized strings, the same
shape as browser local storage. Writes go to a temporary file in the same
directory and are moved into place, so a crash mid-write leaves the previous
contents intact.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from expense_tracker.storage.base import BaseStorage, StorageError

logger = logging.getLogger(__name__)


class JSONFileStorage(BaseStorage):
    def __init__(self, config: dict):
        self.config = config
        self.path = Path(config.get("data_file", "expense_tracker.json"))

    def _read_all(self) -> dict:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            logger.warning("Could not read %s: %s", self.path, exc)
            return {}
        try:
            data = json.loads(text)
        except ValueError as exc:
            logger.warning("Ignoring corrupt storage file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring storage file %s: not a JSON object", self.path)
            return {}
        return data

    def load(self, key):
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def save(self, key, value):
        data = self._read_all()
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise StorageError(f"Could not write {self.path}: {exc}") from exc
        logger.debug("Saved %s to %s", key, self.path)
