"""
JSON file storage adapter

One `<key>.json` document per storage key under a data directory. Writes go
to a temporary file first and are moved into place with an atomic replace.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, List, Optional

from skadam.domain.repositories.storage_adapter import StorageAdapter
from skadam.infrastructure.utilities.constants import FileSettings
from skadam.infrastructure.utilities.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class JsonFileStorage(StorageAdapter):
    """Local device storage rendition: independently keyed JSON files"""

    def __init__(self, data_dir: str):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _path_for(self, key: str) -> Path:
        if not key or os.sep in key or key.startswith("."):
            raise PersistenceError(f"Invalid storage key: {key!r}", key)
        return self.data_dir / f"{key}{FileSettings.STORAGE_FILE_SUFFIX}"

    def get(self, key: str) -> Optional[Any]:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as handle:
                return json.load(handle)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("💥 Failed to read %s: %s", path, e)
            raise PersistenceError(f"Failed to read key '{key}': {e}", key) from e

    def set(self, key: str, value: Any) -> None:
        path = self._path_for(key)
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self.data_dir, prefix=f".{key}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(value, handle, ensure_ascii=False, indent=2)
            os.replace(tmp_name, path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            logger.error("💥 Failed to write %s: %s", path, e)
            raise PersistenceError(f"Failed to write key '{key}': {e}", key) from e

    def delete(self, key: str) -> None:
        try:
            self._path_for(key).unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceError(f"Failed to delete key '{key}': {e}", key) from e

    def keys(self) -> List[str]:
        suffix = FileSettings.STORAGE_FILE_SUFFIX
        return sorted(
            path.name[: -len(suffix)]
            for path in self.data_dir.glob(f"*{suffix}")
            if not path.name.startswith(".")
        )
