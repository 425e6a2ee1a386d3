"""
Two-phase persistence: stores mutate in memory, then hand the new value here.

In background mode writes run on a single worker thread, so writes to the
same key land in submission order. In sync mode they run inline. Either way
a failed write is logged and counted, never raised to the caller.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any, List, Optional

from skadam.domain.repositories.storage_adapter import StorageAdapter
from skadam.infrastructure.logging.logging_config import PerformanceLogger
from skadam.infrastructure.utilities.constants import SchemaSettings
from skadam.infrastructure.utilities.exceptions import PersistenceError

BACKGROUND = "background"
SYNC = "sync"


def wrap_envelope(payload: Any) -> dict:
    return {
        SchemaSettings.VERSION_FIELD: SchemaSettings.CURRENT_VERSION,
        SchemaSettings.DATA_FIELD: payload,
    }


def unwrap_envelope(key: str, stored: Any) -> Any:
    """Return the data of an envelope; a bare value is a legacy unversioned write"""
    if isinstance(stored, dict) and SchemaSettings.VERSION_FIELD in stored:
        version = stored[SchemaSettings.VERSION_FIELD]
        if not isinstance(version, int) or version > SchemaSettings.CURRENT_VERSION:
            raise PersistenceError(
                f"Unsupported schema version {version!r} for key '{key}'", key
            )
        return stored.get(SchemaSettings.DATA_FIELD)
    return stored


class PersistenceWriter:
    """Best-effort writer in front of a StorageAdapter"""

    def __init__(self, storage: StorageAdapter, mode: str = BACKGROUND):
        if mode not in (BACKGROUND, SYNC):
            raise ValueError(f"Unknown persistence mode: {mode}")
        self.storage = storage
        self.mode = mode
        self.failure_count = 0
        self.last_error: Optional[str] = None
        self._lock = threading.Lock()
        self._pending: List[Future] = []
        self._executor: Optional[ThreadPoolExecutor] = (
            ThreadPoolExecutor(max_workers=1, thread_name_prefix="skadam-persist")
            if mode == BACKGROUND
            else None
        )
        self.logger = logging.getLogger(self.__class__.__name__)

    def __repr__(self):
        return f"PersistenceWriter(mode={self.mode}, storage={type(self.storage).__name__})"

    def load(self, key: str) -> Optional[Any]:
        """
        Read a key for store start-up.

        Unreadable values and newer schema versions are logged and treated as
        absent so the store falls back to its defaults.
        """
        try:
            stored = self.storage.get(key)
            if stored is None:
                return None
            return unwrap_envelope(key, stored)
        except PersistenceError as e:
            self.logger.error("💥 LOAD FAILED for '%s': %s", key, e)
            return None

    def persist(self, key: str, payload: Any) -> None:
        """Queue (or run) the write of `payload` under `key`"""
        envelope = wrap_envelope(payload)
        if self._executor is None:
            self._write(key, envelope)
            return

        with self._lock:
            self._pending = [future for future in self._pending if not future.done()]
            self._pending.append(self._executor.submit(self._write, key, envelope))

    def _write(self, key: str, envelope: dict) -> None:
        try:
            with PerformanceLogger("persist", self.logger, {"storage_key": key}):
                self.storage.set(key, envelope)
        except Exception as e:  # pylint: disable=broad-exception-caught
            with self._lock:
                self.failure_count += 1
                self.last_error = f"{key}: {e}"
            self.logger.error(
                "💥 PERSIST FAILED for '%s': %s", key, e, extra={"storage_key": key}
            )

    def flush(self, timeout: Optional[float] = None) -> None:
        """Wait for queued writes"""
        with self._lock:
            pending = list(self._pending)
        if pending:
            wait(pending, timeout=timeout)

    def shutdown(self) -> None:
        self.flush()
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
            self.logger.info("🛑 Persistence writer stopped")
