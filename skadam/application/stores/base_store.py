"""
Shared lifecycle for the persistent stores: load, mutate, persist, shutdown.
"""

import logging
from contextlib import contextmanager
from typing import Any, Callable, Generator, List, Optional, TypeVar

from skadam.infrastructure.persistence.persistence_writer import PersistenceWriter
from skadam.infrastructure.utilities.exceptions import ValidationError

T = TypeVar("T")


@contextmanager
def domain_validation(field: Optional[str] = None) -> Generator[None, None, None]:
    """Report entity invariant violations as validation errors"""
    try:
        yield
    except ValueError as e:
        raise ValidationError(str(e), field) from e


class PersistentStore:
    """
    Base class for the in-memory stores.

    In-memory state is authoritative. Every mutation is applied first and then
    handed to the persistence writer, whose failures are logged, never raised.
    """

    def __init__(self, writer: PersistenceWriter):
        self._writer = writer
        self._logger = logging.getLogger(self.__class__.__name__)

    def load(self) -> None:
        raise NotImplementedError

    def shutdown(self) -> None:
        """Wait for this store's queued writes"""
        self._writer.flush()

    def _load_records(self, key: str, factory: Callable[[dict], T]) -> Optional[List[T]]:
        """Entities stored under `key`, None when nothing usable is stored"""
        stored = self._writer.load(key)
        if stored is None:
            return None
        if not isinstance(stored, list):
            self._logger.warning("⚠️ Ignoring '%s': expected a list, got %s", key, type(stored).__name__)
            return None

        records: List[T] = []
        for raw in stored:
            try:
                records.append(factory(raw))
            except (KeyError, TypeError, ValueError) as e:
                self._logger.warning("⚠️ Skipping unreadable '%s' record: %s", key, e)
        return records

    def _persist(self, key: str, entities: List[Any]) -> None:
        self._writer.persist(key, [entity.to_dict() for entity in entities])
