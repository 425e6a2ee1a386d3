"""
SQLAlchemy implementation of the storage adapter
"""

import logging
from typing import Any, List, Optional

from sqlalchemy import select

from skadam.domain.repositories.storage_adapter import StorageAdapter
from skadam.infrastructure.database.models import StoredDocument
from skadam.infrastructure.database.operations import DatabaseManager
from skadam.infrastructure.repositories.session_handler import managed_session
from skadam.infrastructure.utilities.constants import SchemaSettings


class SQLAlchemyStorage(StorageAdapter):
    """Keyed documents in the `documents` table"""

    def __init__(self, db_manager: DatabaseManager):
        self._db_manager = db_manager
        self._logger = logging.getLogger(self.__class__.__name__)

    def _session(self, action: str, key: Optional[str] = None):
        return managed_session(self._db_manager.get_session_factory(), action, key)

    def get(self, key: str) -> Optional[Any]:
        with self._session(f"read key '{key}'", key) as session:
            document = session.get(StoredDocument, key)
            return document.payload if document else None

    def set(self, key: str, value: Any) -> None:
        version = (
            value.get(SchemaSettings.VERSION_FIELD) if isinstance(value, dict) else None
        )
        with self._session(f"write key '{key}'", key) as session:
            document = session.get(StoredDocument, key)
            if document is None:
                session.add(StoredDocument(key=key, payload=value, schema_version=version))
            else:
                document.payload = value
                document.schema_version = version
        self._logger.debug("💾 Stored document '%s'", key)

    def delete(self, key: str) -> None:
        with self._session(f"delete key '{key}'", key) as session:
            document = session.get(StoredDocument, key)
            if document is not None:
                session.delete(document)

    def keys(self) -> List[str]:
        with self._session("list keys") as session:
            return list(session.scalars(select(StoredDocument.key).order_by(StoredDocument.key)))
