"""
Database engine and session management
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from skadam.infrastructure.configuration.config import Settings, get_config
from skadam.infrastructure.database.models import Base
from skadam.infrastructure.logging.logging_config import PerformanceLogger
from skadam.infrastructure.utilities.exceptions import PersistenceError

SQLITE_TIMEOUT_SECONDS = 30


class DatabaseManager:
    """Owns the engine and session factory of the database backend"""

    def __init__(self, config: Optional[Settings] = None, database_url: Optional[str] = None):
        self.config = config or get_config()
        self.database_url = database_url or self.config.database_url
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        self.logger = logging.getLogger(__name__)

    def get_engine(self) -> Engine:
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    def _create_engine(self) -> Engine:
        """Create database engine with backend-specific settings"""
        engine_kwargs: Dict[str, Any] = {
            "pool_pre_ping": True,
            "echo": False,
        }

        if self.database_url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {
                "check_same_thread": False,
                "timeout": SQLITE_TIMEOUT_SECONDS,
            }
            # An in-memory database must live on a single shared connection
            if self._is_memory_sqlite():
                engine_kwargs["poolclass"] = StaticPool
            else:
                self._ensure_sqlite_directory()

        return create_engine(self.database_url, **engine_kwargs)

    def _is_memory_sqlite(self) -> bool:
        return self.database_url in ("sqlite://", "sqlite:///:memory:")

    def _ensure_sqlite_directory(self) -> None:
        path = self.database_url.split("///", 1)[-1]
        if path:
            Path(path).parent.mkdir(parents=True, exist_ok=True)

    def get_session_factory(self) -> sessionmaker:
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self.get_engine(), expire_on_commit=False)
        return self._session_factory

    def get_session(self) -> Session:
        return self.get_session_factory()()

    def create_tables(self) -> None:
        """Create all database tables"""
        try:
            with PerformanceLogger("create_tables", self.logger):
                Base.metadata.create_all(self.get_engine())
                self.logger.info("Database tables created successfully")
        except SQLAlchemyError as e:
            self.logger.error("Failed to create database tables: %s", e, exc_info=True)
            raise PersistenceError(f"Failed to create database tables: {e}") from e

    def health_check(self) -> Dict[str, Any]:
        """Perform database health check"""
        try:
            with self.get_session() as session:
                result = session.execute(text("SELECT 1")).scalar()
            if result == 1:
                return {"status": "healthy", "backend": "database"}
            return {"status": "unhealthy", "error": "Health check query returned unexpected result"}
        except SQLAlchemyError as e:
            self.logger.error("Database health check failed: %s", e, exc_info=True)
            return {"status": "unhealthy", "error": str(e)}

    def close(self) -> None:
        """Close database connections"""
        if self._engine:
            self._engine.dispose()
            self._engine = None
        self._session_factory = None
        self.logger.info("Database connections closed")
