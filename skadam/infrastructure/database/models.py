# pylint: disable=too-few-public-methods
"""
SQLAlchemy database models for the cloud database backend

The remote variant keeps the same keyed JSON documents as local storage,
plus a row per named counter for the atomic order-number sequence.
"""

from datetime import datetime
from typing import Any, Optional, Type

from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.orm import DeclarativeMeta, Mapped, declarative_base, mapped_column
from sqlalchemy.sql import func

_Base = declarative_base()

# Type alias for mypy
Base: Type[DeclarativeMeta] = _Base


class StoredDocument(Base):
    """One persisted storage key"""

    __tablename__ = "documents"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    payload: Mapped[Any] = mapped_column(JSON, nullable=True)
    schema_version: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self):
        return f"<StoredDocument(key='{self.key}', schema_version={self.schema_version})>"


class Counter(Base):
    """Named monotonic counter"""

    __tablename__ = "counters"

    name: Mapped[str] = mapped_column(String(50), primary_key=True)
    value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<Counter(name='{self.name}', value={self.value})>"
