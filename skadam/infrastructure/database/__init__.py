"""
Database backend: models and engine management
"""

from skadam.infrastructure.database.models import Base, Counter, StoredDocument
from skadam.infrastructure.database.operations import DatabaseManager

__all__ = ["Base", "Counter", "DatabaseManager", "StoredDocument"]
