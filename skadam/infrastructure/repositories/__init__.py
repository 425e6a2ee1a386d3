"""
SQLAlchemy-backed repository implementations
"""

from skadam.infrastructure.repositories.sqlalchemy_order_counter import SQLAlchemyOrderCounter
from skadam.infrastructure.repositories.sqlalchemy_storage import SQLAlchemyStorage

__all__ = ["SQLAlchemyOrderCounter", "SQLAlchemyStorage"]
