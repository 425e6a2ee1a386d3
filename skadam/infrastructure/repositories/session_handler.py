"""
Unit-of-work helper for the SQLAlchemy adapters
"""

import logging
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from skadam.infrastructure.utilities.exceptions import PersistenceError

logger = logging.getLogger(__name__)


@contextmanager
def managed_session(
    session_factory: sessionmaker, action: str, key: Optional[str] = None
) -> Generator[Session, None, None]:
    """
    One session per unit of work: commit on success, roll back on failure.

    Database errors leave the block as PersistenceError, described by
    `action` (e.g. "write key 'orders'").
    """
    session = session_factory()
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("💥 DATABASE ERROR while trying to %s: %s", action, e)
        raise PersistenceError(f"Failed to {action}: {e}", key) from e
    finally:
        session.close()
