"""
SQLAlchemy implementation of the order counter

Emulates the remote "next order number" and "reset counter" procedures with
single UPDATE statements, so concurrent callers never receive the same number.
"""

import logging

from sqlalchemy import select, update

from skadam.domain.repositories.order_counter import OrderCounter
from skadam.infrastructure.database.models import Counter
from skadam.infrastructure.database.operations import DatabaseManager
from skadam.infrastructure.repositories.session_handler import managed_session

ORDER_COUNTER_NAME = "orders"


class SQLAlchemyOrderCounter(OrderCounter):
    """Order numbers from the `counters` table"""

    def __init__(self, db_manager: DatabaseManager, name: str = ORDER_COUNTER_NAME):
        self._db_manager = db_manager
        self._name = name
        self._logger = logging.getLogger(self.__class__.__name__)

    def _session(self, action: str):
        return managed_session(self._db_manager.get_session_factory(), action)

    def _ensure_row(self, session) -> None:
        if session.get(Counter, self._name) is None:
            session.add(Counter(name=self._name, value=0))
            session.flush()

    def next_number(self) -> int:
        with self._session("get next order number") as session:
            self._ensure_row(session)
            session.execute(
                update(Counter).where(Counter.name == self._name).values(value=Counter.value + 1)
            )
            value = session.scalar(select(Counter.value).where(Counter.name == self._name))
        self._logger.debug("🔢 Issued order number %s", value)
        return int(value)

    def reset(self) -> None:
        with self._session("reset order counter") as session:
            self._ensure_row(session)
            session.execute(update(Counter).where(Counter.name == self._name).values(value=0))
        self._logger.info("🔄 Order counter reset")

    def current(self) -> int:
        with self._session("read order counter") as session:
            value = session.scalar(select(Counter.value).where(Counter.name == self._name))
        return int(value or 0)
