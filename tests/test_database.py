"""
Database backend tests against in-memory SQLite
"""

import pytest

from skadam.infrastructure.database.operations import DatabaseManager
from skadam.infrastructure.persistence.persistence_writer import PersistenceWriter
from skadam.infrastructure.repositories.sqlalchemy_order_counter import SQLAlchemyOrderCounter
from skadam.infrastructure.repositories.sqlalchemy_storage import SQLAlchemyStorage


@pytest.fixture
def db_manager():
    manager = DatabaseManager(database_url="sqlite://")
    manager.create_tables()
    yield manager
    manager.close()


class TestDatabaseManager:
    def test_health_check(self, db_manager):
        assert db_manager.health_check()["status"] == "healthy"


class TestSQLAlchemyStorage:
    """Keyed JSON documents"""

    def test_set_get_overwrite(self, db_manager):
        storage = SQLAlchemyStorage(db_manager)
        assert storage.get("orders") is None

        storage.set("orders", {"schema_version": 1, "data": [{"id": "a"}]})
        storage.set("orders", {"schema_version": 1, "data": [{"id": "b"}]})

        assert storage.get("orders") == {"schema_version": 1, "data": [{"id": "b"}]}

    def test_keys_and_delete(self, db_manager):
        storage = SQLAlchemyStorage(db_manager)
        storage.set("promo_codes", {"schema_version": 1, "data": []})
        storage.set("categories", {"schema_version": 1, "data": []})
        assert storage.keys() == ["categories", "promo_codes"]
        storage.delete("categories")
        storage.delete("missing")
        assert storage.keys() == ["promo_codes"]

    def test_through_writer(self, db_manager):
        writer = PersistenceWriter(SQLAlchemyStorage(db_manager), mode="sync")
        writer.persist("loyalty_settings", {"enabled": True})
        assert writer.load("loyalty_settings") == {"enabled": True}
        assert writer.failure_count == 0


class TestSQLAlchemyOrderCounter:
    def test_numbers_increase_and_reset(self, db_manager):
        counter = SQLAlchemyOrderCounter(db_manager)
        assert counter.current() == 0
        assert [counter.next_number() for _ in range(3)] == [1, 2, 3]
        counter.reset()
        assert counter.current() == 0
        assert counter.next_number() == 1

    def test_counters_are_independent(self, db_manager):
        orders = SQLAlchemyOrderCounter(db_manager)
        other = SQLAlchemyOrderCounter(db_manager, name="other")
        orders.next_number()
        orders.next_number()
        assert other.next_number() == 1
