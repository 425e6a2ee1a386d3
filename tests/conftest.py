"""
Test configuration and fixtures for the SKADAM café backend
"""

import os
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest

from skadam.application.stores.catalog_store import CatalogStore
from skadam.application.stores.loyalty_store import LoyaltyStore
from skadam.application.stores.order_store import OrderStore
from skadam.application.stores.promotion_store import PromotionStore
from skadam.application.stores.quiz_store import QuizStore
from skadam.application.stores.staff_store import StaffStore
from skadam.application.stores.store_settings_store import StoreSettingsStore
from skadam.application.use_cases.order_settlement_use_case import OrderSettlementUseCase
from skadam.domain.entities.catalog_entity import Inventory
from skadam.domain.value_objects.money import Money
from skadam.infrastructure.configuration.config import reset_config
from skadam.infrastructure.persistence.memory_storage import InMemoryStorage
from skadam.infrastructure.persistence.order_counter import StorageOrderCounter
from skadam.infrastructure.persistence.persistence_writer import PersistenceWriter
from skadam.infrastructure.services.notification_service import NotificationDispatcher


@pytest.fixture(autouse=True)
def mock_env():
    """Isolated environment for every test"""
    test_env = {
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "DEBUG",
        "STORAGE_BACKEND": "memory",
        "PERSISTENCE_MODE": "sync",
        "ADMIN_PASSWORD": "test-admin",
    }

    with patch.dict(os.environ, test_env, clear=True):
        reset_config()
        yield test_env
    reset_config()


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def writer(storage):
    """Synchronous writer so persisted state can be asserted right away"""
    writer = PersistenceWriter(storage, mode="sync")
    yield writer
    writer.shutdown()


@pytest.fixture
def channel():
    return MagicMock()


@pytest.fixture
def notifier(writer, channel):
    return NotificationDispatcher(writer=writer, channels=[channel])


@pytest.fixture
def catalog(writer):
    store = CatalogStore(writer, seed_defaults=False)
    store.load()
    return store


@pytest.fixture
def menu(catalog):
    """A latte with tracked stock and an untracked croissant"""
    latte = catalog.add_item(
        "Latte",
        "Espresso with steamed milk",
        Money(Decimal("10.00")),
        "coffee",
        inventory=Inventory(quantity=20, alert_threshold=5, alert_enabled=True, unit="cups"),
    )
    croissant = catalog.add_item("Croissant", "Buttery", Money(Decimal("5.00")), "pastries")
    return {"latte": latte, "croissant": croissant}


@pytest.fixture
def counter(writer):
    counter = StorageOrderCounter(writer)
    counter.load()
    return counter


@pytest.fixture
def order_store(writer, counter, catalog, notifier):
    store = OrderStore(writer, counter, catalog, notifier)
    store.load()
    return store


@pytest.fixture
def loyalty_store(writer):
    store = LoyaltyStore(writer)
    store.load()
    return store


@pytest.fixture
def promotion_store(writer):
    store = PromotionStore(writer)
    store.load()
    return store


@pytest.fixture
def quiz_store(writer, promotion_store):
    store = QuizStore(writer, promotion_store)
    store.load()
    return store


@pytest.fixture
def staff_store(writer):
    store = StaffStore(writer, admin_password="test-admin")
    store.load()
    return store


@pytest.fixture
def store_settings_store(writer):
    store = StoreSettingsStore(writer)
    store.load()
    return store


@pytest.fixture
def settlement(order_store, loyalty_store, promotion_store):
    return OrderSettlementUseCase(order_store, loyalty_store, promotion_store)


@pytest.fixture
def sample_order(order_store, catalog, menu):
    """Two lines: 10.00 × 2 and 5.00 × 1, total 25.00"""
    lines = [
        catalog.snapshot_line(menu["latte"].id, 2),
        catalog.snapshot_line(menu["croissant"].id, 1),
    ]
    return order_store.create_order(lines, table_number=4)
