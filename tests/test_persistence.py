"""
Persistence Tests

Envelope handling, storage adapters and the best-effort writer.
"""

import threading
from unittest.mock import MagicMock

import pytest

from skadam.application.stores.catalog_store import CatalogStore
from skadam.application.stores.order_store import OrderStore
from skadam.infrastructure.persistence.json_file_storage import JsonFileStorage
from skadam.infrastructure.persistence.memory_storage import InMemoryStorage
from skadam.infrastructure.persistence.order_counter import StorageOrderCounter
from skadam.infrastructure.persistence.persistence_writer import (
    PersistenceWriter,
    unwrap_envelope,
    wrap_envelope,
)
from skadam.infrastructure.utilities.constants import StorageKeys
from skadam.infrastructure.utilities.exceptions import PersistenceError


class TestEnvelope:
    def test_wrap(self):
        assert wrap_envelope([1, 2]) == {"schema_version": 1, "data": [1, 2]}

    def test_unwrap_legacy_bare_value(self):
        assert unwrap_envelope("orders", [{"id": "a"}]) == [{"id": "a"}]

    def test_newer_version_rejected(self):
        with pytest.raises(PersistenceError):
            unwrap_envelope("orders", {"schema_version": 2, "data": []})

    def test_load_treats_newer_version_as_absent(self):
        storage = InMemoryStorage({StorageKeys.ORDERS: {"schema_version": 99, "data": []}})
        writer = PersistenceWriter(storage, mode="sync")
        assert writer.load(StorageKeys.ORDERS) is None


class TestInMemoryStorage:
    def test_values_are_copied(self):
        storage = InMemoryStorage()
        value = {"items": [1]}
        storage.set("k", value)
        value["items"].append(2)
        assert storage.get("k") == {"items": [1]}

    def test_delete_and_keys(self):
        storage = InMemoryStorage({"b": 1, "a": 2})
        storage.delete("b")
        storage.delete("missing")
        assert storage.keys() == ["a"]


class TestJsonFileStorage:
    """File-per-key storage"""

    def test_round_trip_and_keys(self, tmp_path):
        storage = JsonFileStorage(str(tmp_path / "data"))
        storage.set("orders", {"schema_version": 1, "data": [{"id": "x"}]})
        storage.set("promo_codes", {"schema_version": 1, "data": []})

        assert (tmp_path / "data" / "orders.json").exists()
        assert storage.get("orders")["data"] == [{"id": "x"}]
        assert storage.get("missing") is None
        assert storage.keys() == ["orders", "promo_codes"]

        storage.delete("orders")
        assert storage.keys() == ["promo_codes"]

    def test_corrupt_file(self, tmp_path):
        (tmp_path / "orders.json").write_text("{not json", encoding="utf-8")
        storage = JsonFileStorage(str(tmp_path))
        with pytest.raises(PersistenceError):
            storage.get("orders")
        assert PersistenceWriter(storage, mode="sync").load("orders") is None

    def test_invalid_key(self, tmp_path):
        storage = JsonFileStorage(str(tmp_path))
        with pytest.raises(PersistenceError):
            storage.set("../escape", {})

    def test_failed_write_leaves_no_temp_file(self, tmp_path):
        storage = JsonFileStorage(str(tmp_path))
        storage.set("orders", {"schema_version": 1, "data": []})

        with pytest.raises(PersistenceError):
            storage.set("orders", {"schema_version": 1, "data": [object()]})

        assert [path.name for path in tmp_path.iterdir()] == ["orders.json"]
        assert storage.get("orders")["data"] == []

    def test_store_state_survives_restart(self, tmp_path):
        storage = JsonFileStorage(str(tmp_path))
        writer = PersistenceWriter(storage, mode="sync")
        catalog = CatalogStore(writer)
        catalog.load()
        counter = StorageOrderCounter(writer)
        counter.load()
        orders = OrderStore(writer, counter, catalog)
        orders.load()
        order = orders.create_order([catalog.snapshot_line("espresso", 2)], table_number=3)

        restarted = PersistenceWriter(JsonFileStorage(str(tmp_path)), mode="sync")
        restarted_counter = StorageOrderCounter(restarted)
        restarted_counter.load()
        restarted_catalog = CatalogStore(restarted)
        restarted_catalog.load()
        restarted_orders = OrderStore(restarted, restarted_counter, restarted_catalog)
        restarted_orders.load()

        assert restarted_orders.get_order(order.id).total.format_amount() == "17.00"
        assert restarted_counter.current() == 1
        assert restarted_catalog.get_item("espresso").inventory.quantity == 48


class TestPersistenceWriter:
    """Failures are counted, never raised"""

    def test_failed_write_is_counted(self):
        storage = MagicMock()
        storage.set.side_effect = PersistenceError("disk full", "orders")
        writer = PersistenceWriter(storage, mode="sync")

        writer.persist("orders", [])
        writer.persist("orders", [])

        assert writer.failure_count == 2
        assert "disk full" in writer.last_error

    def test_in_memory_state_kept_when_storage_fails(self):
        storage = MagicMock()
        storage.get.return_value = None
        storage.set.side_effect = RuntimeError("offline")
        writer = PersistenceWriter(storage, mode="sync")
        catalog = CatalogStore(writer, seed_defaults=False)
        catalog.load()

        catalog.add_category("Desserts")

        assert [c.name for c in catalog.list_categories()] == ["Desserts"]
        assert writer.failure_count == 1

    def test_background_writes_keep_order(self):
        storage = InMemoryStorage()
        writer = PersistenceWriter(storage, mode="background")
        for value in range(20):
            writer.persist("counter", value)
        writer.flush(timeout=5)
        assert storage.get("counter") == {"schema_version": 1, "data": 19}
        writer.shutdown()

    def test_background_writes_off_the_caller_thread(self):
        seen = []
        storage = MagicMock()
        storage.set.side_effect = lambda key, value: seen.append(threading.current_thread().name)
        writer = PersistenceWriter(storage, mode="background")
        writer.persist("k", 1)
        writer.shutdown()
        assert seen and seen[0].startswith("skadam-persist")

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            PersistenceWriter(InMemoryStorage(), mode="eventually")
