"""
Dependency Injection Container

Builds the storage backend, the stores and the settlement use case once at
start-up and owns their lifecycle (load, shutdown).
"""

import logging
from typing import Any, Dict, Optional

from telegram import Bot

from skadam.application.stores.catalog_store import CatalogStore
from skadam.application.stores.loyalty_store import LoyaltyStore
from skadam.application.stores.order_store import OrderStore
from skadam.application.stores.promotion_store import PromotionStore
from skadam.application.stores.quiz_store import QuizStore
from skadam.application.stores.staff_store import StaffStore
from skadam.application.stores.store_settings_store import StoreSettingsStore
from skadam.application.use_cases.order_settlement_use_case import OrderSettlementUseCase
from skadam.domain.repositories.order_counter import OrderCounter
from skadam.domain.repositories.storage_adapter import StorageAdapter
from skadam.infrastructure.configuration.config import Settings, get_config
from skadam.infrastructure.database.operations import DatabaseManager
from skadam.infrastructure.persistence.change_feed import OrderChangeFeed
from skadam.infrastructure.persistence.json_file_storage import JsonFileStorage
from skadam.infrastructure.persistence.memory_storage import InMemoryStorage
from skadam.infrastructure.persistence.order_counter import StorageOrderCounter
from skadam.infrastructure.persistence.persistence_writer import PersistenceWriter
from skadam.infrastructure.repositories.sqlalchemy_order_counter import SQLAlchemyOrderCounter
from skadam.infrastructure.repositories.sqlalchemy_storage import SQLAlchemyStorage
from skadam.infrastructure.services.notification_service import NotificationDispatcher
from skadam.infrastructure.services.notification_utils import TelegramNotificationChannel


class DependencyContainer:
    """
    Dependency injection container

    Manages the instantiation and lifecycle of:
    - Storage adapter, persistence writer and order counter (Infrastructure layer)
    - Stores and the settlement use case (Application layer)
    - Notification dispatch
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        storage: Optional[StorageAdapter] = None,
        bot: Optional[Bot] = None,
    ):
        self.settings = settings or get_config()
        self._instances: Dict[str, Any] = {}
        self._db_manager: Optional[DatabaseManager] = None
        self._telegram_channel: Optional[TelegramNotificationChannel] = None
        self._logger = logging.getLogger(self.__class__.__name__)
        self._setup_dependencies(storage, bot)

    def _setup_dependencies(self, storage: Optional[StorageAdapter], bot: Optional[Bot]):
        self._logger.info("Setting up dependency injection container...")
        self._register_persistence(storage)
        self._register_services(bot)
        self._register_stores()
        self._register_use_cases()
        self._logger.info("Dependency injection container setup complete")

    def _register_persistence(self, storage: Optional[StorageAdapter]):
        counter: Optional[OrderCounter] = None
        if storage is None:
            backend = self.settings.storage_backend
            if backend == "memory":
                storage = InMemoryStorage()
            elif backend == "database":
                self._db_manager = DatabaseManager(self.settings)
                self._db_manager.create_tables()
                storage = SQLAlchemyStorage(self._db_manager)
                counter = SQLAlchemyOrderCounter(self._db_manager)
            else:
                storage = JsonFileStorage(self.settings.data_dir)

        writer = PersistenceWriter(storage, self.settings.persistence_mode)
        self._instances["storage"] = storage
        self._instances["writer"] = writer
        self._instances["order_counter"] = counter or StorageOrderCounter(writer)
        self._instances["change_feed"] = OrderChangeFeed()
        self._logger.info(
            "  💾 Storage: %s (%s writes)", type(storage).__name__, self.settings.persistence_mode
        )

    def _register_services(self, bot: Optional[Bot]):
        dispatcher = NotificationDispatcher(writer=self.get_writer())
        if bot is None and self.settings.telegram_enabled:
            bot = Bot(token=self.settings.bot_token)
        if bot is not None and self.settings.admin_chat_id:
            self._telegram_channel = TelegramNotificationChannel(bot, self.settings.admin_chat_id)
            dispatcher.add_channel(self._telegram_channel)
        else:
            self._logger.info("  📨 Telegram notifications: disabled")
        self._instances["notifier"] = dispatcher

    def _register_stores(self):
        writer = self.get_writer()
        currency = self.settings.currency
        catalog = CatalogStore(writer, currency=currency)
        promotions = PromotionStore(writer)
        self._instances["catalog_store"] = catalog
        self._instances["order_store"] = OrderStore(
            writer, self.get_order_counter(), catalog, self.get_notifier(), currency
        )
        self._instances["loyalty_store"] = LoyaltyStore(writer, currency)
        self._instances["promotion_store"] = promotions
        self._instances["quiz_store"] = QuizStore(writer, promotions)
        self._instances["staff_store"] = StaffStore(writer, self.settings.admin_password)
        self._instances["store_settings_store"] = StoreSettingsStore(writer)
        self.get_order_store().attach_change_feed(self.get_change_feed())

    def _register_use_cases(self):
        self._instances["settlement_use_case"] = OrderSettlementUseCase(
            order_store=self.get_order_store(),
            loyalty_store=self.get_loyalty_store(),
            promotion_store=self.get_promotion_store(),
        )

    # Lifecycle

    def load(self) -> "DependencyContainer":
        """Read persisted state into every store"""
        counter = self.get_order_counter()
        if isinstance(counter, StorageOrderCounter):
            counter.load()
        self.get_notifier().load()
        for name in ("catalog_store", "order_store", "loyalty_store", "promotion_store",
                     "quiz_store", "staff_store", "store_settings_store"):
            self._instances[name].load()
        self._logger.info("✅ All stores loaded")
        return self

    def shutdown(self) -> None:
        """Flush pending writes and release connections"""
        self._logger.info("Shutting down dependency container...")
        self.get_writer().shutdown()
        if self._telegram_channel is not None:
            self._telegram_channel.close()
        if self._db_manager is not None:
            self._db_manager.close()

    # Getters

    def get_storage(self) -> StorageAdapter:
        return self._instances["storage"]

    def get_db_manager(self) -> Optional[DatabaseManager]:
        """Only set for the database backend"""
        return self._db_manager

    def get_writer(self) -> PersistenceWriter:
        return self._instances["writer"]

    def get_order_counter(self) -> OrderCounter:
        return self._instances["order_counter"]

    def get_change_feed(self) -> OrderChangeFeed:
        return self._instances["change_feed"]

    def get_notifier(self) -> NotificationDispatcher:
        return self._instances["notifier"]

    def get_catalog_store(self) -> CatalogStore:
        return self._instances["catalog_store"]

    def get_order_store(self) -> OrderStore:
        return self._instances["order_store"]

    def get_loyalty_store(self) -> LoyaltyStore:
        return self._instances["loyalty_store"]

    def get_promotion_store(self) -> PromotionStore:
        return self._instances["promotion_store"]

    def get_quiz_store(self) -> QuizStore:
        return self._instances["quiz_store"]

    def get_staff_store(self) -> StaffStore:
        return self._instances["staff_store"]

    def get_store_settings_store(self) -> StoreSettingsStore:
        return self._instances["store_settings_store"]

    def get_settlement_use_case(self) -> OrderSettlementUseCase:
        return self._instances["settlement_use_case"]
