#!/usr/bin/env python3
"""
Demo data generation script.

Fills the configured storage backend with loyalty customers, a day of table
orders and a few settled payments, going through the real stores so every
invariant (order numbering, stock reservation, ledger entries) holds.
"""

import argparse
import logging
import random

from faker import Faker

from skadam.application.dtos.settlement_dtos import SettlementRequest
from skadam.domain.entities.order_entity import OrderStatus
from skadam.infrastructure.configuration.config import get_config
from skadam.infrastructure.container.dependency_injection import DependencyContainer
from skadam.infrastructure.logging.logging_config import LoggingConfigOptions, setup_logging

fake = Faker(["fr_FR", "en_US"])


def generate_phone() -> str:
    """Eight-digit local mobile number"""
    return f"{random.choice('2459')}{fake.numerify('#######')}"


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate SKADAM demo data")
    parser.add_argument("--customers", type=int, default=20)
    parser.add_argument("--orders", type=int, default=40)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    if args.seed is not None:
        random.seed(args.seed)
        Faker.seed(args.seed)

    setup_logging(LoggingConfigOptions(enable_file=False, enable_json=False))
    logger = logging.getLogger("generate_demo_data")

    container = DependencyContainer(get_config()).load()
    catalog = container.get_catalog_store()
    orders = container.get_order_store()
    loyalty = container.get_loyalty_store()
    settlement = container.get_settlement_use_case()

    phones = []
    while len(phones) < args.customers:
        phone = generate_phone()
        if loyalty.find_by_phone(phone) is None:
            loyalty.add_customer(fake.name(), phone)
            phones.append(phone)
    logger.info("👥 Created %d customers", len(phones))

    items = catalog.list_items()
    for _ in range(args.orders):
        chosen = random.sample(items, k=random.randint(1, min(3, len(items))))
        lines = [catalog.snapshot_line(item.id, random.randint(1, 3)) for item in chosen]
        order = orders.create_order(
            lines,
            table_number=random.randint(1, 12),
            customer_note=fake.sentence(nb_words=4) if random.random() < 0.2 else None,
        )
        roll = random.random()
        if roll < 0.5:
            settlement.settle(
                SettlementRequest(order.id, random.choice(phones) if phones else None)
            )
        elif roll < 0.8:
            orders.update_status(order.id, random.choice(list(OrderStatus)[:4]))
    logger.info("🧾 Created %d orders", args.orders)

    container.shutdown()


if __name__ == "__main__":
    main()
