"""
Application use cases
"""

from skadam.application.use_cases.order_settlement_use_case import OrderSettlementUseCase

__all__ = ["OrderSettlementUseCase"]
