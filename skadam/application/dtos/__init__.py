"""
Application DTOs
"""

from skadam.application.dtos.order_dtos import ItemSales, SalesReport
from skadam.application.dtos.settlement_dtos import SettlementRequest, SettlementResult

__all__ = ["ItemSales", "SalesReport", "SettlementRequest", "SettlementResult"]
