"""
Domain value objects package

Contains immutable value objects that represent concepts in the business domain.
"""

from .money import DEFAULT_CURRENCY, Money
from .order_number import OrderNumber
from .phone_number import PhoneNumber

__all__ = [
    "DEFAULT_CURRENCY",
    "Money",
    "OrderNumber",
    "PhoneNumber",
]
