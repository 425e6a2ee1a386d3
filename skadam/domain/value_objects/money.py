"""
Money value object

Non-negative decimal amounts rounded to cents, tagged with a currency code.
"""

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from functools import total_ordering
from typing import Iterable, Union

DEFAULT_CURRENCY = "TND"
CENT = Decimal("0.01")

# "8.50 TND", "8.5", "12 EUR"
_LEGACY_PRICE_PATTERN = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*([A-Za-z]{3})?\s*$")

Number = Union[int, float, Decimal]


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Invalid money amount: {value!r}") from e


@total_ordering
@dataclass(frozen=True)
class Money:
    """Money value object; arithmetic between different currencies is rejected"""

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self):
        amount = _to_decimal(self.amount)
        if amount < 0:
            raise ValueError("Money amount cannot be negative")
        if not self.currency or len(self.currency) != 3:
            raise ValueError("Currency must be a 3-letter code")

        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "amount", amount.quantize(CENT, rounding=ROUND_HALF_UP))
        object.__setattr__(self, "currency", self.currency.upper())

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> "Money":
        return cls(Decimal("0"), currency)

    @classmethod
    def parse(cls, text: str, currency: str = DEFAULT_CURRENCY) -> "Money":
        """Parse the legacy "8.50 TND" price string (suffix optional)"""
        match = _LEGACY_PRICE_PATTERN.match(text or "")
        if not match:
            raise ValueError(f"Invalid price string: {text!r}")
        return cls(Decimal(match.group(1)), match.group(2) or currency)

    @classmethod
    def total(cls, amounts: Iterable["Money"], currency: str = DEFAULT_CURRENCY) -> "Money":
        result = cls.zero(currency)
        for amount in amounts:
            result = result + amount
        return result

    def _same_currency(self, other: "Money", operation: str) -> None:
        if self.currency != other.currency:
            raise ValueError(
                f"Cannot {operation} different currencies: {self.currency} and {other.currency}"
            )

    def add(self, other: "Money") -> "Money":
        self._same_currency(other, "add")
        return Money(self.amount + other.amount, self.currency)

    def subtract(self, other: "Money") -> "Money":
        """Raises ValueError when the result would be negative"""
        self._same_currency(other, "subtract")
        return Money(self.amount - other.amount, self.currency)

    def multiply(self, factor: Number) -> "Money":
        factor = _to_decimal(factor)
        if factor < 0:
            raise ValueError("Cannot multiply money by negative factor")
        return Money(self.amount * factor, self.currency)

    def percentage(self, percent: Number) -> "Money":
        """percent% of this amount, e.g. the discount of a promo code"""
        return self.multiply(_to_decimal(percent) / Decimal("100"))

    def format_amount(self) -> str:
        """Amount with exactly two decimals, e.g. "25.00" """
        return f"{self.amount:.2f}"

    def format_display(self) -> str:
        return f"{self.format_amount()} {self.currency}"

    def to_dict(self) -> dict:
        return {"amount": self.format_amount(), "currency": self.currency}

    @classmethod
    def from_dict(cls, data) -> "Money":
        """Load from {"amount", "currency"}, a bare number or the legacy price string"""
        if isinstance(data, str):
            return cls.parse(data)
        if isinstance(data, (int, float, Decimal)):
            return cls(_to_decimal(data))
        return cls(_to_decimal(data["amount"]), data.get("currency", DEFAULT_CURRENCY))

    def __str__(self) -> str:
        return self.format_display()

    def __lt__(self, other: "Money") -> bool:
        self._same_currency(other, "compare")
        return self.amount < other.amount

    __add__ = add
    __sub__ = subtract
    __mul__ = multiply
