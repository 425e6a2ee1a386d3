"""
Phone Number value object

The loyalty program's unique customer key.
"""

import re
from dataclasses import dataclass

# Optional leading "+", then 4 to 20 digits, spaces or dashes
_PHONE_PATTERN = re.compile(r"^\+?[0-9][0-9 \-]{3,19}$")


@dataclass(frozen=True)
class PhoneNumber:
    """
    Only surrounding whitespace is stripped. Lookups compare the stored text
    exactly, so "99 000 111" and "99000111" are different customers.
    """

    value: str

    def __post_init__(self):
        text = "" if self.value is None else str(self.value).strip()
        if not text:
            raise ValueError("Phone number cannot be empty")
        if not _PHONE_PATTERN.match(text):
            raise ValueError(f"Invalid phone number: {self.value}")
        object.__setattr__(self, "value", text)

    def digits(self) -> str:
        return re.sub(r"\D", "", self.value)

    def __str__(self) -> str:
        return self.value
