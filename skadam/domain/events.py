"""
Change events published by the remote orders table
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class ChangeType(str, Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass(frozen=True)
class OrderChangeEvent:
    """One row change; payload is the serialized order (empty for deletes)"""

    change_type: ChangeType
    order_id: str
    payload: Dict[str, Any] = field(default_factory=dict)
