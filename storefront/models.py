"""
Records exchanged by the services. All of them are immutable values.
"""
from dataclasses import asdict, dataclass, field, replace
from typing import Optional, Tuple

PENDING = "pending"
COMPLETED = "completed"
ORDER_STATUSES = (PENDING, COMPLETED)


@dataclass(frozen=True)
class User:
    id: int
    name: str
    email: str

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class Product:
    id: int
    name: str
    description: str
    price: float
    category: str

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class Order:
    """A placed order. `total` is fixed when the order is created."""

    user_id: int
    product_ids: Tuple[int, ...]
    total: float
    created: str
    status: str = PENDING
    id: Optional[int] = field(default=None)

    def __post_init__(self):
        if self.status not in ORDER_STATUSES:
            raise ValueError(f"unknown order status: {self.status!r}")
        object.__setattr__(self, "product_ids", tuple(self.product_ids))

    def with_id(self, order_id):
        return replace(self, id=order_id)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "product_ids": list(self.product_ids),
            "total": self.total,
            "status": self.status,
            "created": self.created,
        }
