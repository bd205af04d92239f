# ============================================
# FILE: ordergate/core/types.py
# ============================================

"""
All type definitions, enums, and dataclasses
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from ordergate.core.exceptions import InvalidOrderError


class OrderStatus(Enum):
    """
    Status of an order in the status index.

    CANCEL_FAILED is an error annotation, not a terminal status: the order
    stays active and cancellation may be retried.
    """

    CREATING = "creating"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELED = "canceled"
    CANCEL_FAILED = "cancel_failed"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({OrderStatus.COMPLETED, OrderStatus.FAILED, OrderStatus.CANCELED})


class PaymentStatus(Enum):
    """Status of a payment tracked by the gateway"""

    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


class OrderStep(Enum):
    """Forward steps of the order lifecycle, in execution order"""

    LOCK_INVENTORY = "lock_inventory"
    PROCESS_PAYMENT = "process_payment"
    SHIP_ITEMS = "ship_items"


@dataclass
class OrderRequest:
    """
    An order registered in the active-order index.

    lock_held, paid and refunded record which compensations are still owed,
    so the failure path and a concurrent cancellation never undo the same
    step twice. cancel_requested is set while cancel_order() is running, so
    place_order() never completes an order whose compensations are in flight.
    """

    order_id: str
    item: str
    quantity: int
    payment_amount: float
    shipping_address: str
    lock_held: bool = False
    paid: bool = False
    refunded: bool = False
    cancel_requested: bool = False

    def __post_init__(self) -> None:
        if not self.order_id:
            msg = "order_id must be a non-empty string"
            raise InvalidOrderError(msg)
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            msg = f"quantity must be an integer, got {self.quantity!r}"
            raise InvalidOrderError(msg)
        if self.quantity <= 0:
            msg = f"quantity must be positive, got {self.quantity}"
            raise InvalidOrderError(msg)


@dataclass
class OrderStatusRecord:
    """Current status of an order. Overwritten on every transition."""

    status: OrderStatus
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    details: str | None = None
    error: str | None = None
    error_type: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "status": self.status.value,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.details is not None:
            data["details"] = self.details
        if self.error is not None:
            data["error"] = self.error
        if self.error_type is not None:
            data["error_type"] = self.error_type
        return data
