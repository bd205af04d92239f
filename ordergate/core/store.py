"""
In-memory order store

Holds the active-order index and the status index owned by one OrderFacade.
Not persistent: state lives for the lifetime of the facade.

Access is not locked. The facade runs on a single event loop and never
suspends while reading or writing the store.
"""

from ordergate.core.exceptions import DuplicateOrderError, InvalidTransitionError
from ordergate.core.types import OrderRequest, OrderStatus, OrderStatusRecord


class OrderStore:
    """
    Active-order index plus a last-write-wins status index.

    The status index keeps one record per order id forever; set_status()
    refuses to move an order out of a terminal status.
    """

    def __init__(self):
        self._active: dict[str, OrderRequest] = {}
        self._status: dict[str, OrderStatusRecord] = {}

    def register(self, order: OrderRequest) -> OrderStatusRecord:
        """Record a new order as active with status CREATING."""
        if order.order_id in self._status:
            raise DuplicateOrderError(order.order_id)

        self._active[order.order_id] = order
        record = OrderStatusRecord(OrderStatus.CREATING)
        self._status[order.order_id] = record
        return record

    def get_active(self, order_id: str) -> OrderRequest | None:
        return self._active.get(order_id)

    def is_active(self, order_id: str) -> bool:
        return order_id in self._active

    def remove_active(self, order_id: str) -> OrderRequest | None:
        return self._active.pop(order_id, None)

    def active_ids(self) -> list[str]:
        return list(self._active)

    def get_status(self, order_id: str) -> OrderStatusRecord | None:
        return self._status.get(order_id)

    def current(self, order_id: str) -> OrderStatus | None:
        record = self._status.get(order_id)
        return record.status if record else None

    def is_canceled(self, order_id: str) -> bool:
        return self.current(order_id) == OrderStatus.CANCELED

    def annotate(self, order_id: str, details: str) -> OrderStatusRecord | None:
        """Replace the details of the current record without a status change."""
        record = self._status.get(order_id)
        if record is not None:
            record.details = details
        return record

    def set_status(
        self,
        order_id: str,
        status: OrderStatus,
        details: str | None = None,
        error: Exception | None = None,
    ) -> OrderStatusRecord:
        """
        Overwrite the status record of an order.

        Raises:
            InvalidTransitionError: If the order is in a terminal status
        """
        current = self.current(order_id)
        if current is not None and current.is_terminal:
            raise InvalidTransitionError(order_id, current.value, status.value)

        record = OrderStatusRecord(
            status,
            details=details,
            error=str(error) if error is not None else None,
            error_type=type(error).__name__ if error is not None else None,
        )
        self._status[order_id] = record
        return record

    def list_orders(self, status: OrderStatus | None = None) -> dict[str, OrderStatusRecord]:
        """Status records, optionally filtered by status."""
        return {
            order_id: record
            for order_id, record in self._status.items()
            if status is None or record.status == status
        }

    def __len__(self) -> int:
        return len(self._status)
