"""
Order lifecycle listeners.

Listeners receive callbacks from OrderFacade for cross-cutting concerns
(logging, metrics). Callbacks are synchronous; an exception raised by a
listener is logged by the facade and never changes the order outcome.

Example:
    >>> class AuditListener(OrderListener):
    ...     def on_order_completed(self, order, duration):
    ...         audit_log.append(order.order_id)
    >>>
    >>> facade = OrderFacade(listeners=[AuditListener()])
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ordergate.core.logger import get_logger
from ordergate.core.types import OrderStatus
from ordergate.monitoring.logging import OrderLogger
from ordergate.monitoring.metrics import OrderMetrics

if TYPE_CHECKING:
    from ordergate.core.types import OrderRequest, OrderStep
    from ordergate.monitoring.prometheus import PrometheusMetrics


class OrderListener:
    """Base listener. Override only the callbacks you need."""

    def on_order_started(self, order: OrderRequest) -> None:
        pass

    def on_step_completed(self, order: OrderRequest, step: OrderStep, duration: float) -> None:
        pass

    def on_order_completed(self, order: OrderRequest, duration: float) -> None:
        pass

    def on_order_failed(self, order: OrderRequest, error: Exception, duration: float) -> None:
        pass

    def on_order_aborted(self, order: OrderRequest, duration: float) -> None:
        """Order stopped at a cancellation checkpoint."""

    def on_refund_issued(self, order: OrderRequest) -> None:
        pass

    def on_order_canceled(self, order: OrderRequest) -> None:
        pass

    def on_cancel_failed(self, order: OrderRequest, error: Exception) -> None:
        pass


class LoggingOrderListener(OrderListener):
    """Logs order lifecycle events through the ordergate logger."""

    def __init__(self, name: str = "ordergate.orders"):
        self._name = name

    @property
    def log(self) -> Any:
        # Resolved on each access so set_logger() takes effect immediately
        return get_logger(self._name)

    @property
    def order_logger(self) -> OrderLogger:
        return OrderLogger(self.log)

    def on_order_started(self, order):
        self.order_logger.order_started(order.order_id, order.item, order.quantity)

    def on_step_completed(self, order, step, duration):
        self.order_logger.step_completed(order.order_id, step.value, duration * 1000)

    def on_order_completed(self, order, duration):
        self.order_logger.order_finished(order.order_id, OrderStatus.COMPLETED, duration * 1000)

    def on_order_failed(self, order, error, duration):
        self.order_logger.order_failed(order.order_id, error, duration * 1000)

    def on_order_aborted(self, order, duration):
        self.order_logger.order_finished(order.order_id, OrderStatus.CANCELED, duration * 1000)

    def on_refund_issued(self, order):
        self.log.warning(f"Refunded {order.payment_amount} for order {order.order_id}")

    def on_order_canceled(self, order):
        self.order_logger.order_canceled(order.order_id)

    def on_cancel_failed(self, order, error):
        self.order_logger.cancel_failed(order.order_id, error)


class MetricsOrderListener(OrderListener):
    """
    Feeds order outcomes into OrderMetrics and, optionally, Prometheus.

    Args:
        metrics: In-memory collector (a fresh one is created if omitted)
        prometheus: Optional PrometheusMetrics instance
    """

    def __init__(
        self, metrics: OrderMetrics | None = None, prometheus: PrometheusMetrics | None = None
    ):
        self.metrics = metrics or OrderMetrics()
        self.prometheus = prometheus

    def on_order_started(self, order):
        if self.prometheus:
            self.prometheus.order_started()

    def on_step_completed(self, order, step, duration):
        if self.prometheus:
            self.prometheus.record_step_duration(step.value, duration)

    def on_order_completed(self, order, duration):
        self._record(order, OrderStatus.COMPLETED, duration)

    def on_order_failed(self, order, error, duration):
        self._record(order, OrderStatus.FAILED, duration)

    def on_order_aborted(self, order, duration):
        self._record(order, OrderStatus.CANCELED, duration)

    def on_refund_issued(self, order):
        self.metrics.record_refund()
        if self.prometheus:
            self.prometheus.record_refund()

    def on_order_canceled(self, order):
        self._record_cancellation(OrderStatus.CANCELED)

    def on_cancel_failed(self, order, error):
        self._record_cancellation(OrderStatus.CANCEL_FAILED)

    def _record(self, order: OrderRequest, status: OrderStatus, duration: float) -> None:
        self.metrics.record_order(order.item, status, duration)
        if self.prometheus:
            self.prometheus.record_order(order.item, status, duration)
            self.prometheus.order_finished()

    def _record_cancellation(self, status: OrderStatus) -> None:
        self.metrics.record_cancellation(status)
        if self.prometheus:
            self.prometheus.record_cancellation(status)


def default_listeners() -> list[OrderListener]:
    """Listeners installed when no configuration is given."""
    return [LoggingOrderListener(), MetricsOrderListener()]
