# ============================================
# FILE: ordergate/monitoring/prometheus.py
# ============================================

"""
Prometheus metrics integration for ordergate.

Quick Start:
    >>> from ordergate.monitoring.prometheus import PrometheusMetrics, start_metrics_server
    >>>
    >>> start_metrics_server(port=8000)
    >>> metrics = PrometheusMetrics()
    >>>
    >>> from ordergate.core.listeners import MetricsOrderListener
    >>> facade = OrderFacade(listeners=[MetricsOrderListener(prometheus=metrics)])
"""

import logging
from typing import TYPE_CHECKING

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram, start_http_server

if TYPE_CHECKING:  # pragma: no cover
    from ordergate.core.types import OrderStatus


logger = logging.getLogger(__name__)


class PrometheusMetrics:
    """
    Prometheus-compatible metrics collector for orders.

    Exposes the following metrics:
        - order_total: Counter of place_order outcomes by item and status
        - order_cancellations_total: Counter of cancel_order outcomes by status
        - order_refunds_total: Counter of refunds issued
        - order_processing_duration_seconds: Histogram of place_order durations
        - order_step_duration_seconds: Histogram of step durations
        - order_active_count: Gauge of orders currently being placed

    Pass a dedicated CollectorRegistry when more than one instance is created
    in the same process (prometheus_client rejects duplicate metric names).
    """

    def __init__(self, prefix: str = "order", registry: CollectorRegistry | None = None):
        self._prefix = prefix
        self.registry = registry if registry is not None else REGISTRY

        self._order_total = Counter(
            f"{prefix}_total",
            "Total place_order outcomes",
            ["item", "status"],
            registry=self.registry,
        )

        self._cancellations_total = Counter(
            f"{prefix}_cancellations_total",
            "Total cancel_order outcomes",
            ["status"],
            registry=self.registry,
        )

        self._refunds_total = Counter(
            f"{prefix}_refunds_total",
            "Total refunds issued",
            registry=self.registry,
        )

        self._processing_duration = Histogram(
            f"{prefix}_processing_duration_seconds",
            "place_order duration in seconds",
            ["item"],
            buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
            registry=self.registry,
        )

        self._step_duration = Histogram(
            f"{prefix}_step_duration_seconds",
            "Order step duration in seconds",
            ["step"],
            buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 5.0],
            registry=self.registry,
        )

        self._active_count = Gauge(
            f"{prefix}_active_count",
            "Number of orders currently being placed",
            registry=self.registry,
        )

    def record_order(self, item: str, status: "OrderStatus", duration: float) -> None:
        """Record the outcome and duration of a place_order call."""
        self._order_total.labels(item=item, status=status.value).inc()
        self._processing_duration.labels(item=item).observe(duration)

    def record_cancellation(self, status: "OrderStatus") -> None:
        self._cancellations_total.labels(status=status.value).inc()

    def record_refund(self) -> None:
        self._refunds_total.inc()

    def record_step_duration(self, step: str, duration: float) -> None:
        self._step_duration.labels(step=step).observe(duration)

    def order_started(self) -> None:
        self._active_count.inc()

    def order_finished(self) -> None:
        self._active_count.dec()


def start_metrics_server(port: int = 8000, addr: str = "0.0.0.0") -> None:
    """
    Start a Prometheus HTTP metrics server.

    Example:
        >>> start_metrics_server(port=8000)
        >>> # Metrics available at http://localhost:8000/metrics
    """
    start_http_server(port, addr)
    logger.info(f"Prometheus metrics server started on port {port}")
