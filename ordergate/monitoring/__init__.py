"""
Observability for order processing: structured logging and metrics.
"""

from ordergate.monitoring.logging import (
    OrderContextFilter,
    OrderJsonFormatter,
    OrderLogger,
    order_context,
    setup_json_logging,
)
from ordergate.monitoring.metrics import OrderMetrics
from ordergate.monitoring.prometheus import PrometheusMetrics, start_metrics_server

__all__ = [
    "OrderContextFilter",
    "OrderJsonFormatter",
    "OrderLogger",
    "OrderMetrics",
    "PrometheusMetrics",
    "order_context",
    "setup_json_logging",
    "start_metrics_server",
]
