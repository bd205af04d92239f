# ============================================
# FILE: ordergate/monitoring/metrics.py
# ============================================

"""
Metrics collection for orders
"""

from typing import Any

from ordergate.core.types import OrderStatus


class OrderMetrics:
    """Collect and expose order metrics"""

    def __init__(self):
        self.metrics = {
            "total_placed": 0,
            "total_completed": 0,
            "total_failed": 0,
            "total_aborted": 0,
            "total_canceled": 0,
            "total_cancel_failed": 0,
            "total_refunds": 0,
            "average_processing_time": 0.0,
            "by_item": {},
        }

    def record_order(self, item: str, status: OrderStatus, duration: float) -> None:
        """
        Record the outcome of a place_order call.

        CANCELED here means the order stopped at a cancellation checkpoint; the
        cancellation itself is counted by record_cancellation().
        """
        self.metrics["total_placed"] += 1
        self._increment_order_counter(status)
        self._update_average_time(duration)
        self._update_item_stats(item, status)

    def record_cancellation(self, status: OrderStatus) -> None:
        """Record the outcome of a cancel_order call"""
        if status == OrderStatus.CANCELED:
            self.metrics["total_canceled"] += 1
        elif status == OrderStatus.CANCEL_FAILED:
            self.metrics["total_cancel_failed"] += 1

    def record_refund(self) -> None:
        self.metrics["total_refunds"] += 1

    def _increment_order_counter(self, status: OrderStatus) -> None:
        status_map = {
            OrderStatus.COMPLETED: "total_completed",
            OrderStatus.FAILED: "total_failed",
            OrderStatus.CANCELED: "total_aborted",
        }
        counter = status_map.get(status)
        if counter:
            self.metrics[counter] += 1

    def _update_average_time(self, duration: float) -> None:
        total_time = self.metrics["average_processing_time"] * (self.metrics["total_placed"] - 1)
        self.metrics["average_processing_time"] = (
            total_time + duration
        ) / self.metrics["total_placed"]

    def _update_item_stats(self, item: str, status: OrderStatus) -> None:
        stats = self.metrics["by_item"].setdefault(
            item, {"count": 0, "completed": 0, "failed": 0, "aborted": 0}
        )
        stats["count"] += 1
        if status == OrderStatus.COMPLETED:
            stats["completed"] += 1
        elif status == OrderStatus.CANCELED:
            stats["aborted"] += 1
        else:
            stats["failed"] += 1

    def get_metrics(self) -> dict[str, Any]:
        """Get all metrics"""
        success_rate = (
            self.metrics["total_completed"] / self.metrics["total_placed"] * 100
            if self.metrics["total_placed"] > 0
            else 0
        )

        return {
            **self.metrics,
            "success_rate": f"{success_rate:.2f}%",
        }
