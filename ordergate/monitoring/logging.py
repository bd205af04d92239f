"""
Structured logging for order processing

Provides a JSON formatter and a context filter so every log line emitted
while an order is being placed or canceled carries the order id and the
current step, even across interleaved asyncio tasks.
"""

import json
import logging
from contextvars import ContextVar, Token
from datetime import UTC, datetime
from typing import IO, Any

from ordergate.core.types import OrderStatus

# Context of the order being processed by the current task
order_context: ContextVar[dict[str, Any]] = ContextVar("order_context", default={})


def bind_order_context(
    order_id: str, step: str | None = None, correlation_id: str | None = None
) -> Token:
    """Set the order context for the current task. Returns a reset token."""
    return order_context.set(
        {"order_id": order_id, "step": step, "correlation_id": correlation_id or order_id}
    )


def update_order_step(step: str | None) -> None:
    """Change the step of the current order context in place."""
    context = order_context.get({})
    if context:
        order_context.set({**context, "step": step})


def reset_order_context(token: Token) -> None:
    order_context.reset(token)


class OrderJsonFormatter(logging.Formatter):
    """
    JSON formatter for order logs with structured fields
    """

    _EXTRA_FIELDS = (
        "order_id",
        "item",
        "step",
        "status",
        "correlation_id",
        "duration_ms",
        "error_type",
    )

    def format(self, record: logging.LogRecord) -> str:
        log_entry = self._build_base_entry(record)
        self._add_order_context(log_entry)
        self._add_record_extras(log_entry, record)
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)

    def _build_base_entry(self, record: logging.LogRecord) -> dict[str, Any]:
        return {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

    def _add_order_context(self, log_entry: dict[str, Any]) -> None:
        context = order_context.get({})
        if context:
            log_entry.update(
                {
                    "order_id": context.get("order_id"),
                    "step": context.get("step"),
                    "correlation_id": context.get("correlation_id"),
                }
            )

    def _add_record_extras(self, log_entry: dict[str, Any], record: logging.LogRecord) -> None:
        for name in self._EXTRA_FIELDS:
            if hasattr(record, name):
                log_entry[name] = getattr(record, name)


class OrderContextFilter(logging.Filter):
    """
    Logging filter that adds the order context to log records
    """

    def filter(self, record: logging.LogRecord) -> bool:
        context = order_context.get({})

        # Values passed explicitly through `extra` take precedence
        if not hasattr(record, "order_id"):
            record.order_id = context.get("order_id", "unknown")
        if not hasattr(record, "step"):
            record.step = context.get("step") or ""
        if not hasattr(record, "correlation_id"):
            record.correlation_id = context.get("correlation_id") or ""

        return True


def setup_json_logging(
    level: int = logging.INFO, stream: IO[str] | None = None, logger_name: str = "ordergate"
) -> logging.Handler:
    """
    Attach a JSON handler to the ordergate logger namespace.

    Returns:
        The installed handler, so callers can remove it again
    """
    handler = logging.StreamHandler(stream)
    handler.setFormatter(OrderJsonFormatter())
    handler.addFilter(OrderContextFilter())

    logger = logging.getLogger(logger_name)
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler


class OrderLogger:
    """
    Order-aware logger used by LoggingOrderListener
    """

    def __init__(self, logger: Any):
        self.logger = logger

    def order_started(self, order_id: str, item: str, quantity: int) -> None:
        self.logger.info(
            f"Order started: {order_id}",
            extra={"order_id": order_id, "item": item, "quantity": quantity},
        )

    def step_completed(self, order_id: str, step: str, duration_ms: float) -> None:
        self.logger.info(
            f"Step completed: {step}",
            extra={"order_id": order_id, "step": step, "duration_ms": duration_ms},
        )

    def order_finished(self, order_id: str, status: OrderStatus, duration_ms: float) -> None:
        log_level = logging.INFO if status == OrderStatus.COMPLETED else logging.WARNING
        self.logger.log(
            log_level,
            f"Order finished: {order_id} - Status: {status.value}",
            extra={"order_id": order_id, "status": status.value, "duration_ms": duration_ms},
        )

    def order_failed(self, order_id: str, error: Exception, duration_ms: float) -> None:
        self.logger.warning(
            f"Order failed: {order_id} - {error}",
            extra={
                "order_id": order_id,
                "status": OrderStatus.FAILED.value,
                "error_type": type(error).__name__,
                "duration_ms": duration_ms,
            },
        )

    def order_canceled(self, order_id: str) -> None:
        self.logger.info(
            f"Order canceled: {order_id}",
            extra={"order_id": order_id, "status": OrderStatus.CANCELED.value},
        )

    def cancel_failed(self, order_id: str, error: Exception) -> None:
        self.logger.warning(
            f"Cancel failed: {order_id} - {error}",
            extra={
                "order_id": order_id,
                "status": OrderStatus.CANCEL_FAILED.value,
                "error_type": type(error).__name__,
            },
        )
