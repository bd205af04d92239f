"""
OrderConfig - Unified configuration for ordergate.

Wires together the simulated collaborators (seed stock, latencies, retry
budget) and the observability listeners in a single object.

Example:
    >>> from ordergate import OrderConfig, OrderFacade
    >>>
    >>> config = OrderConfig(
    ...     initial_stock={"item1": 10, "item2": 5},
    ...     payment_max_attempts=3,
    ...     metrics=True,
    ... )
    >>> facade = OrderFacade(config=config)

Example (no latency, for tests and the CLI --fast flag):
    >>> config = OrderConfig().with_delays(0)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ordergate.core.listeners import OrderListener

logger = logging.getLogger(__name__)


def _default_stock() -> dict[str, int]:
    return {"item1": 10, "item2": 5}


@dataclass
class OrderConfig:
    """
    Configuration for an OrderFacade and its collaborators.

    Attributes:
        initial_stock: Seed quantities for the inventory ledger
        payment_max_attempts: Attempts made by PaymentGateway.process_payment
        payment_delay: Simulated latency of one payment attempt (seconds)
        refund_delay: Simulated latency of a refund (seconds)
        shipping_delay: Simulated latency of a shipment (seconds)
        cancel_shipment_delay: Simulated latency of a shipment cancellation
        reserve_on_completion: Convert the inventory lock into a stock
            decrement once an order completes
        metrics: Enable metrics (True/False or a listener instance)
        logging: Enable lifecycle logging (True/False or a listener instance)
    """

    initial_stock: dict[str, int] = field(default_factory=_default_stock)

    payment_max_attempts: int = 3
    payment_delay: float = 1.0
    refund_delay: float = 0.5
    shipping_delay: float = 1.0
    cancel_shipment_delay: float = 0.5

    reserve_on_completion: bool = False

    # Observability - bool or listener instance
    metrics: bool | OrderListener = True
    logging: bool | OrderListener = True

    _listeners: list[OrderListener] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if self.payment_max_attempts < 1:
            msg = f"payment_max_attempts must be at least 1, got {self.payment_max_attempts}"
            raise ValueError(msg)
        for name in ("payment_delay", "refund_delay", "shipping_delay", "cancel_shipment_delay"):
            if getattr(self, name) < 0:
                msg = f"{name} must not be negative"
                raise ValueError(msg)
        for item, quantity in self.initial_stock.items():
            if quantity < 0:
                msg = f"initial stock for {item} must not be negative"
                raise ValueError(msg)

        self._listeners = self._build_listeners()

    def _build_listeners(self) -> list[OrderListener]:
        """Build listeners list from configuration."""
        from ordergate.core.listeners import (
            LoggingOrderListener,
            MetricsOrderListener,
            OrderListener,
        )

        listeners: list[OrderListener] = []

        if isinstance(self.logging, OrderListener):
            listeners.append(self.logging)
        elif self.logging:
            listeners.append(LoggingOrderListener())

        if isinstance(self.metrics, OrderListener):
            listeners.append(self.metrics)
        elif self.metrics:
            listeners.append(MetricsOrderListener())

        return listeners

    @property
    def listeners(self) -> list[OrderListener]:
        """Get configured listeners list."""
        return self._listeners

    def with_delays(
        self,
        payment: float | None = None,
        refund: float | None = None,
        shipping: float | None = None,
        cancel_shipment: float | None = None,
    ) -> OrderConfig:
        """
        Create a new config with different latencies (immutable update).

        The first argument is used for every delay not given explicitly, so
        with_delays(0) removes all simulated latency.
        """
        return replace(
            self,
            payment_delay=self.payment_delay if payment is None else payment,
            refund_delay=_pick(refund, payment, self.refund_delay),
            shipping_delay=_pick(shipping, payment, self.shipping_delay),
            cancel_shipment_delay=_pick(cancel_shipment, payment, self.cancel_shipment_delay),
            initial_stock=dict(self.initial_stock),
        )

    def with_stock(self, stock: dict[str, int]) -> OrderConfig:
        """Create a new config with a different seed stock (immutable update)."""
        return replace(self, initial_stock=dict(stock))

    @classmethod
    def from_env(cls, load_dotenv: bool = True) -> OrderConfig:
        """
        Create configuration from environment variables.

        Environment variables:
            ORDERGATE_STOCK: Seed stock, e.g. "item1=10,item2=5"
            ORDERGATE_PAYMENT_MAX_ATTEMPTS: Payment attempts per order
            ORDERGATE_PAYMENT_DELAY, ORDERGATE_REFUND_DELAY,
            ORDERGATE_SHIPPING_DELAY, ORDERGATE_CANCEL_SHIPMENT_DELAY: Latencies
            ORDERGATE_RESERVE_ON_COMPLETION: Decrement stock on completion
            ORDERGATE_METRICS: Enable metrics (true/false)
            ORDERGATE_LOGGING: Enable lifecycle logging (true/false)

        Args:
            load_dotenv: If True, loads .env file before reading variables
        """
        from ordergate.core.env import get_env

        env = get_env()
        if load_dotenv:
            env.load()

        defaults = cls(metrics=False, logging=False)
        stock_value = env.get("ORDERGATE_STOCK", "")

        return cls(
            initial_stock=parse_stock(stock_value) if stock_value else defaults.initial_stock,
            payment_max_attempts=env.get_int(
                "ORDERGATE_PAYMENT_MAX_ATTEMPTS", defaults.payment_max_attempts
            ),
            payment_delay=env.get_float("ORDERGATE_PAYMENT_DELAY", defaults.payment_delay),
            refund_delay=env.get_float("ORDERGATE_REFUND_DELAY", defaults.refund_delay),
            shipping_delay=env.get_float("ORDERGATE_SHIPPING_DELAY", defaults.shipping_delay),
            cancel_shipment_delay=env.get_float(
                "ORDERGATE_CANCEL_SHIPMENT_DELAY", defaults.cancel_shipment_delay
            ),
            reserve_on_completion=env.get_bool("ORDERGATE_RESERVE_ON_COMPLETION", False),
            metrics=env.get_bool("ORDERGATE_METRICS", True),
            logging=env.get_bool("ORDERGATE_LOGGING", True),
        )

    @classmethod
    def from_file(cls, file_path: str | Path, substitute_env: bool = True) -> OrderConfig:
        """
        Load configuration from a YAML file.

        Supports environment variable substitution using ${VAR} syntax.

        Example:
            # ordergate.yaml
            # inventory:
            #   stock:
            #     item1: ${ITEM1_STOCK:-10}
            #   reserve_on_completion: false
            # payment:
            #   max_attempts: 3
            #   delay: 1.0
            #   refund_delay: 0.5
            # shipping:
            #   delay: 1.0
            #   cancel_delay: 0.5
            # observability:
            #   metrics: true
            #   logging: true
        """
        import yaml

        from ordergate.core.env import get_env

        path = Path(file_path)
        if not path.exists():
            msg = f"Configuration file not found: {file_path}"
            raise FileNotFoundError(msg)

        with path.open() as f:
            data = yaml.safe_load(f)

        if not data:
            return cls()

        if substitute_env:
            env = get_env()
            env.load()
            data = env.substitute_dict(data)

        inventory_data = data.get("inventory", {})
        payment_data = data.get("payment", {})
        shipping_data = data.get("shipping", {})
        obs_data = data.get("observability", {})

        kwargs: dict[str, Any] = {}
        if "stock" in inventory_data:
            kwargs["initial_stock"] = {
                str(item): int(qty) for item, qty in inventory_data["stock"].items()
            }
        if "reserve_on_completion" in inventory_data:
            kwargs["reserve_on_completion"] = _as_bool(inventory_data["reserve_on_completion"])
        if "max_attempts" in payment_data:
            kwargs["payment_max_attempts"] = int(payment_data["max_attempts"])
        if "delay" in payment_data:
            kwargs["payment_delay"] = float(payment_data["delay"])
        if "refund_delay" in payment_data:
            kwargs["refund_delay"] = float(payment_data["refund_delay"])
        if "delay" in shipping_data:
            kwargs["shipping_delay"] = float(shipping_data["delay"])
        if "cancel_delay" in shipping_data:
            kwargs["cancel_shipment_delay"] = float(shipping_data["cancel_delay"])

        return cls(
            metrics=_as_bool(obs_data.get("metrics", True)),
            logging=_as_bool(obs_data.get("logging", True)),
            **kwargs,
        )


def parse_stock(value: str) -> dict[str, int]:
    """
    Parse "item1=10,item2=5" into a stock mapping.

    Raises:
        ValueError: On malformed entries or non-integer quantities
    """
    stock: dict[str, int] = {}
    for entry in value.split(","):
        entry = entry.strip()
        if not entry:
            continue
        item, sep, quantity = entry.partition("=")
        if not sep or not item.strip():
            msg = f"Invalid stock entry '{entry}', expected item=quantity"
            raise ValueError(msg)
        stock[item.strip()] = int(quantity)
    return stock


def _pick(explicit: float | None, fallback: float | None, current: float) -> float:
    if explicit is not None:
        return explicit
    if fallback is not None:
        return fallback
    return current


def _as_bool(value: Any) -> bool:
    # Substituted YAML values arrive as strings
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


_global_config: OrderConfig | None = None


def get_config() -> OrderConfig:
    """Get the global order configuration."""
    global _global_config
    if _global_config is None:
        _global_config = OrderConfig()
    return _global_config


def configure(config: OrderConfig) -> None:
    """Set the global order configuration."""
    global _global_config
    _global_config = config
    logger.info(f"ordergate configured: stock={sorted(config.initial_stock)}")
