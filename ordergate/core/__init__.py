"""
Core module for ordergate - contains the fundamental building blocks.
"""

from ordergate.core.exceptions import (
    DuplicateOrderError,
    InvalidOrderError,
    InvalidTransitionError,
    InventoryUnavailableError,
    NetworkError,
    OrderError,
    OrderStepError,
    PaymentError,
    PaymentPlatformError,
    RefundError,
    ShippingCancellationError,
    ShippingError,
)
from ordergate.core.types import (
    TERMINAL_STATUSES,
    OrderRequest,
    OrderStatus,
    OrderStatusRecord,
    OrderStep,
    PaymentStatus,
)
from ordergate.core.logger import NullLogger, get_logger, set_logger
from ordergate.core.listeners import (
    LoggingOrderListener,
    MetricsOrderListener,
    OrderListener,
    default_listeners,
)
from ordergate.core.config import OrderConfig, configure, get_config
from ordergate.core.store import OrderStore

__all__ = [
    # Config
    "OrderConfig",
    "configure",
    "get_config",
    # Exceptions
    "DuplicateOrderError",
    "InvalidOrderError",
    "InvalidTransitionError",
    "InventoryUnavailableError",
    "NetworkError",
    "OrderError",
    "OrderStepError",
    "PaymentError",
    "PaymentPlatformError",
    "RefundError",
    "ShippingCancellationError",
    "ShippingError",
    # Listeners
    "LoggingOrderListener",
    "MetricsOrderListener",
    "OrderListener",
    "default_listeners",
    # Logger
    "NullLogger",
    "get_logger",
    "set_logger",
    # Store
    "OrderStore",
    # Types
    "TERMINAL_STATUSES",
    "OrderRequest",
    "OrderStatus",
    "OrderStatusRecord",
    "OrderStep",
    "PaymentStatus",
]
