# ============================================
# FILE: ordergate/__init__.py
# ============================================

"""
ordergate - Facade-based order processing

A single OrderFacade coordinates three collaborators into one order
lifecycle with cooperative cancellation and compensating rollback:

- InventoryLedger: two-phase stock holds (lock, then reserve)
- PaymentGateway: payments with bounded retry, refunds
- ShippingService: shipment creation and cancellation

Usage:
    >>> import asyncio
    >>> from ordergate import OrderConfig, OrderFacade
    >>>
    >>> facade = OrderFacade(config=OrderConfig(initial_stock={"item1": 10}))
    >>> asyncio.run(facade.place_order("o1", "item1", 2, 100, "123 Main St"))
    True
    >>> facade.get_order_status("o1").status.value
    'completed'

With listeners (logging, metrics):
    >>> from ordergate import LoggingOrderListener, MetricsOrderListener
    >>> metrics = MetricsOrderListener()
    >>> facade = OrderFacade(listeners=[LoggingOrderListener(), metrics])
    >>> metrics.metrics.get_metrics()["success_rate"]
"""

from ordergate.core import (
    DuplicateOrderError,
    InvalidOrderError,
    InvalidTransitionError,
    InventoryUnavailableError,
    LoggingOrderListener,
    MetricsOrderListener,
    NetworkError,
    OrderConfig,
    OrderError,
    OrderListener,
    OrderRequest,
    OrderStatus,
    OrderStatusRecord,
    OrderStep,
    OrderStepError,
    OrderStore,
    PaymentError,
    PaymentPlatformError,
    PaymentStatus,
    RefundError,
    ShippingCancellationError,
    ShippingError,
    configure,
    default_listeners,
    get_config,
)
from ordergate.facade import OrderFacade
from ordergate.services import InventoryLedger, PaymentGateway, ShippingService

__version__ = "0.1.0"

__all__ = [
    # Primary exports
    "OrderFacade",
    "InventoryLedger",
    "PaymentGateway",
    "ShippingService",
    # Configuration
    "OrderConfig",
    "configure",
    "get_config",
    # Types
    "OrderRequest",
    "OrderStatus",
    "OrderStatusRecord",
    "OrderStep",
    "OrderStore",
    "PaymentStatus",
    # Listeners
    "OrderListener",
    "LoggingOrderListener",
    "MetricsOrderListener",
    "default_listeners",
    # Exceptions
    "OrderError",
    "OrderStepError",
    "InventoryUnavailableError",
    "PaymentError",
    "PaymentPlatformError",
    "RefundError",
    "ShippingError",
    "ShippingCancellationError",
    "NetworkError",
    "DuplicateOrderError",
    "InvalidOrderError",
    "InvalidTransitionError",
]
