# ============================================
# FILE: ordergate/core/exceptions.py
# ============================================

"""
All order-related exceptions

OrderStepError subclasses are the failures the facade recognizes and
compensates for. Anything else (NetworkError included) propagates to the caller.
"""


class OrderError(Exception):
    """Base order error"""


class OrderStepError(OrderError):
    """Recognized failure of an order step"""


class InventoryUnavailableError(OrderStepError):
    """Requested quantity could not be locked"""


class PaymentError(OrderStepError):
    """Error in the payment step"""


class PaymentPlatformError(PaymentError):
    """Payment platform rejected or could not process the payment"""


class RefundError(PaymentError):
    """Refund could not be issued"""


class ShippingError(OrderStepError):
    """Error in the shipping step"""


class ShippingCancellationError(ShippingError):
    """Shipment could not be canceled"""


class NetworkError(OrderError):
    """Transport fault raised by a collaborator"""


class DuplicateOrderError(OrderError):
    """Order id was already used by this facade"""

    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(f"Order {order_id} already exists")


class InvalidOrderError(OrderError, ValueError):
    """Order request failed validation"""


class InvalidTransitionError(OrderError):
    """
    Raised when a status change would leave a terminal status.

    The status store enforces the order state machine; callers should check
    the current status before writing.
    """

    def __init__(self, order_id: str, current: str, target: str):
        self.order_id = order_id
        self.current = current
        self.target = target
        super().__init__(f"Order {order_id}: cannot move from '{current}' to '{target}'")
