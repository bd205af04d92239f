# ============================================
# FILE: ordergate/facade.py
# ============================================

"""
OrderFacade - single entry point for placing and canceling orders.

Sequences the inventory ledger, payment gateway and shipping service into
one order lifecycle:

    creating -> lock inventory -> process payment -> ship -> completed

Any recognized step failure (OrderStepError) is compensated: the payment is
refunded if it went through, the inventory hold is released, and the order
ends in 'failed'. Unrecognized exceptions are compensated the same way and
then re-raised to the caller.

Cancellation is cooperative. cancel_order() writes 'canceled' into the
status index and place_order() looks at it only at its checkpoints (before
lock, before payment, before shipping). A step already in flight always
runs to completion.

Usage:
    >>> facade = OrderFacade(config=OrderConfig(initial_stock={"item1": 10}))
    >>> await facade.place_order("o1", "item1", 2, 100, "123 Main St")
    True
    >>> facade.get_order_status("o1").status
    <OrderStatus.COMPLETED: 'completed'>
"""

import time
from collections.abc import Iterable

from ordergate.core.config import OrderConfig, get_config
from ordergate.core.exceptions import (
    InventoryUnavailableError,
    OrderStepError,
    PaymentPlatformError,
    RefundError,
    ShippingCancellationError,
    ShippingError,
)
from ordergate.core.listeners import OrderListener
from ordergate.core.logger import get_logger
from ordergate.core.store import OrderStore
from ordergate.core.types import (
    OrderRequest,
    OrderStatus,
    OrderStatusRecord,
    OrderStep,
    PaymentStatus,
)
from ordergate.monitoring.logging import bind_order_context, reset_order_context, update_order_step
from ordergate.services.inventory import InventoryLedger
from ordergate.services.payment import PaymentGateway
from ordergate.services.shipping import ShippingService

logger = get_logger(__name__)

COMPLETED_DETAILS = "Order completed successfully"
CAPTURED_AFTER_CANCEL_DETAILS = "Payment captured after cancellation"


class OrderFacade:
    """
    Coordinates inventory, payment and shipping for each order.

    Collaborators not passed explicitly are built from the configuration.
    Each facade owns its own OrderStore, so two facades never share state.

    Args:
        inventory: Inventory ledger (default: seeded from config.initial_stock)
        payments: Payment gateway (default: config retry budget and latencies)
        shipping: Shipping service (default: config latencies)
        config: OrderConfig (default: the global configuration)
        listeners: Lifecycle listeners (default: config.listeners)
    """

    def __init__(
        self,
        inventory: InventoryLedger | None = None,
        payments: PaymentGateway | None = None,
        shipping: ShippingService | None = None,
        config: OrderConfig | None = None,
        listeners: Iterable[OrderListener] | None = None,
    ):
        self.config = config or get_config()
        self.inventory = inventory or InventoryLedger(self.config.initial_stock)
        self.payments = payments or PaymentGateway(
            max_attempts=self.config.payment_max_attempts,
            payment_delay=self.config.payment_delay,
            refund_delay=self.config.refund_delay,
        )
        self.shipping = shipping or ShippingService(
            shipping_delay=self.config.shipping_delay,
            cancel_delay=self.config.cancel_shipment_delay,
        )
        self.listeners: list[OrderListener] = (
            list(listeners) if listeners is not None else list(self.config.listeners)
        )
        self._store = OrderStore()

    # ------------------------------------------------------------------
    # Status introspection
    # ------------------------------------------------------------------

    def get_order_status(self, order_id: str) -> OrderStatusRecord | None:
        """Current status record of an order, or None if it was never placed."""
        return self._store.get_status(order_id)

    def is_active(self, order_id: str) -> bool:
        """True while the order is in the active-order index."""
        return self._store.is_active(order_id)

    def list_orders(self, status: OrderStatus | None = None) -> dict[str, OrderStatusRecord]:
        return self._store.list_orders(status)

    @property
    def active_orders(self) -> list[str]:
        return self._store.active_ids()

    # ------------------------------------------------------------------
    # Place
    # ------------------------------------------------------------------

    async def place_order(
        self,
        order_id: str,
        item: str,
        quantity: int,
        payment_amount: float,
        address: str,
    ) -> bool:
        """
        Lock, pay and ship one order.

        Returns:
            True if the order completed. False if it failed on a recognized
            step error (see the status record for the reason) or was
            canceled before finishing.

        Raises:
            InvalidOrderError: Malformed request, nothing was recorded
            DuplicateOrderError: order_id was used before on this facade
            Exception: Any unrecognized collaborator error, after rollback
        """
        order = OrderRequest(order_id, item, quantity, payment_amount, address)
        self._store.register(order)

        token = bind_order_context(order_id)
        started = time.perf_counter()
        self._notify("on_order_started", order)
        try:
            return await self._execute(order, started)
        finally:
            reset_order_context(token)

    async def _execute(self, order: OrderRequest, started: float) -> bool:
        try:
            if self._canceled_at(order, "before processing"):
                return self._abort(order, started)

            step_started = self._enter(OrderStep.LOCK_INVENTORY)
            if not self.inventory.lock_item(order.item, order.quantity):
                raise InventoryUnavailableError("Item not available")
            order.lock_held = True
            self._step_done(order, OrderStep.LOCK_INVENTORY, step_started)

            if self._canceled_at(order, "before payment"):
                return self._abort(order, started)

            step_started = self._enter(OrderStep.PROCESS_PAYMENT)
            if not await self.payments.process_payment(order.order_id, order.payment_amount):
                raise PaymentPlatformError("Payment platform unavailable")
            order.paid = True
            self._step_done(order, OrderStep.PROCESS_PAYMENT, step_started)

            if self._canceled_at(order, "before shipping"):
                return self._abort(order, started)

            step_started = self._enter(OrderStep.SHIP_ITEMS)
            if not await self.shipping.ship_item(order.item, order.quantity, order.shipping_address):
                raise ShippingError("Shipping failed")
            self._step_done(order, OrderStep.SHIP_ITEMS, step_started)

        except OrderStepError as e:
            logger.warning(f"Order failed: {e}")
            await self._roll_back(order, e)
            self._finish_failed(order, e, started)
            return False

        except Exception as e:
            logger.error(f"Order {order.order_id} interrupted by unexpected error: {e!r}")
            await self._roll_back(order, e)
            self._finish_failed(order, e, started)
            raise

        return self._complete(order, started)

    def _complete(self, order: OrderRequest, started: float) -> bool:
        update_order_step(None)

        # Cancellation landed while the shipment was in flight; 'canceled' is terminal
        if self._store.is_canceled(order.order_id):
            logger.warning(f"Order {order.order_id} was canceled during shipping.")
            return self._abort(order, started)

        # A cancellation is still compensating; completing now would keep a refunded order
        if order.cancel_requested:
            logger.warning(f"Order {order.order_id} is being canceled; not completing.")
            return self._abort(order, started)

        if self.config.reserve_on_completion and order.lock_held:
            if self.inventory.reserve_item(order.item, order.quantity):
                order.lock_held = False

        self._store.set_status(order.order_id, OrderStatus.COMPLETED, details=COMPLETED_DETAILS)
        self._store.remove_active(order.order_id)
        logger.info("Order placed successfully.")
        self._notify("on_order_completed", order, time.perf_counter() - started)
        return True

    async def _roll_back(self, order: OrderRequest, error: Exception) -> None:
        """
        Undo the steps this order committed: refund first, then release the
        inventory hold, then record the failure.
        """
        update_order_step("rollback")
        refund_failed = False
        try:
            if self._refund_owed(order):
                refund_failed = not await self._refund(order)
                if refund_failed:
                    logger.error(f"Refund failed while rolling back order {order.order_id}")
        finally:
            self._release_lock(order)
            self._store.remove_active(order.order_id)

            if self._store.is_canceled(order.order_id):
                logger.info(f"Order {order.order_id} already canceled; keeping status.")
            else:
                self._store.set_status(
                    order.order_id,
                    OrderStatus.FAILED,
                    details="Refund failed" if refund_failed else None,
                    error=error,
                )

    def _finish_failed(self, order: OrderRequest, error: Exception, started: float) -> None:
        duration = time.perf_counter() - started
        if self._store.is_canceled(order.order_id):
            self._notify("on_order_aborted", order, duration)
        else:
            self._notify("on_order_failed", order, error, duration)

    def _abort(self, order: OrderRequest, started: float) -> bool:
        # The payment committed after the cancellation ran; no refund follows
        if order.paid and not order.refunded and self._store.is_canceled(order.order_id):
            logger.warning(f"Payment for order {order.order_id} was captured after cancellation.")
            self._store.annotate(order.order_id, CAPTURED_AFTER_CANCEL_DETAILS)

        self._notify("on_order_aborted", order, time.perf_counter() - started)
        return False

    def _canceled_at(self, order: OrderRequest, checkpoint: str) -> bool:
        if self._store.is_canceled(order.order_id) or order.cancel_requested:
            logger.info(f"Order {order.order_id} was canceled {checkpoint}.")
            return True
        return False

    def _enter(self, step: OrderStep) -> float:
        update_order_step(step.value)
        return time.perf_counter()

    def _step_done(self, order: OrderRequest, step: OrderStep, step_started: float) -> None:
        self._notify("on_step_completed", order, step, time.perf_counter() - step_started)

    # ------------------------------------------------------------------
    # Cancel
    # ------------------------------------------------------------------

    async def cancel_order(self, order_id: str) -> bool:
        """
        Cancel an active order.

        Returns:
            True if the order is now 'canceled'. False if it is unknown or no
            longer active, already completed, or a compensation failed (status
            'cancel_failed'; the order stays active and may be retried).
        """
        order = self._store.get_active(order_id)
        if order is None:
            logger.error("Cancel failed: Order not found.")
            return False

        current = self._store.current(order_id)
        if current == OrderStatus.COMPLETED:
            logger.info("Cancel failed: Order already completed.")
            return False

        token = bind_order_context(order_id, step="cancel")
        order.cancel_requested = True
        try:
            return await self._execute_cancel(order, current)
        finally:
            order.cancel_requested = False
            reset_order_context(token)

    async def _execute_cancel(self, order: OrderRequest, current: OrderStatus | None) -> bool:
        order_id = order.order_id
        try:
            # Only 'creating' guarantees nothing was handed to the carrier yet
            if current != OrderStatus.CREATING:
                if not await self.shipping.cancel_shipment(order.item, order.quantity):
                    raise ShippingCancellationError("Shipment cancellation failed.")

            if self._refund_owed(order):
                if not await self._refund(order):
                    raise RefundError("Refund failed.")

        except OrderStepError as e:
            logger.warning(f"Cancel failed: {e}")
            if not self._store.current(order_id).is_terminal:
                self._store.set_status(order_id, OrderStatus.CANCEL_FAILED, error=e)
            self._notify("on_cancel_failed", order, e)
            return False

        latest = self._store.current(order_id)
        if latest.is_terminal:
            logger.warning(
                f"Cancel failed: order {order_id} became '{latest.value}' during cancellation."
            )
            return False

        self._release_lock(order)
        self._store.remove_active(order_id)
        self._store.set_status(order_id, OrderStatus.CANCELED)
        logger.info("Order canceled successfully.")
        self._notify("on_order_canceled", order)
        return True

    # ------------------------------------------------------------------
    # Compensations
    # ------------------------------------------------------------------

    def _refund_owed(self, order: OrderRequest) -> bool:
        if order.refunded:
            return False
        return order.paid or (
            self.payments.get_payment_status(order.order_id) == PaymentStatus.SUCCESS
        )

    async def _refund(self, order: OrderRequest) -> bool:
        # Claimed before suspending so a concurrent rollback cannot refund again
        order.refunded = True
        refunded = False
        try:
            refunded = await self.payments.refund_payment(order.payment_amount)
        finally:
            order.refunded = bool(refunded)

        if refunded:
            self._notify("on_refund_issued", order)
        return bool(refunded)

    def _release_lock(self, order: OrderRequest) -> None:
        if order.lock_held:
            self.inventory.unlock_item(order.item, order.quantity)
            order.lock_held = False

    def _notify(self, hook: str, *args) -> None:
        for listener in self.listeners:
            try:
                getattr(listener, hook)(*args)
            except Exception:
                logger.exception(f"Listener {type(listener).__name__}.{hook} failed")
