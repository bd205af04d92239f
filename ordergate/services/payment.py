"""
Simulated payment gateway with bounded retry and refunds.
"""

import asyncio

from ordergate.core.logger import get_logger
from ordergate.core.types import PaymentStatus

logger = get_logger(__name__)


class PaymentGateway:
    """
    Mock payment processor.

    process_payment() tracks a PaymentStatus per order id so the facade can
    tell whether a refund is owed. The simulated primitive accepts any
    positive amount; override simulate_payment() for other behavior.
    """

    def __init__(
        self, max_attempts: int = 3, payment_delay: float = 1.0, refund_delay: float = 0.5
    ):
        if max_attempts < 1:
            msg = f"max_attempts must be at least 1, got {max_attempts}"
            raise ValueError(msg)
        self.max_attempts = max_attempts
        self.payment_delay = payment_delay
        self.refund_delay = refund_delay
        self.payment_status: dict[str, PaymentStatus] = {}

    def get_payment_status(self, order_id: str) -> PaymentStatus | None:
        return self.payment_status.get(order_id)

    async def process_payment(self, order_id: str, amount: float) -> bool:
        """
        Charge `amount` for `order_id`, retrying up to max_attempts times.

        Returns:
            True on the first successful attempt, False if all attempts failed
        """
        self.payment_status[order_id] = PaymentStatus.PENDING

        for attempt in range(1, self.max_attempts + 1):
            if await self.simulate_payment(amount):
                self.payment_status[order_id] = PaymentStatus.SUCCESS
                logger.info(f"Payment for order {order_id} succeeded.")
                return True
            logger.debug(f"Payment attempt {attempt} for order {order_id} failed.")

        self.payment_status[order_id] = PaymentStatus.FAILED
        logger.warning(f"Payment for order {order_id} failed after {self.max_attempts} attempts.")
        return False

    async def simulate_payment(self, amount: float) -> bool:
        await asyncio.sleep(self.payment_delay)
        return amount > 0

    async def refund_payment(self, amount: float) -> bool:
        """Refund `amount`. The simulation always succeeds."""
        await asyncio.sleep(self.refund_delay)
        logger.info(f"Refund of ${amount} processed successfully.")
        return True
