"""
Simulated shipping carrier.
"""

import asyncio

from ordergate.core.logger import get_logger

logger = get_logger(__name__)


class ShippingService:
    """Dispatches and cancels shipments after a fixed artificial latency."""

    def __init__(self, shipping_delay: float = 1.0, cancel_delay: float = 0.5):
        self.shipping_delay = shipping_delay
        self.cancel_delay = cancel_delay

    async def ship_item(self, item: str, quantity: int, address: str) -> bool:
        await asyncio.sleep(self.shipping_delay)
        logger.info(f"Shipping {quantity} of {item} to {address}.")
        return True

    async def cancel_shipment(self, item: str, quantity: int) -> bool:
        await asyncio.sleep(self.cancel_delay)
        logger.info(f"Shipment of {quantity} of {item} has been canceled.")
        return True
