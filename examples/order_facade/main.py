"""
Order Facade Example

Runs five scenarios against one OrderFacade and prints the
collected metrics:

1. A regular order that completes
2. An order for more stock than is available
3. An order whose payment is declined (zero amount)
4. An order canceled while its payment is in flight
5. An order whose carrier fails after payment, rolled back with a refund
"""

import asyncio
import logging

from ordergate import (
    LoggingOrderListener,
    MetricsOrderListener,
    OrderConfig,
    OrderFacade,
    ShippingService,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


class UnreliableCarrier(ShippingService):
    """Carrier that refuses shipments to a blocked address."""

    def __init__(self, blocked_address: str, **kwargs):
        super().__init__(**kwargs)
        self.blocked_address = blocked_address

    async def ship_item(self, item: str, quantity: int, address: str) -> bool:
        if address == self.blocked_address:
            await asyncio.sleep(self.shipping_delay)
            logger.warning(f"Carrier refused shipment to {address}")
            return False
        return await super().ship_item(item, quantity, address)


async def main():
    """Run the order facade demo."""
    print("=" * 60)
    print("Order Facade Demo")
    print("=" * 60)

    config = OrderConfig(
        initial_stock={"item1": 10, "item2": 5},
        metrics=False,
        logging=False,
    ).with_delays(0.2)
    metrics = MetricsOrderListener()

    facade = OrderFacade(
        shipping=UnreliableCarrier("Nowhere", shipping_delay=0.2, cancel_delay=0.1),
        config=config,
        listeners=[LoggingOrderListener(), metrics],
    )

    await facade.place_order("o1", "item1", 2, 100, "123 Main St")
    await facade.place_order("o2", "item2", 10, 100, "456 Maple St")
    await facade.place_order("o3", "item1", 1, 0, "789 Oak St")

    placing = asyncio.create_task(facade.place_order("o4", "item2", 1, 50, "987 Pine St"))
    await asyncio.sleep(0.1)
    await facade.cancel_order("o4")
    await placing

    await facade.place_order("o5", "item1", 1, 75, "Nowhere")

    print("\nOrder statuses:")
    for order_id, record in facade.list_orders().items():
        print(f"   {order_id}: {record.status.value:<10} {record.error or record.details or ''}")

    print("\nInventory:")
    for item, counts in facade.inventory.snapshot().items():
        print(f"   {item}: available={counts['available']} locked={counts['locked']}")

    print("\nMetrics:")
    for key, value in metrics.metrics.get_metrics().items():
        print(f"   {key}: {value}")


if __name__ == "__main__":
    asyncio.run(main())
