"""
Collaborators coordinated by OrderFacade.
"""

from ordergate.services.inventory import InventoryLedger
from ordergate.services.payment import PaymentGateway
from ordergate.services.shipping import ShippingService

__all__ = [
    "InventoryLedger",
    "PaymentGateway",
    "ShippingService",
]
