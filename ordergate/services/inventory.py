"""
Inventory ledger.

Gates demand against finite stock with a two-phase hold: lock_item() takes
a reversible hold against available-minus-locked capacity, reserve_item()
later converts a hold into a real stock decrement.

All operations are synchronous and never raise; failures are reported by a
False return value or logged as a no-op.
"""

from ordergate.core.logger import get_logger

logger = get_logger(__name__)


class InventoryLedger:
    """
    Available and locked quantities per item.

    Invariant: locked(item) <= available(item) for every item.
    Items that were never stocked have zero availability.
    """

    def __init__(self, stock: dict[str, int] | None = None):
        self._available: dict[str, int] = dict(stock or {})
        self._locked: dict[str, int] = {}

    def available(self, item: str) -> int:
        return self._available.get(item, 0)

    def locked(self, item: str) -> int:
        return self._locked.get(item, 0)

    def free(self, item: str) -> int:
        """Quantity that can still be locked."""
        return self.available(item) - self.locked(item)

    def lock_item(self, item: str, quantity: int) -> bool:
        """
        Hold `quantity` units of `item` without decrementing stock.

        Returns:
            True if the hold was taken, False if not enough free stock
        """
        if self.free(item) >= quantity:
            self._locked[item] = self.locked(item) + quantity
            logger.info(f"Locked {quantity} of {item}. Total locked: {self._locked[item]}")
            return True

        logger.info(f"Failed to lock {quantity} of {item}. Available: {self.free(item)}")
        return False

    def unlock_item(self, item: str, quantity: int) -> bool:
        """
        Release a hold. A release larger than the held quantity changes nothing.

        Returns:
            True if the hold was released
        """
        if self.locked(item) >= quantity:
            self._locked[item] = self.locked(item) - quantity
            logger.info(f"Unlocked {quantity} of {item}. Total locked: {self._locked[item]}")
            return True

        logger.warning(f"Unlock failed: Not enough locked quantity for {item}")
        return False

    def reserve_item(self, item: str, quantity: int) -> bool:
        """
        Convert a hold into a stock decrement.

        Returns:
            True if `quantity` was locked and is now deducted from stock
        """
        if self.locked(item) >= quantity:
            self._available[item] = self.available(item) - quantity
            self._locked[item] = self.locked(item) - quantity
            logger.info(f"Reserved {quantity} of {item}. Remaining: {self._available[item]}")
            return True

        logger.info(
            f"Insufficient locked stock for {item}. "
            f"Requested: {quantity}, Locked: {self.locked(item)}"
        )
        return False

    def release_item(self, item: str, quantity: int) -> None:
        """Return `quantity` units to stock, e.g. after undoing a reservation."""
        self._available[item] = self.available(item) + quantity
        logger.info(f"Released {quantity} of {item}. Current stock: {self._available[item]}")

    def snapshot(self) -> dict[str, dict[str, int]]:
        """Copy of the ledger: {item: {"available": n, "locked": m}}."""
        items = set(self._available) | set(self._locked)
        return {
            item: {"available": self.available(item), "locked": self.locked(item)}
            for item in sorted(items)
        }
