"""
Tests for the in-memory OrderStore and its status state machine.
"""

import pytest

from ordergate.core.exceptions import (
    DuplicateOrderError,
    InvalidTransitionError,
    InventoryUnavailableError,
)
from ordergate.core.store import OrderStore
from ordergate.core.types import OrderRequest, OrderStatus


@pytest.fixture
def store():
    return OrderStore()


@pytest.fixture
def order():
    return OrderRequest("o1", "item1", 2, 100, "123 Main St")


class TestRegister:
    def test_register_marks_active_and_creating(self, store, order):
        record = store.register(order)

        assert record.status == OrderStatus.CREATING
        assert store.is_active("o1")
        assert store.get_active("o1") is order
        assert store.current("o1") == OrderStatus.CREATING
        assert len(store) == 1

    def test_duplicate_active_id_rejected(self, store, order):
        store.register(order)

        with pytest.raises(DuplicateOrderError):
            store.register(OrderRequest("o1", "item2", 1, 50, "Addr"))

    def test_finished_id_cannot_be_reused(self, store, order):
        store.register(order)
        store.set_status("o1", OrderStatus.COMPLETED)
        store.remove_active("o1")

        with pytest.raises(DuplicateOrderError):
            store.register(OrderRequest("o1", "item1", 1, 50, "Addr"))


class TestActiveIndex:
    def test_remove_active_keeps_status(self, store, order):
        store.register(order)

        assert store.remove_active("o1") is order
        assert store.remove_active("o1") is None
        assert not store.is_active("o1")
        assert store.current("o1") == OrderStatus.CREATING

    def test_active_ids(self, store):
        store.register(OrderRequest("a", "item1", 1, 1, "Addr"))
        store.register(OrderRequest("b", "item1", 1, 1, "Addr"))
        store.remove_active("a")

        assert store.active_ids() == ["b"]

    def test_unknown_order(self, store):
        assert store.get_active("missing") is None
        assert store.get_status("missing") is None
        assert store.current("missing") is None
        assert store.is_canceled("missing") is False


class TestSetStatus:
    def test_records_error_details(self, store, order):
        store.register(order)

        record = store.set_status(
            "o1", OrderStatus.FAILED, error=InventoryUnavailableError("Item not available")
        )

        assert record.error == "Item not available"
        assert record.error_type == "InventoryUnavailableError"
        assert store.get_status("o1") is record

    @pytest.mark.parametrize(
        "target",
        [OrderStatus.COMPLETED, OrderStatus.FAILED, OrderStatus.CANCELED, OrderStatus.CANCEL_FAILED],
    )
    def test_creating_moves_anywhere(self, store, order, target):
        store.register(order)
        assert store.set_status("o1", target).status == target

    def test_cancel_failed_is_retryable(self, store, order):
        store.register(order)
        store.set_status("o1", OrderStatus.CANCEL_FAILED)
        store.set_status("o1", OrderStatus.CANCEL_FAILED)

        assert store.set_status("o1", OrderStatus.CANCELED).status == OrderStatus.CANCELED
        assert store.is_canceled("o1")

    @pytest.mark.parametrize(
        "terminal", [OrderStatus.COMPLETED, OrderStatus.FAILED, OrderStatus.CANCELED]
    )
    def test_terminal_status_is_final(self, store, order, terminal):
        store.register(order)
        store.set_status("o1", terminal, details="done")

        with pytest.raises(InvalidTransitionError):
            store.set_status("o1", OrderStatus.CANCEL_FAILED)

        assert store.get_status("o1").details == "done"


def test_annotate_terminal_record(store, order):
    store.register(order)
    store.set_status("o1", OrderStatus.CANCELED)

    record = store.annotate("o1", "Payment captured after cancellation")

    assert record.status == OrderStatus.CANCELED
    assert store.get_status("o1").details == "Payment captured after cancellation"
    assert store.annotate("missing", "x") is None


def test_list_orders_filters_by_status(store):
    for order_id in ("a", "b", "c"):
        store.register(OrderRequest(order_id, "item1", 1, 1, "Addr"))
    store.set_status("a", OrderStatus.COMPLETED)
    store.set_status("b", OrderStatus.FAILED)

    assert set(store.list_orders()) == {"a", "b", "c"}
    assert list(store.list_orders(OrderStatus.FAILED)) == ["b"]
    assert list(store.list_orders(OrderStatus.CREATING)) == ["c"]
