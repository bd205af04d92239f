import pytest

from ordergate.services.inventory import InventoryLedger


@pytest.fixture
def ledger():
    return InventoryLedger({"item1": 10, "item2": 5})


class TestLock:
    def test_lock_within_stock(self, ledger):
        assert ledger.lock_item("item1", 4) is True
        assert ledger.locked("item1") == 4
        assert ledger.available("item1") == 10
        assert ledger.free("item1") == 6

    def test_lock_exact_free_quantity(self, ledger):
        assert ledger.lock_item("item2", 5) is True
        assert ledger.lock_item("item2", 1) is False

    def test_lock_more_than_stock(self, ledger):
        assert ledger.lock_item("item2", 10) is False
        assert ledger.locked("item2") == 0

    def test_unknown_item_has_no_stock(self, ledger):
        assert ledger.available("item9") == 0
        assert ledger.lock_item("item9", 1) is False

    def test_holds_accumulate(self, ledger):
        ledger.lock_item("item1", 3)
        ledger.lock_item("item1", 3)

        assert ledger.locked("item1") == 6
        assert ledger.lock_item("item1", 5) is False


class TestUnlock:
    def test_unlock_releases_hold(self, ledger):
        ledger.lock_item("item1", 4)

        assert ledger.unlock_item("item1", 4) is True
        assert ledger.locked("item1") == 0

    def test_over_release_is_a_no_op(self, ledger, caplog):
        ledger.lock_item("item1", 2)

        with caplog.at_level("WARNING"):
            assert ledger.unlock_item("item1", 3) is False

        assert ledger.locked("item1") == 2
        assert "Unlock failed" in caplog.text


class TestReserve:
    def test_reserve_converts_hold(self, ledger):
        ledger.lock_item("item1", 3)

        assert ledger.reserve_item("item1", 3) is True
        assert ledger.available("item1") == 7
        assert ledger.locked("item1") == 0

    def test_reserve_without_hold(self, ledger):
        assert ledger.reserve_item("item1", 1) is False
        assert ledger.available("item1") == 10

    def test_release_returns_stock(self, ledger):
        ledger.lock_item("item2", 2)
        ledger.reserve_item("item2", 2)
        ledger.release_item("item2", 2)

        assert ledger.available("item2") == 5


def test_snapshot(ledger):
    ledger.lock_item("item1", 2)

    assert ledger.snapshot() == {
        "item1": {"available": 10, "locked": 2},
        "item2": {"available": 5, "locked": 0},
    }


def test_locked_never_exceeds_available(ledger):
    for quantity in (3, 4, 2, 5, 1):
        ledger.lock_item("item1", quantity)
        assert ledger.locked("item1") <= ledger.available("item1")
