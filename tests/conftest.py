"""
Pytest configuration and shared fixtures for order facade tests

All facades built here run with zero simulated latency; asyncio.sleep(0)
still yields, so suspension points and interleavings behave as in production.
"""

import pytest

from ordergate.core import config as config_module
from ordergate.core.listeners import OrderListener
from ordergate.core.logger import set_logger
from ordergate.core.config import OrderConfig
from ordergate.facade import OrderFacade

SEED_STOCK = {"item1": 10, "item2": 5}


class RecordingListener(OrderListener):
    """Listener that records every callback as (hook, order_id, *extra)."""

    def __init__(self):
        self.events = []

    def on_order_started(self, order):
        self.events.append(("started", order.order_id))

    def on_step_completed(self, order, step, duration):
        self.events.append(("step", order.order_id, step.value))

    def on_order_completed(self, order, duration):
        self.events.append(("completed", order.order_id))

    def on_order_failed(self, order, error, duration):
        self.events.append(("failed", order.order_id, str(error)))

    def on_order_aborted(self, order, duration):
        self.events.append(("aborted", order.order_id))

    def on_refund_issued(self, order):
        self.events.append(("refund", order.order_id))

    def on_order_canceled(self, order):
        self.events.append(("canceled", order.order_id))

    def on_cancel_failed(self, order, error):
        self.events.append(("cancel_failed", order.order_id, str(error)))

    def hooks(self, order_id=None):
        return [e[0] for e in self.events if order_id is None or e[1] == order_id]


# ============================================
# AUTO-USE FIXTURES
# ============================================


@pytest.fixture(autouse=True)
def reset_globals():
    """Each test starts with standard logging and no global configuration."""
    set_logger(None)
    config_module._global_config = None
    yield
    set_logger(None)
    config_module._global_config = None


# ============================================
# FACADE FIXTURES
# ============================================


@pytest.fixture
def fast_config():
    """Seeded stock, no latency, no default listeners."""
    return OrderConfig(initial_stock=dict(SEED_STOCK), metrics=False, logging=False).with_delays(0)


@pytest.fixture
def recorder():
    return RecordingListener()


@pytest.fixture
def facade(fast_config, recorder):
    return OrderFacade(config=fast_config, listeners=[recorder])
