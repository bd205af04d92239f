"""
Tests for the simulated payment gateway.
"""

from unittest.mock import AsyncMock, patch

import pytest

from ordergate.core.types import PaymentStatus
from ordergate.services.payment import PaymentGateway


@pytest.fixture
def gateway():
    return PaymentGateway(max_attempts=3, payment_delay=0, refund_delay=0)


class TestProcessPayment:
    @pytest.mark.asyncio
    async def test_positive_amount_succeeds(self, gateway):
        assert await gateway.process_payment("o1", 100) is True
        assert gateway.get_payment_status("o1") == PaymentStatus.SUCCESS

    @pytest.mark.asyncio
    async def test_zero_amount_fails_after_all_attempts(self, gateway):
        with patch.object(gateway, "simulate_payment", wraps=gateway.simulate_payment) as attempt:
            assert await gateway.process_payment("o3", 0) is False

        assert attempt.await_count == 3
        assert gateway.get_payment_status("o3") == PaymentStatus.FAILED

    @pytest.mark.asyncio
    async def test_retries_until_success(self, gateway):
        flaky = AsyncMock(side_effect=[False, True])
        with patch.object(gateway, "simulate_payment", new=flaky):
            assert await gateway.process_payment("o1", 100) is True

        assert flaky.await_count == 2

    @pytest.mark.asyncio
    async def test_pending_while_in_flight(self, gateway):
        seen = []

        async def observe(amount):
            seen.append(gateway.get_payment_status("o1"))
            return True

        with patch.object(gateway, "simulate_payment", new=observe):
            await gateway.process_payment("o1", 100)

        assert seen == [PaymentStatus.PENDING]

    @pytest.mark.asyncio
    async def test_errors_propagate(self, gateway):
        failing = AsyncMock(side_effect=ConnectionError("down"))
        with patch.object(gateway, "simulate_payment", new=failing):
            with pytest.raises(ConnectionError):
                await gateway.process_payment("o1", 100)

        assert gateway.get_payment_status("o1") == PaymentStatus.PENDING


def test_unknown_order_has_no_status(gateway):
    assert gateway.get_payment_status("missing") is None


def test_max_attempts_validated():
    with pytest.raises(ValueError, match="max_attempts"):
        PaymentGateway(max_attempts=0)


@pytest.mark.asyncio
async def test_refund_succeeds(gateway):
    assert await gateway.refund_payment(100) is True


@pytest.mark.asyncio
@pytest.mark.slow
async def test_simulated_latency():
    import time

    gateway = PaymentGateway(max_attempts=1, payment_delay=0.05)
    start = time.perf_counter()
    await gateway.process_payment("o1", 10)

    assert time.perf_counter() - start >= 0.05
