"""Tests for the summary card counts."""

import asyncio

import httpx
import pytest

from customer_counts.core.counts import CountsAggregator
from customer_counts.errors import AuthError
from customer_counts.schemas.view_schema import CountsSnapshot
from tests.conftest import make_gateway


@pytest.fixture
def aggregator(gateway):
    return CountsAggregator(gateway)


class TestRefresh:
    def test_starts_at_zero(self, aggregator):
        assert aggregator.snapshot == CountsSnapshot(0, 0)
        assert not aggregator.busy

    @pytest.mark.asyncio
    async def test_counts_both_categories(self, aggregator, backend):
        snapshot = await aggregator.refresh()
        assert snapshot == CountsSnapshot(visitor_count=2, shopper_count=1)
        assert aggregator.snapshot == snapshot
        assert len(backend.calls_to("GET", "/customers/visitors/")) == 1
        assert len(backend.calls_to("GET", "/customers/shoppers/")) == 1

    @pytest.mark.asyncio
    async def test_shopper_failure_zeroes_both(self, aggregator, backend):
        backend.fail_category("shoppers")
        snapshot = await aggregator.refresh()
        assert snapshot == CountsSnapshot(0, 0)

    @pytest.mark.asyncio
    async def test_failure_after_success_resets_to_zero(self, aggregator, backend):
        await aggregator.refresh()
        backend.fail_category("visitors", 503)
        snapshot = await aggregator.refresh()
        assert snapshot.visitor_count == 0
        assert snapshot.shopper_count == 0

    @pytest.mark.asyncio
    async def test_recovers_on_next_refresh(self, aggregator, backend):
        backend.fail_category("shoppers")
        await aggregator.refresh()
        backend.failures.clear()
        snapshot = await aggregator.refresh()
        assert snapshot == CountsSnapshot(2, 1)

    @pytest.mark.asyncio
    async def test_auth_failure_zeroes_and_raises(self, aggregator, tokens):
        tokens["access"] = None
        with pytest.raises(AuthError):
            await aggregator.refresh()
        assert aggregator.snapshot == CountsSnapshot(0, 0)
        assert not aggregator.busy

    @pytest.mark.asyncio
    async def test_numeric_display_fields_are_counted(self):
        lists = {
            "/api/customers/visitors/": [
                {"id": 1, "phone_number": 412345678, "visit_type": "visitors"},
                {"id": 2, "phone_number": "0498", "visit_type": "visitors"},
            ],
            "/api/customers/shoppers/": [{"id": 3, "name": 7, "visit_type": "shoppers"}],
        }
        aggregator = CountsAggregator(
            make_gateway(lambda request: httpx.Response(200, json=lists[request.url.path]))
        )
        assert await aggregator.refresh() == CountsSnapshot(visitor_count=2, shopper_count=1)

    @pytest.mark.asyncio
    async def test_empty_lists_count_as_zero(self):
        aggregator = CountsAggregator(make_gateway(lambda request: httpx.Response(200, json=[])))
        assert await aggregator.refresh() == CountsSnapshot(0, 0)


class TestBusyFlag:
    @pytest.mark.asyncio
    async def test_refresh_while_busy_is_ignored(self):
        gate = asyncio.Event()
        paths = []

        async def handler(request):
            paths.append(request.url.path)
            await gate.wait()
            return httpx.Response(200, json=[{"id": 1}, {"id": 2}])

        aggregator = CountsAggregator(make_gateway(handler))
        first = asyncio.create_task(aggregator.refresh())
        while len(paths) < 2:
            await asyncio.sleep(0)
        assert aggregator.busy

        ignored = await aggregator.refresh()
        assert ignored == CountsSnapshot(0, 0)
        assert len(paths) == 2

        gate.set()
        snapshot = await first
        assert snapshot == CountsSnapshot(2, 2)
        assert not aggregator.busy

    @pytest.mark.asyncio
    async def test_requests_issued_concurrently(self):
        gate = asyncio.Event()
        paths = []

        async def handler(request):
            paths.append(request.url.path)
            if len(paths) == 2:
                gate.set()
            await asyncio.wait_for(gate.wait(), timeout=1)
            return httpx.Response(200, json=[])

        aggregator = CountsAggregator(make_gateway(handler))
        await aggregator.refresh()
        assert sorted(paths) == ["/api/customers/shoppers/", "/api/customers/visitors/"]
