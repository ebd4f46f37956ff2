# web_api/tests/test_viewer_registry.py
"""Tests for viewer session eviction."""

import httpx
import pytest

from core.config import Settings
from web_api.auth import ViewerRegistry


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def _registry(clock: FakeClock, **overrides) -> ViewerRegistry:
    settings = Settings(lms_api_base_url="https://lms.test/api/v1", **overrides)
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=[]))
    return ViewerRegistry(settings, transport=transport, clock=clock)


class TestViewerRegistry:
    @pytest.mark.asyncio
    async def test_same_key_returns_same_viewer(self):
        registry = _registry(FakeClock())
        first = await registry.get("tab-1")
        assert await registry.get("tab-1") is first
        assert len(registry) == 1
        await registry.aclose()

    @pytest.mark.asyncio
    async def test_idle_viewer_is_closed(self):
        clock = FakeClock()
        registry = _registry(clock, viewer_idle_timeout=60)
        idle = await registry.get("tab-idle")

        clock.now = 61
        await registry.get("tab-active")

        assert "tab-idle" not in registry
        assert idle.client.is_closed
        await registry.aclose()

    @pytest.mark.asyncio
    async def test_recent_use_keeps_viewer_alive(self):
        clock = FakeClock()
        registry = _registry(clock, viewer_idle_timeout=60)
        viewer = await registry.get("tab-1")

        clock.now = 50
        await registry.get("tab-1")
        clock.now = 100
        await registry.get("tab-2")

        assert "tab-1" in registry
        assert not viewer.client.is_closed
        await registry.aclose()

    @pytest.mark.asyncio
    async def test_least_recently_used_evicted_at_limit(self):
        clock = FakeClock()
        registry = _registry(clock, max_viewers=2)
        oldest = await registry.get("tab-1")
        await registry.get("tab-2")
        await registry.get("tab-1")

        await registry.get("tab-3")

        assert len(registry) == 2
        assert "tab-1" in registry
        assert "tab-2" not in registry
        assert not oldest.client.is_closed
        await registry.aclose()

    @pytest.mark.asyncio
    async def test_many_distinct_keys_stay_bounded(self):
        registry = _registry(FakeClock(), max_viewers=3)
        viewers = [await registry.get(f"tab-{i}") for i in range(10)]

        assert len(registry) == 3
        assert all(v.client.is_closed for v in viewers[:7])
        await registry.aclose()

    @pytest.mark.asyncio
    async def test_aclose_closes_every_client(self):
        registry = _registry(FakeClock())
        viewers = [await registry.get("tab-1"), await registry.get("tab-2")]

        await registry.aclose()

        assert len(registry) == 0
        assert all(v.client.is_closed for v in viewers)
