"""
Unit tests for the fetch-and-activate operation.
"""

import asyncio

import pytest

from remoteconfig.common.exceptions import FetchError, FetchErrorKind
from remoteconfig.services.config.service import FetchStatus, RemoteConfigService

from conftest import FakeFetcher, GatedFetcher


class TestFetchAndActivate:
    @pytest.mark.asyncio
    async def test_partial_update_scenario(self, store, config) -> None:
        service = RemoteConfigService(store, FakeFetcher({"discount_percentage": 25}))

        result = await service.fetch_and_activate()

        assert result.ok
        assert result.activated is True
        assert config.get_integer("discount_percentage") == 25
        assert config.get_boolean("feature_flag_enabled") is False
        assert service.info.status is FetchStatus.SUCCEEDED
        assert service.info.activation_count == 1

    @pytest.mark.asyncio
    async def test_identical_values_are_not_activated(self, store) -> None:
        service = RemoteConfigService(store, FakeFetcher({"discount_percentage": 0, "welcome_message": "Hello"}))

        result = await service.fetch_and_activate()

        assert result.ok
        assert result.activated is False
        assert store.generation == 0

    @pytest.mark.asyncio
    async def test_second_identical_fetch_is_a_noop(self, store) -> None:
        service = RemoteConfigService(store, FakeFetcher({"discount_percentage": 5}, {"discount_percentage": 5}))

        first = await service.fetch_and_activate()
        snapshot = store.snapshot()
        second = await service.fetch_and_activate()

        assert first.activated and not second.activated
        assert store.snapshot() is snapshot

    @pytest.mark.asyncio
    @pytest.mark.parametrize("kind", list(FetchErrorKind))
    async def test_failure_leaves_store_untouched(self, store, kind) -> None:
        before = dict(store.snapshot())
        service = RemoteConfigService(store, FakeFetcher(FetchError(kind, "nope")))

        result = await service.fetch_and_activate()

        assert not result.ok
        assert result.activated is False
        assert result.error.kind is kind
        assert dict(store.snapshot()) == before
        assert store.generation == 0
        assert service.info.status is FetchStatus.FAILED
        assert service.info.last_error is result.error

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_contained(self, store) -> None:
        service = RemoteConfigService(store, FakeFetcher(RuntimeError("socket exploded")))

        result = await service.fetch_and_activate()

        assert result.error.kind is FetchErrorKind.NETWORK
        assert service.in_flight == 0

    @pytest.mark.asyncio
    async def test_invalid_value_types_are_parse_errors(self, store) -> None:
        service = RemoteConfigService(store, FakeFetcher({"discount_percentage": [25]}))

        result = await service.fetch_and_activate()

        assert result.error.kind is FetchErrorKind.PARSE
        assert store.get("discount_percentage") == 0

    @pytest.mark.asyncio
    async def test_recovers_after_failure(self, store, config) -> None:
        service = RemoteConfigService(
            store,
            FakeFetcher(FetchError(FetchErrorKind.THROTTLED, "slow down"), {"discount_percentage": 10}),
        )

        failed = await service.fetch_and_activate()
        succeeded = await service.fetch_and_activate()

        assert not failed.ok
        assert succeeded.activated
        assert config.get_integer("discount_percentage") == 10
        assert service.info.last_error is None
        assert service.info.last_success_at is not None


class TestConcurrentFetches:
    @pytest.mark.asyncio
    async def test_last_completion_wins(self, config) -> None:
        config.store.replace_all({"x": 0})
        fetcher = GatedFetcher()
        gate_a = fetcher.add({"x": 1})
        gate_b = fetcher.add({"x": 2})
        service = RemoteConfigService(config.store, fetcher)

        task_a = asyncio.create_task(service.fetch_and_activate())
        task_b = asyncio.create_task(service.fetch_and_activate())
        await asyncio.sleep(0)
        assert service.in_flight == 2

        gate_a.set()
        result_a = await task_a
        assert service.info.status is FetchStatus.IN_PROGRESS

        gate_b.set()
        result_b = await task_b

        assert result_a.activated and result_b.activated
        assert config.get_integer("x") == 2
        assert service.info.status is FetchStatus.SUCCEEDED

    @pytest.mark.asyncio
    async def test_stale_completion_overwrites_newer_result(self, config) -> None:
        fetcher = GatedFetcher()
        gate_old = fetcher.add({"x": 1})
        gate_new = fetcher.add({"x": 2})
        service = RemoteConfigService(config.store, fetcher)

        old = asyncio.create_task(service.fetch_and_activate())
        new = asyncio.create_task(service.fetch_and_activate())
        await asyncio.sleep(0)

        gate_new.set()
        await new
        gate_old.set()
        await old

        assert config.get_integer("x") == 1
