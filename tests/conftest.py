"""
Shared fixtures and fake fetchers.
"""

import asyncio

import pytest

from remoteconfig.services.config.accessors import RemoteConfig
from remoteconfig.services.config.defaults import build_default_table, load_defaults
from remoteconfig.services.config.store import ConfigStore


class FakeFetcher:
    """Returns (or raises) queued responses in order; {} when exhausted."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = 0

    async def fetch(self):
        self.calls += 1
        response = self.responses.pop(0) if self.responses else {}
        if isinstance(response, BaseException):
            raise response
        return dict(response)


class GatedFetcher:
    """Each call blocks on its own gate, so tests control completion order."""

    def __init__(self):
        self.gates: list[tuple[asyncio.Event, object]] = []
        self.started = 0

    def add(self, response) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates.append((gate, response))
        return gate

    async def fetch(self):
        gate, response = self.gates[self.started]
        self.started += 1
        await gate.wait()
        if isinstance(response, BaseException):
            raise response
        return dict(response)


@pytest.fixture
def small_defaults():
    return build_default_table({
        "discount_percentage": 0,
        "feature_flag_enabled": False,
        "welcome_message": "Hello",
        "ratio": 0.5,
    })


@pytest.fixture
def store(small_defaults) -> ConfigStore:
    return ConfigStore.initialize(small_defaults)


@pytest.fixture
def config(store) -> RemoteConfig:
    return RemoteConfig(store)


@pytest.fixture
def bundled_defaults():
    return load_defaults()
