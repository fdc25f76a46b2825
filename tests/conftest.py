# tests/conftest.py

import asyncio

import pytest

from kelasguru.config import ClientSettings
from kelasguru.core.cache import TTLCache
from kelasguru.core.models import ApiResult


class FakeClient:
    """ApiClient с заранее заданными ответами по имени действия"""

    def __init__(self, settings, responses=None):
        self.settings = settings
        self.responses = dict(responses or {})
        self.calls = []

    async def call(self, action, params=None):
        params = params or {}
        self.calls.append((action, params))
        response = self.responses.get(action)
        if response is None:
            return ApiResult.fail(f"Unknown action: {action}")
        if asyncio.iscoroutinefunction(response):
            response = await response(params)
        elif callable(response):
            response = response(params)
        if isinstance(response, Exception):
            raise response
        return response

    def actions(self):
        return [action for action, _ in self.calls]

    def count(self, action):
        return self.actions().count(action)


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def settings(tmp_path):
    return ClientSettings(
        ENVIRONMENT="testing",
        API_URL="https://backend.test/exec",
        SESSION_FILE=tmp_path / "session.json",
        LOG_TO_FILE=False,
    )


@pytest.fixture
def fake_client(settings):
    return FakeClient(settings)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def badge_cache(clock):
    return TTLCache(ttl_seconds=60, clock=clock)


def ok(data=None, **extra):
    return ApiResult.succeed(data, **extra)


def fail(error="Backend error"):
    return ApiResult.fail(error)
