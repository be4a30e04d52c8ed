"""Pytest fixtures for the proxy app and its collaborators."""

import pytest
from fastapi.testclient import TestClient

from ygl_proxy.api.main import create_app
from ygl_proxy.database.memory_cache import ResponseCache
from ygl_proxy.integrations.clients.real_http.ygl import UpstreamResponse
from ygl_proxy.utils.config_loader import Settings

RENTALS_XML = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    '<YGLResponse responseCode="300">'
    "<Total>2</Total>"
    "<Listings>"
    "<Listing><ID>101</ID><City>Boston</City><Price>2450</Price></Listing>"
    "<Listing><ID>102</ID><City>Cambridge</City><Price>3100</Price></Listing>"
    "</Listings>"
    "</YGLResponse>"
)


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeYGLClient:
    """Stands in for YGLClient; records every form it is asked to post."""

    def __init__(self, response=None, error=None):
        self.calls = []
        self.response = response or UpstreamResponse(200, "text/xml; charset=utf-8", RENTALS_XML)
        self.error = error

    async def post_form(self, path, form):
        self.calls.append((path, dict(form)))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings(tmp_path):
    return Settings(env="test", ygl_api_key="test-key", static_dir=str(tmp_path / "no-static"))


@pytest.fixture
def cache(clock):
    return ResponseCache(default_ttl=120, clock=clock)


@pytest.fixture
def ygl():
    return FakeYGLClient()


@pytest.fixture
def client(settings, cache, ygl):
    app = create_app(settings=settings, cache=cache, ygl_client=ygl)
    return TestClient(app)
