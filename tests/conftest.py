# ABOUTME: Shared test fixtures for the weather panel test suite.
# ABOUTME: Provides settings, canned provider payloads and mock HTTP client helpers.

from unittest.mock import AsyncMock

import httpx
import pytest

from weather_panel.config import Settings
from weather_panel.deps import WeatherDeps

PARIS_PAYLOAD = {
    "name": "Paris",
    "main": {"temp": 18.2, "feels_like": 17.5, "humidity": 60},
    "weather": [{"main": "Clear", "description": "céu limpo", "icon": "01d"}],
    "wind": {"speed": 3.0},
}


def _make_response(json_data: dict | None = None, status_code: int = 200, content: bytes | None = None) -> httpx.Response:
    """Build a real httpx.Response bound to a dummy request."""
    request = httpx.Request("GET", "https://test")
    if content is not None:
        return httpx.Response(status_code=status_code, content=content, request=request)
    return httpx.Response(status_code=status_code, json=json_data, request=request)


def _mock_client(*responses: httpx.Response | Exception) -> AsyncMock:
    """Create a mock httpx.AsyncClient whose get() returns/raises the given items in order."""
    mock = AsyncMock(spec=httpx.AsyncClient)
    if len(responses) == 1 and isinstance(responses[0], httpx.Response):
        mock.get.return_value = responses[0]
    else:
        mock.get.side_effect = list(responses)
    return mock


@pytest.fixture
def make_response():
    """Factory fixture building provider responses: make_response(json, status_code=..., content=...)."""
    return _make_response


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-key", lang="pt_br")


@pytest.fixture
def paris_payload() -> dict:
    return {
        "name": PARIS_PAYLOAD["name"],
        "main": dict(PARIS_PAYLOAD["main"]),
        "weather": [dict(w) for w in PARIS_PAYLOAD["weather"]],
        "wind": dict(PARIS_PAYLOAD["wind"]),
    }


@pytest.fixture
def make_deps(settings):
    """Factory fixture returning WeatherDeps around a mock client."""

    def _make(*responses: httpx.Response | Exception) -> WeatherDeps:
        return WeatherDeps(http_client=_mock_client(*responses), settings=settings)

    return _make
