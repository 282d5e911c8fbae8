# ABOUTME: Dependency container for the weather panel using Pydantic BaseModel.
# ABOUTME: Holds the shared httpx.AsyncClient and the settings the fetcher is built from.

import httpx
from pydantic import BaseModel, ConfigDict

from weather_panel.config import Settings


class WeatherDeps(BaseModel):
    """Dependencies injected into the fetcher and the web app."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient
    settings: Settings


def create_http_client() -> httpx.AsyncClient:
    """Create the httpx client shared by every session.

    Requests go out once: no retry transport and httpx's default timeout.
    """
    return httpx.AsyncClient(headers={"Accept": "application/json"})
