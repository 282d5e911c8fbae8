# ABOUTME: Service layer for OpenWeatherMap current weather calls and response parsing.
# ABOUTME: Validates the city query, issues a single GET and maps the JSON onto a WeatherSnapshot.

import logging

import httpx
from pydantic import ValidationError

from weather_panel.deps import WeatherDeps
from weather_panel.errors import FetchError, FetchErrorKind, ParseError, QueryValidationError
from weather_panel.icons import condition_category
from weather_panel.models import MS_TO_KMH, CurrentWeatherPayload, WeatherSnapshot

logger = logging.getLogger(__name__)

UNITS = "metric"


def normalize_query(raw: str | None) -> str:
    """Trim a raw city query, rejecting empty or whitespace-only input."""
    query = (raw or "").strip()
    if not query:
        raise QueryValidationError("City name is empty")
    return query


def parse_current_weather(data: object) -> WeatherSnapshot:
    """Parse a current weather JSON body into a WeatherSnapshot.

    Raises ParseError when any of the fields the panel displays is missing, ill-typed
    or not a finite number (NaN and Infinity are accepted by the JSON decoder).
    """
    try:
        payload = CurrentWeatherPayload.model_validate(data)
        condition = payload.weather[0]
        return WeatherSnapshot(
            location=payload.name,
            temperature_c=payload.main.temp,
            feels_like_c=payload.main.feels_like,
            humidity=payload.main.humidity,
            wind_kmh=payload.wind.speed * MS_TO_KMH,
            condition=condition_category(condition.main),
            condition_name=condition.main,
            description=condition.description,
            icon_code=condition.icon,
        )
    except ValidationError as e:
        raise ParseError(f"Unexpected current weather payload: {e.error_count()} invalid field(s)") from e


def _provider_message(resp: httpx.Response) -> str | None:
    """Extract the provider's ``message`` field from an error body, if any."""
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return None


class WeatherFetcher:
    """Looks up current weather for a city using injected client and settings."""

    def __init__(self, deps: WeatherDeps):
        self.client = deps.http_client
        self.settings = deps.settings

    def build_params(self, query: str) -> dict[str, str]:
        return {
            "q": query,
            "appid": self.settings.api_key,
            "units": UNITS,
            "lang": self.settings.lang,
        }

    async def fetch(self, query: str) -> WeatherSnapshot:
        """Fetch and parse the current weather for ``query``.

        Raises QueryValidationError for a blank query, FetchError for transport failures
        and non-success statuses, and ParseError for malformed success bodies.
        """
        query = normalize_query(query)
        logger.debug("Requesting current weather for %r", query)
        try:
            resp = await self.client.get(self.settings.endpoint, params=self.build_params(query))
        except httpx.TransportError as e:
            logger.warning("Weather provider unreachable for %r: %s", query, e)
            raise FetchError(FetchErrorKind.NETWORK_ERROR, f"Weather provider unreachable: {e}") from e

        if not resp.is_success:
            kind = FetchErrorKind.NOT_FOUND if resp.status_code == 404 else FetchErrorKind.PROVIDER_ERROR
            detail = _provider_message(resp) or resp.reason_phrase
            logger.warning("Weather lookup for %r failed with %s (%s): %s", query, resp.status_code, kind.value, detail)
            raise FetchError(kind, f"Weather provider returned {resp.status_code}: {detail}", resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            logger.warning("Weather provider sent a non-JSON body for %r", query)
            raise ParseError("Weather provider response is not valid JSON") from e

        try:
            return parse_current_weather(data)
        except ParseError:
            logger.warning("Weather provider sent an unexpected payload for %r", query)
            raise
