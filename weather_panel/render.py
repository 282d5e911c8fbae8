# ABOUTME: Presentation layer for the weather panel page.
# ABOUTME: Formats snapshot fields for display and renders controller state through the Jinja2 page template.

from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path

from pydantic import BaseModel
from starlette.templating import Jinja2Templates

from weather_panel.icons import DEFAULT_ICON, Icon, icon_for
from weather_panel.models import Notification, WeatherSnapshot

PAGE_TEMPLATE = "index.html"

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (23.5 -> 24, -0.5 -> -1)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_temperature(celsius: float) -> str:
    return f"{round_half_away(celsius)}°C"


def format_humidity(percent: int) -> str:
    return f"{percent}%"


def format_wind(kmh: float) -> str:
    return f"{round_half_away(kmh)} km/h"


def capitalize_description(text: str) -> str:
    """Upper-case the first character and leave the rest as the provider sent it."""
    return text[:1].upper() + text[1:]


class SnapshotView(BaseModel):
    """Display strings for one snapshot."""

    location: str
    icon: Icon
    temperature: str
    description: str
    feels_like: str
    humidity: str
    wind: str


def snapshot_view(snapshot: WeatherSnapshot) -> SnapshotView:
    return SnapshotView(
        location=snapshot.location,
        icon=icon_for(snapshot.condition_name),
        temperature=format_temperature(snapshot.temperature_c),
        description=capitalize_description(snapshot.description),
        feels_like=format_temperature(snapshot.feels_like_c),
        humidity=format_humidity(snapshot.humidity),
        wind=format_wind(snapshot.wind_kmh),
    )


def page_context(
    query: str,
    snapshot: WeatherSnapshot | None,
    loading: bool = False,
    notification: Notification | None = None,
) -> dict:
    """Template context for one controller state.

    The result panel shows only when a snapshot exists; the prompt shows when there is
    neither a snapshot nor a lookup in flight.
    """
    return {
        "query": query,
        "view": snapshot_view(snapshot) if snapshot is not None else None,
        "loading": loading,
        "notification": notification,
        "default_icon": DEFAULT_ICON,
    }


def render_page(
    query: str,
    snapshot: WeatherSnapshot | None,
    loading: bool = False,
    notification: Notification | None = None,
) -> str:
    """Render the page outside a request, e.g. for tests or static snapshots."""
    template = templates.get_template(PAGE_TEMPLATE)
    return template.render(page_context(query, snapshot, loading, notification))
