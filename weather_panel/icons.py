# ABOUTME: Maps provider condition names onto display icons and condition categories.
# ABOUTME: Both lookups are case-insensitive and total: unknown conditions fall back to a default.

from typing import NamedTuple

from weather_panel.models import ConditionCategory


class Icon(NamedTuple):
    """Display handle for a condition icon."""

    name: str
    glyph: str
    tone: str
    label: str


SUN = Icon("sun", "☀️", "tone-accent", "Céu limpo")
CLOUD = Icon("cloud", "☁️", "tone-muted", "Nublado")
CLOUD_RAIN = Icon("cloud-rain", "\U0001f327️", "tone-primary", "Chuva")
CLOUD_SNOW = Icon("cloud-snow", "❄️", "tone-secondary", "Neve")
CLOUD_DRIZZLE = Icon("cloud-drizzle", "\U0001f326️", "tone-primary", "Garoa")

DEFAULT_ICON = CLOUD

_ICONS = {
    "clear": SUN,
    "clouds": CLOUD,
    "rain": CLOUD_RAIN,
    "snow": CLOUD_SNOW,
    "drizzle": CLOUD_DRIZZLE,
}

_CATEGORIES = {category.value.lower(): category for category in ConditionCategory}


def _key(condition: str | ConditionCategory) -> str:
    if isinstance(condition, ConditionCategory):
        condition = condition.value
    return condition.strip().lower()


def icon_for(condition: str | ConditionCategory) -> Icon:
    """Return the icon for a condition name, or the default cloud icon when unmapped."""
    return _ICONS.get(_key(condition), DEFAULT_ICON)


def condition_category(condition: str) -> ConditionCategory:
    """Normalize a provider condition name (e.g. "rain", "Thunderstorm") into a ConditionCategory."""
    return _CATEGORIES.get(_key(condition), ConditionCategory.OTHER)
