# ABOUTME: Runtime settings for the weather panel, read from the environment.
# ABOUTME: Uses python-dotenv to pick up a local .env file and pydantic to validate values.

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from weather_panel.errors import ConfigurationError

DEFAULT_ENDPOINT = "https://api.openweathermap.org/data/2.5/weather"


class Settings(BaseModel):
    """Validated configuration injected into the fetcher and the web app."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(min_length=1, repr=False)
    endpoint: str = DEFAULT_ENDPOINT
    lang: str = "pt_br"
    max_sessions: int = Field(default=1000, ge=1)
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
    log_level: str = "INFO"


def load_settings(env: dict[str, str] | None = None) -> Settings:
    """Build Settings from environment variables.

    When ``env`` is omitted, a ``.env`` file is loaded into ``os.environ`` first.
    Raises ConfigurationError when the API key is missing or a value does not validate.
    """
    if env is None:
        load_dotenv()
        env = dict(os.environ)

    api_key = env.get("OPENWEATHER_API_KEY", "").strip()
    if not api_key:
        raise ConfigurationError("OPENWEATHER_API_KEY is not set")

    values = {
        "api_key": api_key,
        "endpoint": env.get("WEATHER_ENDPOINT"),
        "lang": env.get("WEATHER_LANG"),
        "max_sessions": env.get("WEATHER_MAX_SESSIONS"),
        "host": env.get("WEATHER_HOST"),
        "port": env.get("WEATHER_PORT"),
        "log_level": env.get("LOG_LEVEL"),
    }
    try:
        return Settings(**{k: v for k, v in values.items() if v})
    except ValidationError as e:
        raise ConfigurationError(f"Invalid weather panel settings: {e}") from e
