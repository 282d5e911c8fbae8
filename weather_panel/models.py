# ABOUTME: Pydantic BaseModels for the provider payload, weather snapshots and UI state.
# ABOUTME: Defines the structured types that flow from the fetcher through the controller to the view.

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

MS_TO_KMH = 3.6


class ConditionCategory(str, Enum):
    """Primary condition groups the UI distinguishes."""

    CLEAR = "Clear"
    CLOUDS = "Clouds"
    RAIN = "Rain"
    SNOW = "Snow"
    DRIZZLE = "Drizzle"
    OTHER = "Other"


class MainReading(BaseModel):
    """The ``main`` block of a current weather response."""

    model_config = ConfigDict(allow_inf_nan=False)

    temp: float
    feels_like: float
    humidity: int = Field(ge=0, le=100)


class ConditionReading(BaseModel):
    """One entry of the ``weather`` list."""

    main: str
    description: str
    icon: str | None = None


class WindReading(BaseModel):
    """The ``wind`` block; speed is in m/s with metric units."""

    model_config = ConfigDict(allow_inf_nan=False)

    speed: float = Field(ge=0)


class CurrentWeatherPayload(BaseModel):
    """Subset of the OpenWeatherMap current weather response read by the app."""

    name: str
    main: MainReading
    weather: list[ConditionReading] = Field(min_length=1)
    wind: WindReading


class WeatherSnapshot(BaseModel):
    """One immutable weather reading for a single location."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    location: str
    temperature_c: float
    feels_like_c: float
    humidity: int = Field(ge=0, le=100)
    wind_kmh: float
    condition: ConditionCategory
    condition_name: str
    description: str
    icon_code: str | None = None


class Idle(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["idle"] = "idle"


class Loading(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["loading"] = "loading"
    query: str


class Success(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["success"] = "success"
    snapshot: WeatherSnapshot


class Failed(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["failed"] = "failed"
    reason: str


RequestState = Idle | Loading | Success | Failed


class Notification(BaseModel):
    """Transient, dismissible message surfaced to the user."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    variant: Literal["default", "destructive"] = "destructive"
