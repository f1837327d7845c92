"""Weather domain model - pure data structures independent of any API."""
import math
from dataclasses import dataclass
from typing import Optional


@dataclass
class WeatherData:
    """Normalized current weather for a single city."""
    city_name: str
    country: str
    temperature: int  # °C, rounded
    feels_like: int
    temp_min: int
    temp_max: int
    condition: str  # e.g., "Clouds", "Rain", "Clear"
    description: str  # e.g., "broken clouds", "light rain"
    icon: str  # e.g., "04d"
    humidity: float  # percentage
    wind_speed: float  # m/s
    pressure: float  # hPa
    visibility: str  # km with one decimal, or "N/A"


@dataclass(frozen=True)
class WeatherState:
    """Snapshot of a WeatherClient's observable state."""
    weather: Optional[WeatherData] = None
    loading: bool = False
    error: str = ""


def round_half_up(value: float) -> int:
    """Round to the nearest integer; halves go toward positive infinity."""
    return int(math.floor(value + 0.5))


def format_visibility(meters: Optional[float]) -> str:
    """Convert visibility in meters to kilometres, or "N/A" when not reported."""
    if not meters:
        return "N/A"
    return f"{meters / 1000:.1f}"
