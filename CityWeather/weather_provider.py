"""Weather provider abstraction - allows swapping different weather APIs."""
from abc import ABC, abstractmethod
from typing import Optional

from weather_data import WeatherData


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{code}@4x.png"

    @abstractmethod
    def get_current(self, city_name: str) -> WeatherData:
        """
        Fetch current weather data for a city.

        Returns:
            WeatherData: Current weather information

        Raises:
            WeatherProviderError: If the provider fails to fetch data
        """
        pass

    def icon_url(self, icon_code: Optional[str]) -> str:
        """Build the icon image URL for a condition icon code ("" if none)."""
        if not icon_code:
            return ""
        return self.ICON_URL_TEMPLATE.format(code=icon_code)


class WeatherProviderError(Exception):
    """Exception raised when a weather provider fails.

    The message is meant to be shown to the user as-is.
    """
    pass


class InputError(WeatherProviderError):
    """Missing or blank city name."""


class ConfigError(WeatherProviderError):
    """API key missing or still set to the placeholder."""


class HttpStatusError(WeatherProviderError):
    """Non-success HTTP response from the weather API."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class RequestTimeoutError(WeatherProviderError):
    """Request did not complete within the timeout."""


class NetworkError(WeatherProviderError):
    """Transport-level failure (DNS, refused connection, dropped link)."""
