"""Weather client exposing observable fetch state to a user interface."""
import logging
from typing import Callable, List, Optional

from config import is_api_key_configured
from openweather_provider import OpenWeatherProvider
from weather_data import WeatherData, WeatherState
from weather_provider import ConfigError, InputError, WeatherProviderBase, WeatherProviderError

EMPTY_CITY_MESSAGE = "Please enter a city name"
MISSING_KEY_MESSAGE = "API key is not configured. Please check your environment setup."

StateListener = Callable[[WeatherState], None]

_UNSET = object()


class WeatherClient:
    """
    Fetches current weather for a city and keeps the result as observable state.

    ``weather``, ``loading`` and ``error`` are read-only; they change only
    through fetch_weather() and clear_weather(). Listeners registered with
    subscribe() receive a WeatherState snapshot after every change.

    Failures never propagate: fetch_weather() returns False and ``error``
    holds a message suitable for display.
    """

    def __init__(
        self,
        api_key: Optional[str],
        provider: Optional[WeatherProviderBase] = None,
        base_url: Optional[str] = None,
        lang: Optional[str] = None,
        timeout: float = 10
    ):
        """
        Initialize weather client.

        Args:
            api_key: OpenWeather API key
            provider: Provider to use; defaults to an OpenWeatherProvider
            base_url: Endpoint override for the default provider
            lang: Description language for the default provider
            timeout: HTTP timeout in seconds for the default provider
        """
        self.api_key = api_key
        self.provider = provider or OpenWeatherProvider(
            api_key=api_key,
            base_url=base_url,
            lang=lang,
            timeout=timeout,
        )

        self._weather: Optional[WeatherData] = None
        self._loading = False
        self._error = ""
        self._listeners: List[StateListener] = []

        if not is_api_key_configured(api_key):
            logging.error(
                "OpenWeatherMap API key is not configured. "
                "Please set OPENWEATHER_API_KEY in your .env file."
            )

    @property
    def weather(self) -> Optional[WeatherData]:
        return self._weather

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> str:
        return self._error

    @property
    def state(self) -> WeatherState:
        return WeatherState(weather=self._weather, loading=self._loading, error=self._error)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener for state changes; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def fetch_weather(self, city_name: Optional[str]) -> bool:
        """
        Fetch current weather for a city.

        Returns:
            True if ``weather`` now holds fresh data, False otherwise
            (``error`` explains why).
        """
        city = (city_name or "").strip()

        try:
            if not city:
                raise InputError(EMPTY_CITY_MESSAGE)
            if not is_api_key_configured(self.api_key):
                raise ConfigError(MISSING_KEY_MESSAGE)
        except WeatherProviderError as err:
            logging.warning(f"Weather fetch rejected: {err}")
            self._update(error=str(err))
            return False

        self._update(loading=True, error="", weather=None)
        try:
            logging.info(f"Fetching weather for {city!r}")
            weather = self.provider.get_current(city)
            self._update(weather=weather)
            return True
        except WeatherProviderError as err:
            logging.error(f"Weather fetch failed for {city!r}: {err}")
            self._update(error=str(err))
            return False
        except Exception as exc:
            logging.exception(f"Unexpected error fetching weather for {city!r}: {exc}")
            self._update(error=str(exc))
            return False
        finally:
            self._update(loading=False)

    def clear_weather(self) -> None:
        """Drop the current result and error; ``loading`` is left alone."""
        self._update(weather=None, error="")

    def get_icon_url(self, icon_code: Optional[str]) -> str:
        return self.provider.icon_url(icon_code)

    def _update(self, weather=_UNSET, loading=_UNSET, error=_UNSET) -> None:
        if weather is not _UNSET:
            self._weather = weather
        if loading is not _UNSET:
            self._loading = loading
        if error is not _UNSET:
            self._error = error

        snapshot = self.state
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logging.exception("Weather state listener failed")
