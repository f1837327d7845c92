"""OpenWeather Current Weather API provider implementation."""
import json
import logging
import threading
import time
from concurrent.futures import Future, TimeoutError as FuturesTimeoutError
import requests
from typing import Optional, Tuple
from weather_provider import (
    HttpStatusError,
    NetworkError,
    RequestTimeoutError,
    WeatherProviderBase,
    WeatherProviderError,
)
from weather_data import WeatherData, format_visibility, round_half_up


STATUS_MESSAGES = {
    404: "City not found. Please check the spelling and try again.",
    401: "Invalid API key. Please check your configuration.",
    429: "Too many requests. Please wait a moment and try again.",
    500: "Weather service is temporarily unavailable.",
    503: "Weather service is temporarily unavailable.",
}
DEFAULT_STATUS_MESSAGE = "Failed to fetch weather data."
TIMEOUT_MESSAGE = "Request timed out. Please check your connection and try again."
NETWORK_MESSAGE = "Network error. Please check your internet connection."
CHUNK_SIZE = 8192


class OpenWeatherProvider(WeatherProviderBase):
    """
    Weather provider using OpenWeather Current Weather API.

    Looks weather up by city name: https://openweathermap.org/current#name
    """

    BASE_URL = "https://api.openweathermap.org/data/2.5/weather"

    def __init__(
        self,
        api_key: Optional[str],
        base_url: Optional[str] = None,
        units: str = "metric",
        lang: Optional[str] = None,
        timeout: float = 10
    ):
        """
        Initialize OpenWeather provider.

        Args:
            api_key: OpenWeather API key
            base_url: Endpoint override (e.g. a mock server); defaults to BASE_URL
            units: Temperature units ("metric", "imperial", or "standard")
            lang: Optional language code for descriptions (e.g., "en", "de")
            timeout: HTTP request timeout in seconds
        """
        self.api_key = api_key
        self.base_url = base_url or self.BASE_URL
        self.units = units
        self.lang = lang
        self.timeout = timeout

    def get_current(self, city_name: str) -> WeatherData:
        """
        Fetch current weather for a city from OpenWeather Current Weather API.

        Returns:
            WeatherData: Normalized current weather

        Raises:
            HttpStatusError: Non-success HTTP status
            RequestTimeoutError: No response within the timeout
            NetworkError: Connection could not be made
            WeatherProviderError: Any other request or parse failure
        """
        params = {
            "q": city_name,
            "appid": self.api_key,
            "units": self.units,
        }
        if self.lang:
            params["lang"] = self.lang

        deadline = time.monotonic() + self.timeout
        future: Future = Future()
        worker = threading.Thread(
            target=self._run_request,
            args=(future, params, deadline),
            name="openweather-request",
            daemon=True,
        )

        try:
            logging.info(f"Making OpenWeather API request: {self.base_url}")
            logging.debug(f"Request parameters: q={city_name!r}, units={self.units}, lang={self.lang}")

            worker.start()
            response, body = future.result(timeout=self.timeout)

        # Total deadline; the abandoned worker stops at its own deadline check
        except FuturesTimeoutError as e:
            logging.error(f"API request did not complete within {self.timeout}s")
            raise RequestTimeoutError(TIMEOUT_MESSAGE) from e
        # ConnectTimeout is both a Timeout and a ConnectionError; report it as a timeout
        except requests.exceptions.Timeout as e:
            logging.error(f"API request timed out after {self.timeout}s: {e}")
            raise RequestTimeoutError(TIMEOUT_MESSAGE) from e
        except requests.exceptions.ConnectionError as e:
            logging.error(f"Network error during API request: {e}")
            raise NetworkError(NETWORK_MESSAGE) from e
        except requests.exceptions.RequestException as e:
            logging.error(f"API request failed: {e}")
            raise WeatherProviderError(str(e)) from e

        logging.info(f"API response status: {response.status_code}")

        if not response.ok:
            logging.error(f"API request failed with status {response.status_code}")
            self._handle_error_response(response.status_code, body)

        try:
            data = json.loads(body)
            logging.debug(f"API response (truncated): {str(data)[:500]}...")
            weather_data = self._parse(data)
        except (KeyError, IndexError, ValueError, TypeError) as e:
            logging.error(f"Failed to parse API response: {e!r}", exc_info=True)
            raise WeatherProviderError(f"Failed to parse response: {e!r}") from e

        logging.info(
            f"Successfully parsed weather data: {weather_data.city_name} "
            f"{weather_data.temperature}°C, {weather_data.condition}"
        )
        return weather_data

    def _run_request(self, future: Future, params: dict, deadline: float) -> None:
        try:
            future.set_result(self._request(params, deadline))
        except Exception as e:
            future.set_exception(e)

    def _request(self, params: dict, deadline: float) -> Tuple[requests.Response, bytes]:
        """Send the request and read the body, giving up once the deadline passes."""
        response = requests.get(self.base_url, params=params, timeout=self.timeout, stream=True)
        try:
            chunks = []
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if time.monotonic() > deadline:
                    raise RequestTimeoutError(TIMEOUT_MESSAGE)
                chunks.append(chunk)
            return response, b"".join(chunks)
        finally:
            response.close()

    @staticmethod
    def _parse(data: dict) -> WeatherData:
        main_data = data["main"]
        weather = data["weather"][0]
        return WeatherData(
            city_name=data["name"],
            country=data["sys"]["country"],
            temperature=round_half_up(main_data["temp"]),
            feels_like=round_half_up(main_data["feels_like"]),
            temp_min=round_half_up(main_data["temp_min"]),
            temp_max=round_half_up(main_data["temp_max"]),
            condition=weather["main"],
            description=weather["description"],
            icon=weather["icon"],
            humidity=main_data["humidity"],
            wind_speed=data["wind"]["speed"],
            pressure=main_data["pressure"],
            visibility=format_visibility(data.get("visibility")),
        )

    def _handle_error_response(self, status_code: int, body: bytes) -> None:
        """Map an error status to a user-facing message and raise it."""
        try:
            logging.error(f"OpenWeather API error response: {json.loads(body)}")
        except ValueError:
            logging.error(
                f"Non-JSON error response: HTTP {status_code}, "
                f"body: {body[:500].decode('utf-8', errors='replace')}"
            )

        message = STATUS_MESSAGES.get(status_code, DEFAULT_STATUS_MESSAGE)
        raise HttpStatusError(message, status_code)
