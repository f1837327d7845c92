"""Console front end: fetch current weather for a city and print a summary."""
import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from config import Settings
from weather_data import WeatherData
from weather_service import WeatherClient

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_LOG_FILE = os.path.join(BASE_DIR, "city-weather.log")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("Current weather for a city")
    parser.add_argument("city", nargs="+", help="City name, e.g. Paris or 'New York'")
    parser.add_argument("--log-file", default=DEFAULT_LOG_FILE)
    parser.add_argument("--timeout", type=float, default=10.0, help="HTTP timeout in seconds")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: str, verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_file)
        ]
    )


def format_weather_lines(weather: WeatherData, icon_url: str = ""):
    header = f"{weather.city_name}, {weather.country}: {weather.temperature:+d}°C {weather.condition}"
    details = (
        f"{weather.description}, feels {weather.feels_like:+d}°C "
        f"(min {weather.temp_min:+d}° / max {weather.temp_max:+d}°)"
    )
    info = (
        f"Hum {weather.humidity}%  Wind {weather.wind_speed:.1f}m/s  "
        f"Pressure {weather.pressure}hPa  Visibility {weather.visibility}"
        f"{'' if weather.visibility == 'N/A' else 'km'}"
    )
    lines = [header, details, info]
    if icon_url:
        lines.append(f"Icon {icon_url}")
    return lines


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    settings = Settings.from_env()

    client = WeatherClient(
        api_key=settings.api_key,
        base_url=settings.base_url,
        lang=settings.lang,
        timeout=args.timeout,
    )

    if not client.fetch_weather(" ".join(args.city)):
        print(client.error, file=sys.stderr)
        return 1

    weather = client.weather
    for line in format_weather_lines(weather, client.get_icon_url(weather.icon)):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
