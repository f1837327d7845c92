"""Environment-driven configuration for the weather client."""
import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

PLACEHOLDER_API_KEY = "your_api_key_here"


def is_api_key_configured(api_key: Optional[str]) -> bool:
    """False for a missing key or the placeholder copied from .env.example."""
    return bool(api_key) and api_key != PLACEHOLDER_API_KEY


@dataclass
class Settings:
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    lang: Optional[str] = None

    @staticmethod
    def from_env() -> "Settings":
        """Read settings from the environment, loading a .env file if present.

        A missing API key is not an error here; WeatherClient reports it on use.
        """
        load_dotenv()
        settings = Settings(
            api_key=os.getenv("OPENWEATHER_API_KEY"),
            base_url=os.getenv("OPENWEATHER_BASE_URL") or None,
            lang=os.getenv("OPENWEATHER_LANG") or None,
        )
        logging.info(
            "Configuration loaded: base_url=%s lang=%s api_key_configured=%s",
            settings.base_url or "default",
            settings.lang,
            is_api_key_configured(settings.api_key),
        )
        return settings
