"""Tests for weather_data module."""
import pytest
from weather_data import WeatherData, WeatherState, format_visibility, round_half_up


def test_weather_data_creation():
    """Test creating WeatherData with all fields."""
    weather = WeatherData(
        city_name="Paris",
        country="FR",
        temperature=21,
        feels_like=20,
        temp_min=18,
        temp_max=22,
        condition="Clear",
        description="clear sky",
        icon="01d",
        humidity=60,
        wind_speed=3.5,
        pressure=1012,
        visibility="10.0"
    )

    assert weather.city_name == "Paris"
    assert weather.temperature == 21
    assert weather.condition == "Clear"
    assert weather.visibility == "10.0"


def test_weather_state_defaults():
    """A fresh state has no data, no error and is not loading."""
    state = WeatherState()
    assert state.weather is None
    assert state.loading is False
    assert state.error == ""


@pytest.mark.parametrize("value,expected", [
    (20.6, 21),
    (19.9, 20),
    (20.5, 21),
    (20.4, 20),
    (-2.5, -2),
    (-2.6, -3),
    (0.0, 0),
])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_format_visibility():
    assert format_visibility(10000) == "10.0"
    assert format_visibility(1500) == "1.5"
    assert format_visibility(9990) == "10.0"
    assert format_visibility(None) == "N/A"
    assert format_visibility(0) == "N/A"
