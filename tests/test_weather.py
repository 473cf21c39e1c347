import pytest
import requests

from helpers import FakeResponse, FakeSession
from models import WeatherObservation, WeatherRisk
from services.geoscience import GeoscienceService
from services.weather import WeatherService, analyze_weather_impact


def _observation(**readings) -> WeatherObservation:
    return WeatherObservation(latitude=-33.7, longitude=150.3, **readings)


def _current(**overrides):
    current = {
        "temperature_2m": 38.0,
        "relative_humidity_2m": 12,
        "wind_speed_10m": 22.0,
        "precipitation": 0.0,
        "weather_code": 0,
    }
    current.update(overrides)
    return {"current": current}


@pytest.mark.parametrize(
    "disaster, readings, expected",
    [
        ("Wildfire", {"temperature_c": 38, "humidity_pct": 12, "wind_speed_kmh": 10}, WeatherRisk.HIGH),
        ("Wildfire", {"temperature_c": 20, "humidity_pct": 60, "wind_speed_kmh": 45}, WeatherRisk.HIGH),
        ("Wildfire", {"temperature_c": 31, "humidity_pct": 60, "wind_speed_kmh": 5}, WeatherRisk.MEDIUM),
        ("Wildfire", {"temperature_c": 18, "humidity_pct": 70, "wind_speed_kmh": 5}, WeatherRisk.LOW),
        ("Hurricane", {"wind_speed_kmh": 130}, WeatherRisk.HIGH),
        ("Hurricane", {"wind_speed_kmh": 70}, WeatherRisk.MEDIUM),
        ("Hurricane", {"wind_speed_kmh": 20}, WeatherRisk.LOW),
        ("Flood", {"precipitation_mm": 9.0}, WeatherRisk.HIGH),
        ("Flood", {"precipitation_mm": 3.0}, WeatherRisk.MEDIUM),
        ("Flood", {}, WeatherRisk.LOW),
        ("Landslide", {"precipitation_mm": 5.0}, WeatherRisk.HIGH),
        ("Landslide", {"precipitation_mm": 1.5}, WeatherRisk.MEDIUM),
        ("Earthquake", {"wind_speed_kmh": 70}, WeatherRisk.MEDIUM),
        ("Earthquake", {"precipitation_mm": 0.2}, WeatherRisk.LOW),
        ("Volcano", {"precipitation_mm": 50}, WeatherRisk.MINIMAL),
    ],
)
def test_analyze_weather_impact(disaster, readings, expected):
    assert analyze_weather_impact(_observation(**readings), disaster).risk_level == expected


def test_get_weather_parses_current_conditions():
    session = FakeSession([FakeResponse(_current(weather_code=95))])
    service = WeatherService("https://weather.test/", timeout=3, session=session)

    observation = service.get_weather(-33.7, 150.3)

    assert observation.temperature_c == 38.0
    assert observation.humidity_pct == 12
    assert observation.conditions == "Thunderstorm"
    assert session.requests[0]["url"] == "https://weather.test/v1/forecast"
    assert session.requests[0]["params"]["latitude"] == -33.7
    assert session.requests[0]["timeout"] == 3


def test_classify_combines_lookup_and_analysis():
    service = WeatherService("https://weather.test", session=FakeSession([FakeResponse(_current())]))

    impact = service.classify(-33.7, 150.3, "Wildfire")

    assert impact.risk_level == WeatherRisk.HIGH
    assert impact.details.startswith("Clear sky.")


@pytest.mark.parametrize(
    "response",
    [
        requests.ConnectionError("unreachable"),
        FakeResponse({"error": True}, status_code=500),
        FakeResponse({"hourly": {}}),
        FakeResponse(ValueError("not json")),
        FakeResponse({"current": {"temperature_2m": "n/a"}}),
        FakeResponse({"current": []}),
    ],
)
def test_weather_unavailable_returns_none(response):
    service = WeatherService("https://weather.test", session=FakeSession([response]))

    assert service.get_weather(0.0, 0.0) is None


def test_classify_unavailable_returns_none():
    service = WeatherService("https://weather.test", session=FakeSession([requests.Timeout("slow")]))

    assert service.classify(0.0, 0.0, "Flood") is None


def test_geocoder_resolves_first_hit():
    session = FakeSession([FakeResponse([{"lat": "-33.8688", "lon": "151.2093"}, {"lat": "0", "lon": "0"}])])
    service = GeoscienceService("https://geo.test", user_agent="tests", session=session)

    assert service.get_coordinates("Sydney NSW") == (-33.8688, 151.2093)
    assert session.headers["User-Agent"] == "tests"
    assert session.requests[0]["params"]["q"] == "Sydney NSW"
    assert service.get_status_update().endswith("Last lookup: Sydney NSW")


@pytest.mark.parametrize(
    "response",
    [FakeResponse([]), FakeResponse([{"lat": "north"}]), requests.ConnectionError("down")],
)
def test_geocoder_failures_return_none(response):
    service = GeoscienceService("https://geo.test", session=FakeSession([response]))

    assert service.get_coordinates("Nowhere") is None
    assert service.get_status_update() == "Geoscience is ready to provide location data."


def test_geocoder_skips_blank_location():
    session = FakeSession([])
    service = GeoscienceService("https://geo.test", session=session)

    assert service.get_coordinates("   ") is None
    assert session.requests == []
