from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from models import Report, WeatherImpact, WeatherObservation, WeatherRisk

NOW = datetime(2024, 9, 15, 12, 0, 0)


def hours_ago(hours: float, now: datetime = NOW) -> str:
    return (now - timedelta(hours=hours)).strftime("%Y-%m-%d %H:%M:%S")


def impact(risk: WeatherRisk) -> WeatherImpact:
    return WeatherImpact(risk_level=risk, details=f"{risk.value} test conditions")


def make_report(**overrides) -> Report:
    values = {
        "id": 1,
        "disaster_type": "Wildfire",
        "location": "Blue Mountains",
        "latitude": -33.7,
        "longitude": 150.3,
        "date_time": hours_ago(2),
    }
    values.update(overrides)
    return Report(**values)


class FakeWeather:
    def __init__(self, impact: Optional[WeatherImpact] = None):
        self.impact = impact
        self.calls: List[Tuple[float, float, Optional[str]]] = []

    def get_weather(self, latitude: float, longitude: float) -> Optional[WeatherObservation]:
        if self.impact is None:
            return None
        return WeatherObservation(latitude=latitude, longitude=longitude, temperature_c=20.0)

    def classify(self, latitude: float, longitude: float, disaster_type: Optional[str]) -> Optional[WeatherImpact]:
        self.calls.append((latitude, longitude, disaster_type))
        return self.impact


class FakeGeoscience:
    def __init__(self, coordinates: Optional[Tuple[float, float]] = None):
        self.coordinates = coordinates
        self.lookups: List[str] = []

    def get_coordinates(self, location: str) -> Optional[Tuple[float, float]]:
        self.lookups.append(location)
        return self.coordinates

    def get_status_update(self) -> str:
        return "Geoscience is ready to provide location data."


class FakeResponse:
    def __init__(self, payload, status_code: int = 200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        import requests

        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Stands in for requests.Session; replays scripted responses in order."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.headers = {}
        self.requests = []

    def get(self, url, params=None, timeout=None):
        self.requests.append({"url": url, "params": params, "timeout": timeout})
        if not self.responses:
            raise AssertionError("unexpected request: no scripted response left")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response
