import logging
from typing import Optional

import requests

from models import DisasterType, WeatherImpact, WeatherObservation, WeatherRisk

logger = logging.getLogger(__name__)

CURRENT_FIELDS = "temperature_2m,relative_humidity_2m,wind_speed_10m,precipitation,weather_code"

# WMO weather interpretation codes, grouped.
WEATHER_CODES = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Fog",
    51: "Drizzle",
    53: "Drizzle",
    55: "Drizzle",
    61: "Rain",
    63: "Rain",
    65: "Heavy rain",
    71: "Snow",
    73: "Snow",
    75: "Heavy snow",
    80: "Rain showers",
    81: "Rain showers",
    82: "Violent rain showers",
    95: "Thunderstorm",
    96: "Thunderstorm with hail",
    99: "Thunderstorm with hail",
}


def _value(reading: Optional[float]) -> float:
    return reading if reading is not None else 0.0


def analyze_weather_impact(observation: WeatherObservation, disaster_type: Optional[str]) -> WeatherImpact:
    """
    Classify how the current weather aggravates a given disaster.

    - Wildfire: heat, dry air and wind
    - Hurricane: sustained wind (tropical storm >= 63 km/h, hurricane >= 118 km/h)
    - Flood / Landslide: precipitation
    - Earthquake: only severe rain or wind hampers response
    - Anything else: Minimal
    """
    temp = _value(observation.temperature_c)
    humidity = observation.humidity_pct if observation.humidity_pct is not None else 100.0
    wind = _value(observation.wind_speed_kmh)
    rain = _value(observation.precipitation_mm)
    kind = DisasterType.from_label(disaster_type)

    if kind == DisasterType.WILDFIRE:
        if (temp >= 35 and humidity <= 20) or wind >= 40:
            risk = WeatherRisk.HIGH
        elif temp >= 30 or humidity <= 30 or wind >= 25:
            risk = WeatherRisk.MEDIUM
        else:
            risk = WeatherRisk.LOW
        details = f"Temperature {temp:.1f}C, humidity {humidity:.0f}%, wind {wind:.1f} km/h"
    elif kind == DisasterType.HURRICANE:
        if wind >= 118:
            risk = WeatherRisk.HIGH
        elif wind >= 63:
            risk = WeatherRisk.MEDIUM
        else:
            risk = WeatherRisk.LOW
        details = f"Wind {wind:.1f} km/h"
    elif kind == DisasterType.FLOOD:
        if rain >= 7.6:
            risk = WeatherRisk.HIGH
        elif rain >= 2.5:
            risk = WeatherRisk.MEDIUM
        else:
            risk = WeatherRisk.LOW
        details = f"Precipitation {rain:.1f} mm"
    elif kind == DisasterType.LANDSLIDE:
        if rain >= 5:
            risk = WeatherRisk.HIGH
        elif rain >= 1:
            risk = WeatherRisk.MEDIUM
        else:
            risk = WeatherRisk.LOW
        details = f"Precipitation {rain:.1f} mm on unstable slopes"
    elif kind == DisasterType.EARTHQUAKE:
        risk = WeatherRisk.MEDIUM if rain >= 7.6 or wind >= 63 else WeatherRisk.LOW
        details = f"Precipitation {rain:.1f} mm, wind {wind:.1f} km/h"
    else:
        risk = WeatherRisk.MINIMAL
        details = "No weather sensitivity for this disaster type"

    if observation.conditions:
        details = f"{observation.conditions}. {details}"
    return WeatherImpact(risk_level=risk, details=details)


class WeatherService:
    """Current conditions from the Open-Meteo forecast API."""

    def __init__(self, base_url: str, timeout: float = 10.0, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def get_weather(self, latitude: float, longitude: float) -> Optional[WeatherObservation]:
        params = {"latitude": latitude, "longitude": longitude, "current": CURRENT_FIELDS}
        try:
            response = self.session.get(f"{self.base_url}/v1/forecast", params=params, timeout=self.timeout)
            response.raise_for_status()
            current = response.json()["current"]
            # pydantic's ValidationError is a ValueError.
            return WeatherObservation(
                latitude=latitude,
                longitude=longitude,
                temperature_c=current.get("temperature_2m"),
                humidity_pct=current.get("relative_humidity_2m"),
                wind_speed_kmh=current.get("wind_speed_10m"),
                precipitation_mm=current.get("precipitation"),
                conditions=WEATHER_CODES.get(current.get("weather_code")),
            )
        except (requests.RequestException, ValueError, KeyError, TypeError, AttributeError) as exc:
            logger.warning("Unable to retrieve weather data for (%s, %s): %s", latitude, longitude, exc)
            return None

    def classify(self, latitude: float, longitude: float, disaster_type: Optional[str]) -> Optional[WeatherImpact]:
        observation = self.get_weather(latitude, longitude)
        if observation is None:
            return None
        impact = analyze_weather_impact(observation, disaster_type)
        logger.info(
            "Weather impact for %s at (%s, %s): %s",
            disaster_type,
            latitude,
            longitude,
            impact.risk_level.value,
        )
        return impact
