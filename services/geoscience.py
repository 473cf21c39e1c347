import logging
from typing import Optional, Tuple

import requests

logger = logging.getLogger(__name__)


class GeoscienceService:
    """GIS lookups: resolves free-text locations through a Nominatim geocoder."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        user_agent: str = "disaster-response-coordinator",
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent})
        self.last_lookup: Optional[str] = None

    def get_coordinates(self, location: str) -> Optional[Tuple[float, float]]:
        if not location or not location.strip():
            return None
        params = {"q": location, "format": "json", "limit": 1}
        try:
            response = self.session.get(f"{self.base_url}/search", params=params, timeout=self.timeout)
            response.raise_for_status()
            results = response.json()
            if not results:
                logger.info("No coordinates found for %r", location)
                return None
            first = results[0]
            coordinates = (float(first["lat"]), float(first["lon"]))
        except (requests.RequestException, ValueError, KeyError, IndexError, TypeError) as exc:
            logger.warning("Geocoding failed for %r: %s", location, exc)
            return None

        self.last_lookup = location
        logger.info("Resolved %r to %s", location, coordinates)
        return coordinates

    def get_status_update(self) -> str:
        if self.last_lookup is None:
            return "Geoscience is ready to provide location data."
        return f"Geoscience is ready to provide location data. Last lookup: {self.last_lookup}"
