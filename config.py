import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

BASE_DIR = Path(__file__).parent

DEFAULT_DB_URL = f"sqlite:///{BASE_DIR / 'reports.db'}"
DEFAULT_WEATHER_API_URL = "https://api.open-meteo.com"
DEFAULT_GEOCODER_API_URL = "https://nominatim.openstreetmap.org"
DEFAULT_GEOCODER_USER_AGENT = "disaster-response-coordinator/0.1"


@dataclass(frozen=True)
class Settings:
    db_url: str = DEFAULT_DB_URL
    weather_api_url: str = DEFAULT_WEATHER_API_URL
    geocoder_api_url: str = DEFAULT_GEOCODER_API_URL
    geocoder_user_agent: str = DEFAULT_GEOCODER_USER_AGENT
    http_timeout_seconds: float = 10.0
    seed_reports_path: Optional[str] = None
    log_level: str = "INFO"

    @staticmethod
    def load_from_env() -> "Settings":
        timeout_raw = os.getenv("HTTP_TIMEOUT_SECONDS", "10")
        try:
            timeout = float(timeout_raw)
        except ValueError as exc:
            raise ValueError(f"HTTP_TIMEOUT_SECONDS must be a number, got {timeout_raw!r}") from exc

        return Settings(
            db_url=os.getenv("DISASTER_DB_URL", DEFAULT_DB_URL),
            weather_api_url=os.getenv("WEATHER_API_URL", DEFAULT_WEATHER_API_URL).rstrip("/"),
            geocoder_api_url=os.getenv("GEOCODER_API_URL", DEFAULT_GEOCODER_API_URL).rstrip("/"),
            geocoder_user_agent=os.getenv("GEOCODER_USER_AGENT", DEFAULT_GEOCODER_USER_AGENT),
            http_timeout_seconds=timeout,
            seed_reports_path=os.getenv("SEED_REPORTS_PATH") or None,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
