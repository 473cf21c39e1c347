import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)


class DisasterType(str, Enum):
    WILDFIRE = "Wildfire"
    HURRICANE = "Hurricane"
    EARTHQUAKE = "Earthquake"
    FLOOD = "Flood"
    LANDSLIDE = "Landslide"
    OTHER = "Other"

    @classmethod
    def from_label(cls, label: Optional[str]) -> "DisasterType":
        """Exact label match; anything else is treated as OTHER."""
        for member in cls:
            if member.value == label:
                return member
        return cls.OTHER


class Department(str, Enum):
    FIRE_DEPARTMENT = "Fire Department"
    HEALTH_DEPARTMENT = "Health Department"
    LAW_ENFORCEMENT = "Law Enforcement"
    METEOROLOGY = "Meteorology"
    GEOSCIENCE = "Geoscience"
    UTILITY_COMPANIES = "Utility Companies"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def status_column(self) -> str:
        return f"{self.name.lower()}_status"

    @classmethod
    def parse(cls, text: str) -> "Department":
        """Accepts the member name, the display name or the status column."""
        normalized = text.strip()
        for member in cls:
            if normalized in (member.name, member.value, member.status_column):
                return member
            if normalized.lower() in (member.name.lower(), member.value.lower()):
                return member
        raise ValueError(f"Unknown department: {text}")


class ResponseStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"
    NOT_RESPONSIBLE = "Not Responsible"

    @classmethod
    def parse(cls, text: Optional[str]) -> "ResponseStatus":
        if not text:
            return cls.NOT_RESPONSIBLE
        for member in cls:
            if text in (member.name, member.value):
                return member
        logger.warning("Unknown response status %r, defaulting to %s", text, cls.NOT_RESPONSIBLE.name)
        return cls.NOT_RESPONSIBLE


OPEN_STATUSES = (ResponseStatus.PENDING.value, ResponseStatus.IN_PROGRESS.value)


class PriorityLevel(str, Enum):
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    PriorityLevel.LOW: 0,
    PriorityLevel.MEDIUM: 1,
    PriorityLevel.HIGH: 2,
    PriorityLevel.CRITICAL: 3,
}


class WeatherRisk(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    MINIMAL = "Minimal"


def default_department_statuses() -> Dict[Department, ResponseStatus]:
    return {dept: ResponseStatus.NOT_RESPONSIBLE for dept in Department}


def append_line(current: Optional[str], entry: str) -> str:
    """Append-only join used for the communication log and resource list."""
    if not current:
        return entry
    return current + "\n" + entry


class DisasterDetails(BaseModel):
    # Wildfire
    fire_intensity: Optional[str] = None
    affected_area_size: Optional[str] = None
    nearby_infrastructure: Optional[str] = None
    # Hurricane
    wind_speed: Optional[str] = None
    flood_risk: Optional[bool] = None
    evacuation_status: Optional[str] = None
    # Earthquake
    magnitude: Optional[str] = None
    depth: Optional[str] = None
    aftershocks_expected: Optional[bool] = None
    # Flood
    water_level: Optional[str] = None
    flood_evacuation_status: Optional[str] = None
    infrastructure_damage: Optional[str] = None
    # Landslide
    slope_stability: Optional[str] = None
    blocked_roads: Optional[str] = None
    casualties_injuries: Optional[str] = None
    # Other
    disaster_description: Optional[str] = None
    estimated_impact: Optional[str] = None

    @field_validator("affected_area_size", "wind_speed", "magnitude", "depth", "water_level", mode="before")
    @classmethod
    def _numbers_as_text(cls, value: Any) -> Any:
        # Measurements are stored as entered; JSON numbers become their text form.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class ReportCreate(DisasterDetails):
    disaster_type: str
    location: str
    latitude: float = 0.0
    longitude: float = 0.0
    date_time: str  # "YYYY-MM-DD HH:MM:SS"
    reporter_name: Optional[str] = None
    contact_info: Optional[str] = None
    response_status: str = ResponseStatus.PENDING.value
    resources_needed: Optional[str] = None
    department_statuses: Dict[Department, ResponseStatus] = Field(default_factory=default_department_statuses)

    @field_validator("department_statuses", mode="after")
    @classmethod
    def _fill_departments(cls, value: Dict[Department, ResponseStatus]) -> Dict[Department, ResponseStatus]:
        filled = default_department_statuses()
        filled.update(value)
        return filled


class Report(ReportCreate):
    id: int
    created_at: Optional[str] = None
    communication_log: Optional[str] = None
    priority_level: Optional[str] = None

    @property
    def disaster(self) -> DisasterType:
        return DisasterType.from_label(self.disaster_type)

    @property
    def log_entries(self) -> List[str]:
        if not self.communication_log:
            return []
        return self.communication_log.split("\n")

    def department_status(self, department: Department) -> ResponseStatus:
        return self.department_statuses.get(department, ResponseStatus.NOT_RESPONSIBLE)

    def set_department_status(self, department: Department, status: ResponseStatus) -> None:
        self.department_statuses[department] = status

    def append_communication_log(self, entry: str) -> str:
        self.communication_log = append_line(self.communication_log, entry)
        return self.communication_log

    def append_resource_needed(self, resource: str) -> str:
        self.resources_needed = append_line(self.resources_needed, resource)
        return self.resources_needed

    def is_open(self) -> bool:
        return self.response_status in OPEN_STATUSES


class ScoreContribution(BaseModel):
    factor: str
    description: str
    points: int


class PriorityResult(BaseModel):
    level: PriorityLevel
    score: int
    contributions: List[ScoreContribution]
    trace: str


class WeatherObservation(BaseModel):
    latitude: float
    longitude: float
    temperature_c: Optional[float] = None
    humidity_pct: Optional[float] = None
    wind_speed_kmh: Optional[float] = None
    precipitation_mm: Optional[float] = None
    conditions: Optional[str] = None


class WeatherImpact(BaseModel):
    risk_level: WeatherRisk
    details: str


class DepartmentAssignments(BaseModel):
    assignments: Dict[Department, Optional[ResponseStatus]]
