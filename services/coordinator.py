import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from models import (
    Department,
    PriorityResult,
    Report,
    ReportCreate,
    ResponseStatus,
    WeatherImpact,
    WeatherObservation,
)
from services.departments import DepartmentActor, build_department_actors
from services.geoscience import GeoscienceService
from services.priority import calculate_priority
from services.report_repository import ReportRepository
from services.weather import WeatherService

logger = logging.getLogger(__name__)


class Coordinator:
    """Aggregates reports, dispatches to departments and scores priority."""

    def __init__(
        self,
        repository: ReportRepository,
        weather: WeatherService,
        geoscience: GeoscienceService,
    ):
        self.repository = repository
        self.weather = weather
        self.geoscience = geoscience
        self.reports: List[Report] = []
        self.disaster_status_reports: List[Report] = []
        self.departments: Dict[Department, DepartmentActor] = build_department_actors(repository)

    def load_reports(self) -> List[Report]:
        self.reports = self.repository.list_all()
        logger.info("Loaded %d reports", len(self.reports))
        return self.reports

    def load_disaster_status_reports(self) -> List[Report]:
        self.disaster_status_reports = self.repository.list_open()
        return self.disaster_status_reports

    def get_report(self, report_id: int) -> Optional[Report]:
        return self.repository.get(report_id)

    def submit_report(self, payload: ReportCreate) -> Optional[Report]:
        report = self.repository.create(payload)
        if report is not None:
            self.reports.append(report)
        return report

    def update_department_assignments(
        self,
        report: Report,
        assignments: Dict[Department, Optional[ResponseStatus]],
    ) -> bool:
        """
        - Persist all department columns in one write (unassigned -> Not Responsible)
        - Only on success, copy the non-empty assignments onto the report
        """
        if not self.repository.update_department_assignments(report.id, assignments):
            return False
        for dept, status in assignments.items():
            if status is not None:
                report.set_department_status(dept, status)
        return True

    def update_report(self, report: Report) -> bool:
        return self.repository.update_report(report)

    def add_communication_log(self, report: Report, entry: str) -> bool:
        updated_log = report.append_communication_log(entry)
        saved = self.repository.update_communication_log(report.id, updated_log)
        if saved:
            logger.info("Communication log updated for report %s", report.id)
        return saved

    def add_resource_needed(self, report: Report, resource: str) -> bool:
        updated = report.append_resource_needed(resource)
        return self.repository.update_resources_needed(report.id, updated)

    def update_coordinates(self, report: Report, latitude: float, longitude: float) -> bool:
        report.latitude = latitude
        report.longitude = longitude
        return self.repository.update_coordinates(report.id, latitude, longitude)

    def get_coordinates(self, location: str) -> Optional[Tuple[float, float]]:
        return self.geoscience.get_coordinates(location)

    def get_weather(self, latitude: float, longitude: float) -> Optional[WeatherObservation]:
        return self.weather.get_weather(latitude, longitude)

    def analyze_weather_impact(self, report: Report) -> Optional[WeatherImpact]:
        impact = self.weather.classify(report.latitude, report.longitude, report.disaster_type)
        if impact is None:
            logger.warning("Weather impact analysis: unable to retrieve weather data for report %s", report.id)
        return impact

    def calculate_priority(self, report: Report, now: Optional[datetime] = None) -> PriorityResult:
        return calculate_priority(report, self.analyze_weather_impact(report), now=now)

    def recompute_priority(self, report: Report, now: Optional[datetime] = None) -> PriorityResult:
        result = self.calculate_priority(report, now=now)
        report.priority_level = result.level.value
        self.repository.update_priority(report.id, report.priority_level)
        logger.info("Report %s scored %d -> %s", report.id, result.score, result.level.value)
        return result

    def get_department_update(self, department: Department) -> str:
        if department == Department.GEOSCIENCE:
            return self.geoscience.get_status_update()
        return self.departments[department].inform_status()
