import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException

from config import Settings
from database import create_session_factory
from models import (
    Department,
    DepartmentAssignments,
    PriorityResult,
    Report,
    ReportCreate,
    WeatherImpact,
    WeatherObservation,
)
from services.coordinator import Coordinator
from services.detail_formatter import format_report_summary
from services.event_handler import ReportEvent, apply_event
from services.geoscience import GeoscienceService
from services.rationales import generate_rationales
from services.report_repository import ReportRepository
from services.weather import WeatherService, analyze_weather_impact
from utils.data_loader import seed_database
from utils.report_frame import priority_summary, status_summary

logger = logging.getLogger(__name__)


def build_coordinator(settings: Settings) -> Coordinator:
    repository = ReportRepository(create_session_factory(settings.db_url))
    weather = WeatherService(settings.weather_api_url, timeout=settings.http_timeout_seconds)
    geoscience = GeoscienceService(
        settings.geocoder_api_url,
        timeout=settings.http_timeout_seconds,
        user_agent=settings.geocoder_user_agent,
    )
    if settings.seed_reports_path:
        seed_database(repository, settings.seed_reports_path)
    return Coordinator(repository, weather, geoscience)


def _parse_department(value: str) -> Department:
    try:
        return Department.parse(value)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Department {value} not found")


def create_app(settings: Optional[Settings] = None, coordinator: Optional[Coordinator] = None) -> FastAPI:
    settings = settings or Settings.load_from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] - %(name)s - %(message)s",
    )
    coordinator = coordinator or build_coordinator(settings)

    app = FastAPI(title="Disaster Response Coordinator")
    app.state.coordinator = coordinator

    def get_report_or_404(report_id: int) -> Report:
        report = coordinator.get_report(report_id)
        if report is None:
            raise HTTPException(status_code=404, detail=f"Report {report_id} not found")
        return report

    @app.get("/reports")
    def get_reports() -> List[Report]:
        return coordinator.load_reports()

    @app.get("/reports/open")
    def get_open_reports() -> List[Report]:
        return coordinator.load_disaster_status_reports()

    @app.post("/reports", status_code=201)
    def create_report(payload: ReportCreate) -> Report:
        report = coordinator.submit_report(payload)
        if report is None:
            raise HTTPException(status_code=503, detail="Report could not be stored")
        return report

    @app.get("/reports/{report_id}")
    def get_report(report_id: int) -> Report:
        return get_report_or_404(report_id)

    @app.get("/reports/{report_id}/details")
    def get_report_details(report_id: int) -> Dict[str, str]:
        report = get_report_or_404(report_id)
        return {"details": format_report_summary(report)}

    @app.post("/reports/{report_id}/priority")
    def recompute_priority(report_id: int) -> PriorityResult:
        report = get_report_or_404(report_id)
        try:
            return coordinator.recompute_priority(report)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=f"Cannot score report {report_id}: {exc}")

    @app.put("/reports/{report_id}/assignments")
    def update_assignments(report_id: int, body: DepartmentAssignments) -> Report:
        report = get_report_or_404(report_id)
        if not coordinator.update_department_assignments(report, body.assignments):
            logger.warning("Department assignments for report %s were not saved", report_id)
        return report

    @app.post("/reports/{report_id}/events")
    def post_event(report_id: int, event: ReportEvent) -> Report:
        try:
            return apply_event(coordinator, report_id, event)
        except LookupError as exc:
            raise HTTPException(status_code=404, detail=str(exc))
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))

    @app.get("/departments/{department}/reports")
    def get_department_reports(department: str) -> List[Report]:
        dept = _parse_department(department)
        return coordinator.departments[dept].list_active_reports()

    @app.get("/departments/{department}/status")
    def get_department_status(department: str) -> Dict[str, str]:
        dept = _parse_department(department)
        return {"department": dept.display_name, "status": coordinator.get_department_update(dept)}

    @app.get("/geocode")
    def geocode(location: str) -> Dict[str, float]:
        coordinates = coordinator.get_coordinates(location)
        if coordinates is None:
            raise HTTPException(status_code=404, detail=f"No coordinates found for {location}")
        latitude, longitude = coordinates
        return {"latitude": latitude, "longitude": longitude}

    @app.get("/weather")
    def weather(lat: float, lon: float, disaster_type: Optional[str] = None) -> Dict[str, Any]:
        observation: Optional[WeatherObservation] = coordinator.get_weather(lat, lon)
        if observation is None:
            raise HTTPException(status_code=503, detail="Weather data unavailable")
        response: Dict[str, Any] = {"observation": observation.model_dump()}
        if disaster_type:
            impact: WeatherImpact = analyze_weather_impact(observation, disaster_type)
            response["impact"] = impact.model_dump()
        return response

    @app.get("/summary")
    def summary() -> Dict[str, Any]:
        reports = coordinator.load_reports()
        return {
            "total_reports": len(reports),
            "open_reports": len([r for r in reports if r.is_open()]),
            "priorities": priority_summary(reports),
            "department_statuses": status_summary(reports).to_dict(orient="index"),
            "rationales": generate_rationales(reports),
        }

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
