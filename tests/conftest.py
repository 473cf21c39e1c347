from datetime import datetime

import pytest

from database import create_session_factory
from helpers import FakeGeoscience, FakeWeather, hours_ago, impact
from models import Department, ReportCreate, ResponseStatus, WeatherRisk
from services.coordinator import Coordinator
from services.report_repository import ReportRepository


@pytest.fixture()
def session_factory(tmp_path):
    return create_session_factory(f"sqlite:///{tmp_path / 'reports.db'}")


@pytest.fixture()
def repository(session_factory) -> ReportRepository:
    return ReportRepository(session_factory)


@pytest.fixture()
def weather() -> FakeWeather:
    return FakeWeather(impact(WeatherRisk.HIGH))


@pytest.fixture()
def geoscience() -> FakeGeoscience:
    return FakeGeoscience((-33.8688, 151.2093))


@pytest.fixture()
def coordinator(repository, weather, geoscience) -> Coordinator:
    return Coordinator(repository, weather, geoscience)


@pytest.fixture()
def make_payload():
    def _make(**overrides) -> ReportCreate:
        values = {
            "disaster_type": "Wildfire",
            "location": "Blue Mountains",
            "latitude": -33.7,
            "longitude": 150.3,
            "date_time": hours_ago(2, datetime.now()),
            "reporter_name": "Alex Morgan",
            "contact_info": "0400 111 222",
            "fire_intensity": "High",
            "affected_area_size": "1500",
            "nearby_infrastructure": "Residential streets",
        }
        values.update(overrides)
        return ReportCreate(**values)

    return _make


@pytest.fixture()
def stored_report(repository, make_payload):
    return repository.create(
        make_payload(
            department_statuses={
                Department.FIRE_DEPARTMENT: ResponseStatus.IN_PROGRESS,
                Department.HEALTH_DEPARTMENT: ResponseStatus.PENDING,
            }
        )
    )
