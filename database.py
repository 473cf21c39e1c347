from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Boolean, Column, Float, Integer, String, Text, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from models import Department, ResponseStatus

Base = declarative_base()


class ReportRecord(Base):
    __tablename__ = "reports"

    id = Column(Integer, primary_key=True, index=True)
    disaster_type = Column(String(50), nullable=False, index=True)
    location = Column(String(255), nullable=False)
    latitude = Column(Float, default=0.0)
    longitude = Column(Float, default=0.0)
    date_time = Column(String(19), nullable=False)
    reporter_name = Column(String(100))
    contact_info = Column(String(100))
    response_status = Column(String(20), default=ResponseStatus.PENDING.value, index=True)
    created_at = Column(String(32))
    assigned_department = Column(String(255))

    fire_intensity = Column(String(50))
    affected_area_size = Column(String(50))
    nearby_infrastructure = Column(Text)
    wind_speed = Column(String(50))
    flood_risk = Column(Boolean)
    evacuation_status = Column(String(100))
    magnitude = Column(String(20))
    depth = Column(String(20))
    aftershocks_expected = Column(Boolean)
    water_level = Column(String(50))
    flood_evacuation_status = Column(String(100))
    infrastructure_damage = Column(Text)
    slope_stability = Column(String(100))
    blocked_roads = Column(Text)
    casualties_injuries = Column(Text)
    disaster_description = Column(Text)
    estimated_impact = Column(Text)

    resources_needed = Column(Text)
    communication_log = Column(Text)
    priority_level = Column(String(20))

    fire_department_status = Column(String(20), default=ResponseStatus.NOT_RESPONSIBLE.name)
    health_department_status = Column(String(20), default=ResponseStatus.NOT_RESPONSIBLE.name)
    law_enforcement_status = Column(String(20), default=ResponseStatus.NOT_RESPONSIBLE.name)
    meteorology_status = Column(String(20), default=ResponseStatus.NOT_RESPONSIBLE.name)
    geoscience_status = Column(String(20), default=ResponseStatus.NOT_RESPONSIBLE.name)
    utility_companies_status = Column(String(20), default=ResponseStatus.NOT_RESPONSIBLE.name)


def status_column(department: Department) -> Column:
    return getattr(ReportRecord, department.status_column)


def create_session_factory(db_url: str) -> sessionmaker:
    """
    - Build the engine for db_url and create the reports table if missing
    - Return a session factory; callers open one session per operation
    """
    connect_args = {"check_same_thread": False} if db_url.startswith("sqlite") else {}
    engine = create_engine(db_url, connect_args=connect_args)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@contextmanager
def session_scope(session_factory: sessionmaker) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
