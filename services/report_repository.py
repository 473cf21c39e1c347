import logging
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from database import ReportRecord, session_scope, status_column
from models import (
    OPEN_STATUSES,
    Department,
    DisasterDetails,
    Report,
    ReportCreate,
    ResponseStatus,
)

logger = logging.getLogger(__name__)

_DETAIL_FIELDS = list(DisasterDetails.model_fields)


def _to_report(row: ReportRecord) -> Report:
    statuses = {
        dept: ResponseStatus.parse(getattr(row, dept.status_column))
        for dept in Department
    }
    details = {name: getattr(row, name) for name in _DETAIL_FIELDS}
    return Report(
        id=row.id,
        disaster_type=row.disaster_type,
        location=row.location,
        latitude=row.latitude or 0.0,
        longitude=row.longitude or 0.0,
        date_time=row.date_time,
        reporter_name=row.reporter_name,
        contact_info=row.contact_info,
        response_status=row.response_status or ResponseStatus.PENDING.value,
        created_at=row.created_at,
        resources_needed=row.resources_needed,
        communication_log=row.communication_log,
        priority_level=row.priority_level,
        department_statuses=statuses,
        **details,
    )


class ReportRepository:
    """Single store for every report read and write, one session per call."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def create(self, payload: ReportCreate) -> Optional[Report]:
        values = payload.model_dump(exclude={"department_statuses"})
        for dept in Department:
            values[dept.status_column] = payload.department_statuses[dept].name
        values["created_at"] = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        try:
            with session_scope(self._session_factory) as session:
                row = ReportRecord(**values)
                session.add(row)
                session.flush()
                report = _to_report(row)
        except SQLAlchemyError:
            logger.exception("Error creating report for %s", payload.location)
            return None
        logger.info("Created report id=%s type=%s", report.id, report.disaster_type)
        return report

    def get(self, report_id: int) -> Optional[Report]:
        try:
            with session_scope(self._session_factory) as session:
                row = session.get(ReportRecord, report_id)
                return _to_report(row) if row is not None else None
        except SQLAlchemyError:
            logger.exception("Error loading report id=%s", report_id)
            return None

    def list_all(self) -> List[Report]:
        return self._select(select(ReportRecord).order_by(ReportRecord.id), "all reports")

    def list_open(self) -> List[Report]:
        stmt = (
            select(ReportRecord)
            .where(ReportRecord.response_status.in_(OPEN_STATUSES))
            .order_by(ReportRecord.id)
        )
        return self._select(stmt, "disaster status reports")

    def list_active_for(self, department: Department) -> List[Report]:
        column = status_column(department)
        stmt = (
            select(ReportRecord)
            .where(ReportRecord.response_status.in_(OPEN_STATUSES))
            .where(column.is_not(None))
            .where(column != ResponseStatus.NOT_RESPONSIBLE.name)
            .order_by(ReportRecord.id)
        )
        # Rows holding unparseable statuses map to NOT_RESPONSIBLE, so filter again.
        return [
            report
            for report in self._select(stmt, f"active reports for {department.display_name}")
            if report.department_status(department) != ResponseStatus.NOT_RESPONSIBLE
        ]

    def update_department_status(self, report_id: int, department: Department, status: ResponseStatus) -> bool:
        return self._update(
            report_id,
            {department.status_column: status.name},
            f"{department.display_name} status",
        )

    def update_department_assignments(
        self,
        report_id: int,
        assignments: Dict[Department, Optional[ResponseStatus]],
    ) -> bool:
        values = {}
        for dept in Department:
            status = assignments.get(dept)
            values[dept.status_column] = (status or ResponseStatus.NOT_RESPONSIBLE).name
        return self._update(report_id, values, "department assignments")

    def update_report(self, report: Report) -> bool:
        return self._update(
            report.id,
            {
                "response_status": report.response_status,
                "resources_needed": report.resources_needed,
                "communication_log": report.communication_log,
                "priority_level": report.priority_level,
            },
            "report",
        )

    def update_communication_log(self, report_id: int, log: str) -> bool:
        return self._update(report_id, {"communication_log": log}, "communication log")

    def update_resources_needed(self, report_id: int, resources: str) -> bool:
        return self._update(report_id, {"resources_needed": resources}, "resources needed")

    def update_coordinates(self, report_id: int, latitude: float, longitude: float) -> bool:
        return self._update(report_id, {"latitude": latitude, "longitude": longitude}, "coordinates")

    def update_priority(self, report_id: int, level: str) -> bool:
        return self._update(report_id, {"priority_level": level}, "priority level")

    def count(self) -> int:
        try:
            with session_scope(self._session_factory) as session:
                return session.scalar(select(func.count()).select_from(ReportRecord)) or 0
        except SQLAlchemyError:
            logger.exception("Error counting reports")
            return 0

    def _select(self, stmt, what: str) -> List[Report]:
        try:
            with session_scope(self._session_factory) as session:
                return [_to_report(row) for row in session.scalars(stmt)]
        except SQLAlchemyError:
            logger.exception("Error loading %s from database", what)
            return []

    def _update(self, report_id: int, values: Dict[str, object], what: str) -> bool:
        stmt = update(ReportRecord).where(ReportRecord.id == report_id).values(**values)
        try:
            with session_scope(self._session_factory) as session:
                affected = session.execute(stmt).rowcount
        except SQLAlchemyError:
            logger.exception("Error updating %s for report id=%s", what, report_id)
            return False
        if affected == 0:
            logger.warning("Failed to update %s: report id=%s not found", what, report_id)
            return False
        logger.debug("Updated %s for report id=%s", what, report_id)
        return True
