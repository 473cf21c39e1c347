import logging
from typing import Dict, List

from models import Department, Report, ResponseStatus
from services.detail_formatter import append_disaster_specific_details
from services.report_repository import ReportRepository

logger = logging.getLogger(__name__)


class DepartmentActor:
    """
    Actioner for one department.

    - Status and log changes land on the in-memory report first, then in the store
    - A failed write is logged by the repository; the report object keeps the change
    """

    def __init__(self, department: Department, repository: ReportRepository):
        self.department = department
        self.repository = repository

    @property
    def department_name(self) -> str:
        return self.department.display_name

    def inform_status(self) -> str:
        return f"{self.department_name} is ready to respond to incidents."

    def update_status(self, report: Report, status: ResponseStatus) -> bool:
        report.set_department_status(self.department, status)
        saved = self.repository.update_department_status(report.id, self.department, status)
        if saved:
            logger.info("%s set report %s to %s", self.department_name, report.id, status.value)
        return saved

    def append_log(self, report: Report, entry: str) -> bool:
        updated_log = report.append_communication_log(entry)
        return self.repository.update_communication_log(report.id, updated_log)

    def list_active_reports(self) -> List[Report]:
        return self.repository.list_active_for(self.department)

    def append_disaster_specific_details(self, buffer: List[str], report: Report) -> List[str]:
        return append_disaster_specific_details(buffer, report)


def build_department_actors(repository: ReportRepository) -> Dict[Department, DepartmentActor]:
    return {dept: DepartmentActor(dept, repository) for dept in Department}
