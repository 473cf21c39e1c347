from typing import Literal, Optional

from pydantic import BaseModel

from models import Department, Report, ResponseStatus
from services.coordinator import Coordinator


class ReportEvent(BaseModel):
    type: Literal["status_change", "log_entry", "resource_request", "relocate", "reprioritize"]
    department: Optional[Department] = None
    status: Optional[ResponseStatus] = None
    entry: Optional[str] = None
    resource: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    location: Optional[str] = None


def apply_event(coordinator: Coordinator, report_id: int, event: ReportEvent) -> Report:
    """
    - Load the target report (LookupError if it does not exist)
    - Route the event to the department actor or coordinator operation
    - Return the report as held in memory after the change
    """
    report = coordinator.get_report(report_id)
    if report is None:
        raise LookupError(f"Report {report_id} not found")

    if event.type == "status_change":
        if event.department is None or event.status is None:
            raise ValueError("status_change requires department and status")
        coordinator.departments[event.department].update_status(report, event.status)
    elif event.type == "log_entry":
        if not event.entry:
            raise ValueError("log_entry requires a non-empty entry")
        if event.department is not None:
            # Department entries are tagged with who wrote them.
            coordinator.departments[event.department].append_log(report, f"[{event.department.display_name}] {event.entry}")
        else:
            coordinator.add_communication_log(report, event.entry)
    elif event.type == "resource_request":
        if not event.resource:
            raise ValueError("resource_request requires a resource")
        coordinator.add_resource_needed(report, event.resource)
    elif event.type == "relocate":
        latitude, longitude = event.latitude, event.longitude
        if latitude is None or longitude is None:
            if not event.location:
                raise ValueError("relocate requires latitude/longitude or a location to geocode")
            resolved = coordinator.get_coordinates(event.location)
            if resolved is None:
                raise ValueError(f"Could not resolve coordinates for {event.location!r}")
            latitude, longitude = resolved
        coordinator.update_coordinates(report, latitude, longitude)
    elif event.type == "reprioritize":
        coordinator.recompute_priority(report)

    return report
