from typing import Dict, List

import pandas as pd

from models import Department, PriorityLevel, Report, ResponseStatus

FRAME_COLUMNS = [
    "id",
    "disaster_type",
    "location",
    "latitude",
    "longitude",
    "date_time",
    "response_status",
    "priority_level",
]


def reports_to_frame(reports: List[Report]) -> pd.DataFrame:
    """One row per report, plus one column per department status."""
    rows = []
    for r in reports:
        row = {col: getattr(r, col) for col in FRAME_COLUMNS}
        for dept in Department:
            row[dept.status_column] = r.department_status(dept).value
        rows.append(row)
    columns = FRAME_COLUMNS + [dept.status_column for dept in Department]
    return pd.DataFrame(rows, columns=columns)


def status_summary(reports: List[Report]) -> pd.DataFrame:
    """Department x status count table; every department and status is present."""
    frame = reports_to_frame(reports)
    departments = [dept.display_name for dept in Department]
    statuses = [status.value for status in ResponseStatus]
    summary = pd.DataFrame(0, index=departments, columns=statuses)
    for dept in Department:
        counts = frame[dept.status_column].value_counts()
        for status, count in counts.items():
            summary.loc[dept.display_name, status] = int(count)
    return summary


def priority_summary(reports: List[Report]) -> Dict[str, int]:
    frame = reports_to_frame(reports)
    counts = frame["priority_level"].fillna("Unscored").value_counts()
    summary = {level.value: int(counts.get(level.value, 0)) for level in PriorityLevel}
    summary["Unscored"] = int(counts.get("Unscored", 0))
    return summary
