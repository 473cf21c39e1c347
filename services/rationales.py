from typing import List, Optional

from models import PriorityLevel, Report, ResponseStatus, ScoreContribution

SCORE_CHART = (
    "Score Chart:\n"
    "    score >= 8  : Critical\n"
    "    score >= 5  : High\n"
    "    score >= 3  : Medium\n"
    "    score < 3   : Low"
)


def render_trace(
    disaster_type: Optional[str],
    contributions: List[ScoreContribution],
    score: int,
    level: PriorityLevel,
) -> str:
    lines = [f"Disaster Type: {disaster_type}", ""]
    running = 0
    for c in contributions:
        running += c.points
        unit = "point" if c.points == 1 else "points"
        left = f"   - {c.factor}: {c.description}"
        lines.append(f"{left:<45} +{c.points} {unit} (running {running})")
    lines.extend(["", f"Final score: {score}", "", SCORE_CHART, "", f"Priority: {level.value}"])
    return "\n".join(lines)


def generate_rationales(reports: List[Report]) -> List[str]:
    """
    - One line per report for the coordinator dashboard
    - Names the current priority and every department still working the report
    """
    rationales = []
    for r in reports:
        working = [
            dept.display_name
            for dept, status in r.department_statuses.items()
            if status in (ResponseStatus.PENDING, ResponseStatus.IN_PROGRESS)
        ]
        assigned = ", ".join(working) if working else "no department assigned"
        priority = r.priority_level or "unscored"
        rationales.append(
            f"Report {r.id} ({r.disaster_type} at {r.location}) is {priority} priority; {assigned}"
        )
    return rationales
