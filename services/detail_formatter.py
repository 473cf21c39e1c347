from typing import Dict, List, Tuple

from models import DisasterType, Report

DETAIL_FIELDS: Dict[DisasterType, List[Tuple[str, str]]] = {
    DisasterType.WILDFIRE: [
        ("Fire Intensity", "fire_intensity"),
        ("Affected Area Size", "affected_area_size"),
        ("Nearby Infrastructure", "nearby_infrastructure"),
    ],
    DisasterType.HURRICANE: [
        ("Wind Speed", "wind_speed"),
        ("Flood Risk", "flood_risk"),
        ("Evacuation Status", "evacuation_status"),
    ],
    DisasterType.EARTHQUAKE: [
        ("Magnitude", "magnitude"),
        ("Depth", "depth"),
        ("Aftershocks Expected", "aftershocks_expected"),
    ],
    DisasterType.FLOOD: [
        ("Water Level", "water_level"),
        ("Flood Evacuation Status", "flood_evacuation_status"),
        ("Infrastructure Damage", "infrastructure_damage"),
    ],
    DisasterType.LANDSLIDE: [
        ("Slope Stability", "slope_stability"),
        ("Blocked Roads", "blocked_roads"),
        ("Casualties/Injuries", "casualties_injuries"),
    ],
    DisasterType.OTHER: [
        ("Disaster Description", "disaster_description"),
        ("Estimated Impact", "estimated_impact"),
    ],
}


def _render(value: object) -> str:
    if value is None:
        return "N/A"
    if isinstance(value, bool):
        return "Yes" if value else "No"
    return str(value)


def append_disaster_specific_details(buffer: List[str], report: Report) -> List[str]:
    """
    - Look up the field table for the report's disaster type (unknown types use OTHER)
    - Append one "Label: value" line per field to buffer
    """
    for label, field in DETAIL_FIELDS[report.disaster]:
        buffer.append(f"{label}: {_render(getattr(report, field))}")
    return buffer


def format_disaster_details(report: Report) -> str:
    return "\n".join(append_disaster_specific_details([], report))


def format_report_summary(report: Report) -> str:
    lines = [
        f"Report ID: {report.id}",
        f"Disaster Type: {report.disaster_type}",
        f"Location: {report.location}",
        f"Coordinates: {report.latitude:.6f}, {report.longitude:.6f}",
        f"Date/Time: {report.date_time}",
        f"Reporter: {_render(report.reporter_name)} ({_render(report.contact_info)})",
        f"Response Status: {report.response_status}",
        f"Priority: {_render(report.priority_level)}",
    ]
    append_disaster_specific_details(lines, report)
    return "\n".join(lines)
