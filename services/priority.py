import re
from datetime import datetime
from typing import List, Optional

from models import (
    DisasterType,
    PriorityLevel,
    PriorityResult,
    Report,
    ScoreContribution,
    WeatherImpact,
    WeatherRisk,
)
from services.rationales import render_trace

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

DISASTER_POINTS = {
    DisasterType.WILDFIRE: (3, "High impact"),
    DisasterType.HURRICANE: (3, "High impact"),
    DisasterType.EARTHQUAKE: (3, "High impact"),
    DisasterType.FLOOD: (2, "Medium impact"),
    DisasterType.LANDSLIDE: (2, "Medium impact"),
}

WEATHER_POINTS = {
    WeatherRisk.HIGH: (5, "High impact"),
    WeatherRisk.MEDIUM: (3, "Medium impact"),
    WeatherRisk.LOW: (1, "Low impact"),
}

# (threshold, points, label), first match wins; area must be strictly greater.
AREA_TIERS = [
    (1000, 4, ">1000"),
    (100, 3, "[100-999]"),
    (10, 2, "[10-99]"),
]

# (hours upper bound, points, label); older than the last bound scores nothing.
RECENCY_TIERS = [
    (6, 3, "Very recent (<6hr)"),
    (24, 2, "Recent [6-24hr]"),
    (72, 1, "Older [24-72hr]"),
]

CRITICAL_INFRASTRUCTURE = ("hospital", "power plant")

# Plain decimal or exponent notation; no inf, nan or digit separators.
AREA_PATTERN = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*")

# (minimum score, level), checked top-down.
PRIORITY_THRESHOLDS = [
    (8, PriorityLevel.CRITICAL),
    (5, PriorityLevel.HIGH),
    (3, PriorityLevel.MEDIUM),
]


def priority_for_score(score: int) -> PriorityLevel:
    for minimum, level in PRIORITY_THRESHOLDS:
        if score >= minimum:
            return level
    return PriorityLevel.LOW


def parse_report_time(value: str) -> datetime:
    """Raises ValueError on anything but YYYY-MM-DD HH:MM:SS."""
    return datetime.strptime(value, TIMESTAMP_FORMAT)


def hours_since(reported: datetime, now: datetime) -> int:
    # Whole hours, truncated toward zero.
    return int((now - reported).total_seconds() / 3600)


def _disaster_score(report: Report) -> ScoreContribution:
    points, label = DISASTER_POINTS.get(DisasterType.from_label(report.disaster_type), (0, "Unknown impact"))
    return ScoreContribution(factor="Disaster", description=label, points=points)


def _weather_score(weather_impact: Optional[WeatherImpact]) -> ScoreContribution:
    if weather_impact is None:
        return ScoreContribution(factor="Weather", description="Data unavailable", points=0)
    points, label = WEATHER_POINTS.get(weather_impact.risk_level, (0, "Minimal impact"))
    return ScoreContribution(factor="Weather", description=label, points=points)


def _area_score(report: Report) -> ScoreContribution:
    raw = report.affected_area_size
    if raw is None:
        return ScoreContribution(factor="Affected area", description="Not reported", points=0)
    if not AREA_PATTERN.fullmatch(raw):
        # Unparseable (including empty) values score nothing rather than the small-area point.
        return ScoreContribution(factor="Affected area", description="Unreadable value", points=0)
    area = float(raw)
    for threshold, points, label in AREA_TIERS:
        if area > threshold:
            return ScoreContribution(factor="Affected area", description=label, points=points)
    return ScoreContribution(factor="Affected area", description="<10", points=1)


def _recency_score(report: Report, now: datetime) -> ScoreContribution:
    elapsed = hours_since(parse_report_time(report.date_time), now)
    for bound, points, label in RECENCY_TIERS:
        if elapsed < bound:
            return ScoreContribution(factor="Time", description=label, points=points)
    return ScoreContribution(factor="Time", description="Old (>=72hr)", points=0)


def affects_critical_infrastructure(report: Report) -> bool:
    infrastructure = (report.nearby_infrastructure or "").lower()
    return any(keyword in infrastructure for keyword in CRITICAL_INFRASTRUCTURE)


def has_potential_cascading_effects(report: Report) -> bool:
    return (
        report.disaster_type is not None
        and report.disaster_type.lower() == "earthquake"
        and "dam" in (report.nearby_infrastructure or "").lower()
    )


def _infrastructure_score(report: Report) -> ScoreContribution:
    if affects_critical_infrastructure(report):
        return ScoreContribution(factor="Critical infrastructure", description="Nearby", points=5)
    return ScoreContribution(factor="Critical infrastructure", description="None nearby", points=0)


def _cascading_score(report: Report) -> ScoreContribution:
    if has_potential_cascading_effects(report):
        return ScoreContribution(factor="Cascading effects", description="Earthquake near dam", points=3)
    return ScoreContribution(factor="Cascading effects", description="None expected", points=0)


def calculate_priority(
    report: Report,
    weather_impact: Optional[WeatherImpact],
    now: Optional[datetime] = None,
) -> PriorityResult:
    """
    Point-accumulation priority for a single report.

    - Disaster type, weather risk, affected area and report age each add points
    - Hospitals or power plants nearby add a critical infrastructure bonus
    - Earthquakes near a dam add a cascading effects bonus
    - The total maps to Critical (>=8), High (>=5), Medium (>=3) or Low

    Every step adds a contribution, zero-point ones included. A malformed
    report timestamp raises ValueError; a missing weather classification
    only scores 0.
    """
    now = now or datetime.now()
    contributions: List[ScoreContribution] = [
        _disaster_score(report),
        _weather_score(weather_impact),
        _area_score(report),
        _recency_score(report, now),
        _infrastructure_score(report),
        _cascading_score(report),
    ]

    score = sum(c.points for c in contributions)
    level = priority_for_score(score)
    return PriorityResult(
        level=level,
        score=score,
        contributions=contributions,
        trace=render_trace(report.disaster_type, contributions, score, level),
    )
