import json
import logging
from typing import List

from models import ReportCreate
from services.report_repository import ReportRepository

logger = logging.getLogger(__name__)


def load_seed_reports(path: str) -> List[ReportCreate]:
    with open(path) as f:
        data = json.load(f)
    return [ReportCreate(**report) for report in data["reports"]]


def seed_database(repository: ReportRepository, path: str) -> int:
    """Insert the seed reports only when the store is empty; returns how many were added."""
    if repository.count() > 0:
        return 0
    added = 0
    for payload in load_seed_reports(path):
        if repository.create(payload) is not None:
            added += 1
    logger.info("Seeded %d reports from %s", added, path)
    return added
