"""Sample health data files for trying out the analyzer.

Seven days of readings that start healthy and drift toward tachycardia,
stage 2 hypertension, low oxygen and low activity.
"""

from __future__ import annotations

import logging
from pathlib import Path

from shm.domains.health.models import HealthRecord

logger = logging.getLogger(__name__)

CSV_HEADER = "Date,HeartRate,SystolicBP,DiastolicBP,BloodSugar,Temperature,OxygenLevel,Steps"

SAMPLE_RECORDS = [
    HealthRecord("2025-10-26", 72, 118, 78, 95, 98.2, 98, 8500),
    HealthRecord("2025-10-27", 75, 120, 80, 102, 98.4, 97, 9200),
    HealthRecord("2025-10-28", 78, 122, 82, 98, 98.6, 98, 7800),
    HealthRecord("2025-10-29", 115, 145, 95, 180, 99.1, 96, 4500),
    HealthRecord("2025-10-30", 118, 148, 96, 185, 99.3, 95, 4200),
    HealthRecord("2025-10-31", 120, 150, 98, 190, 99.5, 94, 3800),
    HealthRecord("2025-11-01", 122, 152, 99, 195, 99.8, 93, 3500),
]


def format_csv(records: list[HealthRecord]) -> str:
    rows = [CSV_HEADER]
    for r in records:
        rows.append(
            f"{r.date},{r.heart_rate},{r.systolic_bp},{r.diastolic_bp},"
            f"{r.blood_sugar},{r.temperature:.1f},{r.oxygen_level},{r.steps}"
        )
    return "\n".join(rows) + "\n"


def format_labeled(records: list[HealthRecord]) -> str:
    blocks = []
    for r in records:
        blocks.append("\n".join([
            f"Date: {r.date}",
            f"Heart Rate: {r.heart_rate}",
            f"Blood Pressure: {r.systolic_bp}/{r.diastolic_bp}",
            f"Blood Sugar: {r.blood_sugar}",
            f"Temperature: {r.temperature:.1f}",
            f"Oxygen Level: {r.oxygen_level}",
            f"Steps: {r.steps}",
        ]))
    return "\n\n".join(blocks) + "\n"


def _write(path: str | Path, text: str) -> bool:
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as exc:
        logger.warning("Failed to create sample file %s: %s", path, exc)
        return False
    logger.info("Created sample health data file %s", path)
    return True


def write_sample_csv(path: str | Path) -> bool:
    """Write the sample data set in the delimited format."""
    return _write(path, format_csv(SAMPLE_RECORDS))


def write_sample_txt(path: str | Path) -> bool:
    """Write the sample data set in the labeled-block format."""
    return _write(path, format_labeled(SAMPLE_RECORDS))
