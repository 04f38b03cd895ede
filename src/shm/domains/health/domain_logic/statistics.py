"""Summary statistics over a health record sequence."""

from __future__ import annotations

from collections.abc import Sequence

from shm.domains.health.models import HealthRecord, HealthStats


def compute_statistics(records: Sequence[HealthRecord]) -> HealthStats:
    """Reduce records to population means of each vital plus total steps.

    Callers must pass at least one record; an empty sequence raises
    ZeroDivisionError.
    """
    count = len(records)
    return HealthStats(
        avg_heart_rate=sum(r.heart_rate for r in records) / count,
        avg_systolic=sum(r.systolic_bp for r in records) / count,
        avg_diastolic=sum(r.diastolic_bp for r in records) / count,
        avg_blood_sugar=sum(r.blood_sugar for r in records) / count,
        avg_temperature=sum(r.temperature for r in records) / count,
        avg_oxygen=sum(r.oxygen_level for r in records) / count,
        total_steps=sum(r.steps for r in records),
        record_count=count,
    )
