"""Session state: the record sequence accumulated across loads and entries.

The analysis functions are pure; this object is the only thing that mutates
and it is owned by the server.
"""

from __future__ import annotations

import logging
from pathlib import Path

from shm.domains.health.connectors.record_parser import load_health_file
from shm.domains.health.domain_logic.alert_engine import analyze_health
from shm.domains.health.domain_logic.health_scorer import calculate_health_score
from shm.domains.health.domain_logic.statistics import compute_statistics
from shm.domains.health.models import (
    MAX_RECORDS,
    AnalysisResult,
    HealthRecord,
    ParseResult,
)

logger = logging.getLogger(__name__)


class NoDataError(Exception):
    """Raised when analysis is requested before any records are held."""


class HealthSession:
    """Holds up to ``max_records`` records and the most recent analysis.

    Usage::

        session = HealthSession()
        result = session.load("readings.csv")
        if result.ok:
            analysis = session.analyze()
    """

    def __init__(self, max_records: int = MAX_RECORDS) -> None:
        self._records: list[HealthRecord] = []
        self._max_records = max_records
        self.last_analysis: AnalysisResult | None = None

    @property
    def records(self) -> tuple[HealthRecord, ...]:
        return tuple(self._records)

    @property
    def record_count(self) -> int:
        return len(self._records)

    @property
    def is_full(self) -> bool:
        return len(self._records) >= self._max_records

    def _extend(self, records: list[HealthRecord]) -> int:
        room = self._max_records - len(self._records)
        accepted = records[:max(room, 0)]
        if len(accepted) < len(records):
            logger.warning(
                "Record capacity %d reached; dropped %d records",
                self._max_records, len(records) - len(accepted),
            )
        self._records.extend(accepted)
        return len(accepted)

    def load(self, path: str | Path, fmt: str | None = None) -> ParseResult:
        """Parse ``path`` and append its records to the session.

        ``result.stored`` tells how many records fit; the rest are dropped.
        """
        result = load_health_file(path, fmt)
        if result.ok:
            result.stored = self._extend(result.records)
        return result

    def add_record(self, record: HealthRecord) -> bool:
        """Append one record. Returns False when the session is full."""
        if self.is_full:
            logger.warning("Record capacity %d reached; record not added", self._max_records)
            return False
        self._records.append(record)
        logger.info("Added manual record for %s", record.date)
        return True

    def analyze(self) -> AnalysisResult:
        """Recompute statistics, alerts and score from all held records."""
        if not self._records:
            raise NoDataError("No data loaded. Please load data first.")
        stats = compute_statistics(self._records)
        alerts = analyze_health(self._records, stats)
        score = calculate_health_score(stats)
        self.last_analysis = AnalysisResult(stats=stats, alerts=alerts, score=score)
        logger.info(
            "Analyzed %d records: score %d, %d alerts",
            stats.record_count, score, len(alerts),
        )
        return self.last_analysis

    def clear(self) -> None:
        self._records.clear()
        self.last_analysis = None
