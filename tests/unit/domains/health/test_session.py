"""Tests for HealthSession: record accumulation, capacity and analysis."""

from __future__ import annotations

from pathlib import Path

import pytest

from shm.domains.health.models import HealthRecord, Severity
from shm.domains.health.session import HealthSession, NoDataError


def _record(date: str = "2025-01-03", hr: int = 80) -> HealthRecord:
    return HealthRecord(date, hr, 120, 80, 100, 98.6, 97, 7000)


class TestLoad:
    def test_load_csv(self, session: HealthSession, csv_file: Path):
        result = session.load(csv_file)
        assert result.ok
        assert session.record_count == 2

    def test_loads_accumulate(self, session: HealthSession, csv_file: Path, txt_file: Path):
        session.load(csv_file)
        session.load(txt_file)
        assert session.record_count == 4
        assert [r.date for r in session.records] == [
            "2025-01-01", "2025-01-02", "2025-01-01", "2025-01-02",
        ]

    def test_failed_load_leaves_records(self, session: HealthSession, csv_file: Path, tmp_path: Path):
        session.load(csv_file)
        result = session.load(tmp_path / "missing.csv")
        assert not result.ok
        assert session.record_count == 2

    def test_load_truncates_at_capacity(self, csv_file: Path):
        session = HealthSession(max_records=3)
        first = session.load(csv_file)
        second = session.load(csv_file)
        assert (first.stored, first.dropped) == (2, 0)
        assert (second.stored, second.dropped) == (1, 1)
        assert session.record_count == 3
        assert session.is_full

    def test_load_into_full_session_stores_nothing(self, csv_file: Path):
        session = HealthSession(max_records=2)
        session.load(csv_file)
        result = session.load(csv_file)
        assert result.ok
        assert result.stored == 0
        assert result.dropped == 2
        assert session.record_count == 2


class TestAddRecord:
    def test_add_record(self, session: HealthSession):
        assert session.add_record(_record())
        assert session.records == (_record(),)

    def test_add_fails_when_full(self):
        session = HealthSession(max_records=1)
        assert session.add_record(_record("a"))
        assert not session.add_record(_record("b"))
        assert session.record_count == 1


class TestAnalyze:
    def test_no_data_raises(self, session: HealthSession):
        with pytest.raises(NoDataError):
            session.analyze()

    def test_two_day_example(self, session: HealthSession, csv_file: Path):
        session.load(csv_file)
        analysis = session.analyze()
        assert analysis.stats.avg_heart_rate == 97
        assert analysis.stats.avg_systolic == 135
        assert analysis.stats.avg_oxygen == 95.5
        assert analysis.stats.total_steps == 12000
        assert analysis.score == 70
        assert any(
            "Stage 1" in a.message and a.severity == Severity.HIGH for a in analysis.alerts
        )
        assert session.last_analysis is analysis

    def test_reanalysis_reflects_new_records(self, session: HealthSession, csv_file: Path):
        session.load(csv_file)
        first = session.analyze()
        session.add_record(_record(hr=130))
        second = session.analyze()
        assert first.stats.record_count == 2
        assert second.stats.record_count == 3
        assert second.stats.avg_heart_rate == pytest.approx((72 + 122 + 130) / 3)

    def test_clear(self, session: HealthSession, csv_file: Path):
        session.load(csv_file)
        session.analyze()
        session.clear()
        assert session.record_count == 0
        assert session.last_analysis is None
