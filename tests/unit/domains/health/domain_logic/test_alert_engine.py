"""Tests for the alert engine threshold bands, rule order and trend checks."""

from __future__ import annotations

import pytest

from shm.domains.health.domain_logic.alert_engine import (
    AlertCapacityError,
    _AlertList,
    analyze_health,
    is_strictly_increasing,
)
from shm.domains.health.domain_logic.statistics import compute_statistics
from shm.domains.health.models import MAX_ALERTS, HealthRecord, HealthStats, Severity


def _stats(**overrides) -> HealthStats:
    values = {
        "avg_heart_rate": 75.0,
        "avg_systolic": 115.0,
        "avg_diastolic": 75.0,
        "avg_blood_sugar": 95.0,
        "avg_temperature": 98.4,
        "avg_oxygen": 98.0,
        "total_steps": 8000,
        "record_count": 1,
    }
    values.update(overrides)
    return HealthStats(**values)


def _alerts_for(**overrides):
    return analyze_health([], _stats(**overrides))


def _matching(alerts, keyword: str):
    return [a for a in alerts if keyword in a.message]


class TestHealthyBaseline:
    def test_no_alerts_when_all_in_range(self):
        assert _alerts_for() == []


class TestHeartRate:
    def test_above_120_is_critical_only(self):
        alerts = _matching(_alerts_for(avg_heart_rate=125), "heart rate")
        assert len(alerts) == 1
        assert alerts[0].severity == Severity.CRITICAL
        assert "125 BPM" in alerts[0].message
        assert "tachycardia" in alerts[0].message

    def test_above_100_is_high(self):
        alerts = _matching(_alerts_for(avg_heart_rate=110), "heart rate")
        assert [a.severity for a in alerts] == [Severity.HIGH]

    def test_exactly_100_no_alert(self):
        assert _matching(_alerts_for(avg_heart_rate=100), "heart rate") == []

    def test_exactly_120_is_high(self):
        alerts = _matching(_alerts_for(avg_heart_rate=120), "heart rate")
        assert [a.severity for a in alerts] == [Severity.HIGH]

    def test_below_40_is_critical(self):
        alerts = _matching(_alerts_for(avg_heart_rate=35), "heart rate")
        assert [a.severity for a in alerts] == [Severity.CRITICAL]
        assert "Bradycardia" in alerts[0].message

    def test_below_60_is_medium(self):
        alerts = _matching(_alerts_for(avg_heart_rate=55), "heart rate")
        assert [a.severity for a in alerts] == [Severity.MEDIUM]

    def test_exactly_60_no_alert(self):
        assert _matching(_alerts_for(avg_heart_rate=60), "heart rate") == []


class TestBloodPressure:
    def test_stage_2(self):
        alerts = _matching(_alerts_for(avg_systolic=145), "BP")
        assert len(alerts) == 1
        assert alerts[0].severity == Severity.CRITICAL
        assert "Stage 2" in alerts[0].message

    def test_diastolic_alone_triggers_stage_2(self):
        alerts = _matching(_alerts_for(avg_diastolic=91), "BP")
        assert "Stage 2" in alerts[0].message

    def test_stage_1(self):
        alerts = _matching(_alerts_for(avg_systolic=135), "BP")
        assert [a.severity for a in alerts] == [Severity.HIGH]
        assert "Stage 1" in alerts[0].message
        assert "135/75 mmHg" in alerts[0].message

    def test_hypotension(self):
        alerts = _matching(_alerts_for(avg_systolic=85), "BP")
        assert [a.severity for a in alerts] == [Severity.MEDIUM]
        assert "Hypotension" in alerts[0].message

    def test_high_systolic_with_low_diastolic_is_hypertension(self):
        alerts = _matching(_alerts_for(avg_systolic=150, avg_diastolic=55), "BP")
        assert len(alerts) == 1
        assert "Stage 2" in alerts[0].message

    def test_boundaries_no_alert(self):
        assert _matching(_alerts_for(avg_systolic=130, avg_diastolic=80), "BP") == []
        assert _matching(_alerts_for(avg_systolic=90, avg_diastolic=60), "BP") == []


class TestBloodSugar:
    @pytest.mark.parametrize(
        ("value", "severity", "text"),
        [
            (210, Severity.CRITICAL, "Severe hyperglycemia"),
            (150, Severity.HIGH, "Diabetes risk"),
            (60, Severity.HIGH, "Hypoglycemia"),
        ],
    )
    def test_bands(self, value, severity, text):
        alerts = _matching(_alerts_for(avg_blood_sugar=value), "sugar")
        assert len(alerts) == 1
        assert alerts[0].severity == severity
        assert text in alerts[0].message

    @pytest.mark.parametrize("value", [70, 125])
    def test_boundaries_no_alert(self, value):
        assert _matching(_alerts_for(avg_blood_sugar=value), "sugar") == []


class TestTemperature:
    def test_fever(self):
        alerts = _matching(_alerts_for(avg_temperature=101.26), "temperature")
        assert [a.severity for a in alerts] == [Severity.HIGH]
        assert "101.3 F" in alerts[0].message

    def test_hypothermia(self):
        alerts = _matching(_alerts_for(avg_temperature=94.0), "temperature")
        assert [a.severity for a in alerts] == [Severity.CRITICAL]

    @pytest.mark.parametrize("value", [100.4, 95.0])
    def test_boundaries_no_alert(self, value):
        assert _matching(_alerts_for(avg_temperature=value), "temperature") == []


class TestOxygen:
    def test_exactly_95_no_alert(self):
        assert _matching(_alerts_for(avg_oxygen=95.0), "oxygen") == []

    def test_just_below_95_is_medium(self):
        alerts = _matching(_alerts_for(avg_oxygen=94.9), "oxygen")
        assert [a.severity for a in alerts] == [Severity.MEDIUM]
        assert "Low oxygen" in alerts[0].message

    def test_below_90_is_critical(self):
        alerts = _matching(_alerts_for(avg_oxygen=88), "oxygen")
        assert [a.severity for a in alerts] == [Severity.CRITICAL]
        assert "88%" in alerts[0].message


class TestActivity:
    def test_sedentary(self):
        alerts = _matching(_alerts_for(total_steps=8000, record_count=2), "steps")
        assert len(alerts) == 1
        assert alerts[0].severity == Severity.MEDIUM
        assert "Average daily steps: 4000" in alerts[0].message

    def test_exactly_5000_no_alert(self):
        assert _matching(_alerts_for(total_steps=10000, record_count=2), "steps") == []

    def test_integer_division_applies(self):
        # 9999 / 2 = 4999.5 truncates to 4999
        assert len(_matching(_alerts_for(total_steps=9999, record_count=2), "steps")) == 1


class TestTrends:
    def _records(self, hrs, systolics):
        return [
            HealthRecord(f"d{i}", hr, sys_bp, 75, 95, 98.4, 98, 8000)
            for i, (hr, sys_bp) in enumerate(zip(hrs, systolics))
        ]

    def test_increasing_heart_rate_and_bp(self):
        records = self._records([70, 72, 74], [110, 112, 114])
        alerts = analyze_health(records, compute_statistics(records))
        messages = [a.message for a in alerts]
        assert messages == [
            "Heart rate showing consistent upward trend",
            "Blood pressure showing consistent upward trend",
        ]
        assert all(a.severity == Severity.MEDIUM for a in alerts)

    def test_equal_values_not_a_trend(self):
        records = self._records([70, 72, 72], [110, 110, 111])
        assert analyze_health(records, compute_statistics(records)) == []

    def test_only_last_three_considered(self):
        records = self._records([90, 60, 70, 72, 74], [130, 100, 100, 100, 100])
        alerts = analyze_health(records, compute_statistics(records))
        assert [a.message for a in alerts] == ["Heart rate showing consistent upward trend"]

    def test_needs_three_records(self):
        records = self._records([70, 80], [110, 120])
        assert analyze_health(records, compute_statistics(records)) == []

    def test_is_strictly_increasing(self):
        assert is_strictly_increasing([1, 2, 3])
        assert not is_strictly_increasing([1, 2, 2])
        assert not is_strictly_increasing([3, 2, 4])


class TestRuleOrder:
    def test_categories_in_fixed_order(self):
        records = [
            HealthRecord("a", 110, 140, 95, 210, 101.0, 85, 100),
            HealthRecord("b", 120, 150, 95, 220, 101.0, 85, 100),
            HealthRecord("c", 130, 160, 95, 230, 101.0, 85, 100),
        ]
        alerts = analyze_health(records, compute_statistics(records))
        assert len(alerts) == 8
        keywords = ["heart rate", "BP", "sugar", "temperature", "oxygen", "steps",
                    "Heart rate showing", "Blood pressure showing"]
        for alert, keyword in zip(alerts, keywords):
            assert keyword in alert.message

    def test_severity_always_in_range(self):
        records = [HealthRecord("a", 0, 0, 0, 0, 0.0, 0, 0)]
        for alert in analyze_health(records, compute_statistics(records)):
            assert 1 <= int(alert.severity) <= 4


class TestTwoDayExample:
    def test_stage_1_and_no_oxygen_alert(self):
        records = [
            HealthRecord("2025-01-01", 72, 118, 78, 95, 98.2, 98, 8500),
            HealthRecord("2025-01-02", 122, 152, 99, 195, 99.8, 93, 3500),
        ]
        alerts = analyze_health(records, compute_statistics(records))
        messages = [a.message for a in alerts]
        assert "Average BP is 135/88 mmHg - Hypertension (Stage 1)" in messages
        assert _matching(alerts, "oxygen") == []
        assert _matching(alerts, "heart rate") == []


class TestCapacity:
    def test_exceeding_capacity_raises(self):
        alerts = _AlertList()
        for _ in range(MAX_ALERTS):
            alerts.add("x", Severity.LOW)
        with pytest.raises(AlertCapacityError):
            alerts.add("one too many", Severity.LOW)
