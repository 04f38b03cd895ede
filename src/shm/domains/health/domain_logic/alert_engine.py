"""Threshold and trend rules that turn statistics into severity-tagged alerts.

Each vital category is an if/elif chain, so it contributes at most one
alert. Categories are evaluated independently, in a fixed order:
heart rate, blood pressure, blood sugar, temperature, oxygen, activity,
then the two three-record trend checks.

All formulas are deterministic and perform no I/O.
"""

from __future__ import annotations

from collections.abc import Sequence

from shm.domains.health.models import (
    MAX_ALERTS,
    Alert,
    HealthRecord,
    HealthStats,
    Severity,
)

# Minimum number of records before trend rules apply
TREND_WINDOW = 3

SEDENTARY_STEPS = 5000


class AlertCapacityError(Exception):
    """Raised when an analysis would hold more than MAX_ALERTS alerts."""


class _AlertList:
    """Append-only alert list bounded by MAX_ALERTS."""

    def __init__(self) -> None:
        self.items: list[Alert] = []

    def add(self, message: str, severity: Severity) -> None:
        if len(self.items) >= MAX_ALERTS:
            raise AlertCapacityError(f"Alert capacity of {MAX_ALERTS} exceeded")
        self.items.append(Alert(message=message, severity=severity))


# ---------------------------------------------------------------------------
# Per-category rules
# ---------------------------------------------------------------------------

def _check_heart_rate(stats: HealthStats, alerts: _AlertList) -> None:
    hr = stats.avg_heart_rate
    if hr > 100:
        severity = Severity.CRITICAL if hr > 120 else Severity.HIGH
        alerts.add(
            f"Average heart rate is {hr:.0f} BPM - Possible tachycardia detected",
            severity,
        )
    elif hr < 60:
        severity = Severity.CRITICAL if hr < 40 else Severity.MEDIUM
        alerts.add(f"Average heart rate is {hr:.0f} BPM - Bradycardia detected", severity)


def _check_blood_pressure(stats: HealthStats, alerts: _AlertList) -> None:
    sys_bp, dia_bp = stats.avg_systolic, stats.avg_diastolic
    reading = f"Average BP is {sys_bp:.0f}/{dia_bp:.0f} mmHg"
    if sys_bp > 140 or dia_bp > 90:
        alerts.add(f"{reading} - Hypertension (Stage 2)", Severity.CRITICAL)
    elif sys_bp > 130 or dia_bp > 80:
        alerts.add(f"{reading} - Hypertension (Stage 1)", Severity.HIGH)
    elif sys_bp < 90 or dia_bp < 60:
        alerts.add(f"{reading} - Hypotension detected", Severity.MEDIUM)


def _check_blood_sugar(stats: HealthStats, alerts: _AlertList) -> None:
    sugar = stats.avg_blood_sugar
    reading = f"Average blood sugar is {sugar:.0f} mg/dL"
    if sugar > 200:
        alerts.add(f"{reading} - Severe hyperglycemia", Severity.CRITICAL)
    elif sugar > 125:
        alerts.add(f"{reading} - Diabetes risk detected", Severity.HIGH)
    elif sugar < 70:
        alerts.add(f"{reading} - Hypoglycemia detected", Severity.HIGH)


def _check_temperature(stats: HealthStats, alerts: _AlertList) -> None:
    temp = stats.avg_temperature
    if temp > 100.4:
        alerts.add(f"Average temperature is {temp:.1f} F - Fever detected", Severity.HIGH)
    elif temp < 95.0:
        alerts.add(f"Average temperature is {temp:.1f} F - Hypothermia risk", Severity.CRITICAL)


def _check_oxygen(stats: HealthStats, alerts: _AlertList) -> None:
    oxygen = stats.avg_oxygen
    reading = f"Average oxygen saturation is {oxygen:.0f}%"
    if oxygen < 90:
        alerts.add(f"{reading} - Hypoxemia (Critical)", Severity.CRITICAL)
    elif oxygen < 95:
        alerts.add(f"{reading} - Low oxygen levels", Severity.MEDIUM)


def _check_activity(stats: HealthStats, alerts: _AlertList) -> None:
    avg_steps = stats.avg_daily_steps
    if avg_steps < SEDENTARY_STEPS:
        alerts.add(
            f"Average daily steps: {avg_steps} - Sedentary lifestyle detected",
            Severity.MEDIUM,
        )


def is_strictly_increasing(values: Sequence[float]) -> bool:
    """True when every consecutive pair strictly increases."""
    return all(a < b for a, b in zip(values, values[1:]))


def _check_trends(records: Sequence[HealthRecord], alerts: _AlertList) -> None:
    if len(records) < TREND_WINDOW:
        return
    window = records[-TREND_WINDOW:]

    if is_strictly_increasing([r.heart_rate for r in window]):
        alerts.add("Heart rate showing consistent upward trend", Severity.MEDIUM)
    if is_strictly_increasing([r.systolic_bp for r in window]):
        alerts.add("Blood pressure showing consistent upward trend", Severity.MEDIUM)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def analyze_health(records: Sequence[HealthRecord], stats: HealthStats) -> list[Alert]:
    """Apply every rule in order and return the resulting alerts.

    Args:
        records: The full record sequence, oldest first (used for trends).
        stats: Statistics computed from ``records``.

    Returns:
        Alerts in rule order. Empty when every vital is within range.
    """
    alerts = _AlertList()
    _check_heart_rate(stats, alerts)
    _check_blood_pressure(stats, alerts)
    _check_blood_sugar(stats, alerts)
    _check_temperature(stats, alerts)
    _check_oxygen(stats, alerts)
    _check_activity(stats, alerts)
    _check_trends(records, alerts)
    return alerts.items
