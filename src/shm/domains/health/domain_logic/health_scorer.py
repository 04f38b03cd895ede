"""Composite 0-100 health score from weighted deductions.

The score starts at 100. Each category deducts at most once (the first
matching band wins); categories are independent. High daily activity is the
only bonus. The result is clamped to [0, 100].
"""

from __future__ import annotations

from shm.domains.health.models import HealthStats

BASELINE_SCORE = 100

# (minimum score, label), checked top down
SCORE_BANDS = [
    (80, "Excellent"),
    (60, "Good"),
    (40, "Fair"),
    (0, "Poor"),
]


def _clamp(value: int, lo: int = 0, hi: int = 100) -> int:
    return max(lo, min(hi, value))


def _heart_rate_deduction(hr: float) -> int:
    if hr < 60 or hr > 100:
        return 15
    if hr < 65 or hr > 95:
        return 5
    return 0


def _blood_pressure_deduction(sys_bp: float, dia_bp: float) -> int:
    if sys_bp > 140 or dia_bp > 90:
        return 20
    if sys_bp > 130 or dia_bp > 80:
        return 10
    if sys_bp < 90 or dia_bp < 60:
        return 15
    return 0


def _blood_sugar_deduction(sugar: float) -> int:
    if sugar > 200 or sugar < 70:
        return 25
    if sugar > 125:
        return 15
    return 0


def _temperature_deduction(temp: float) -> int:
    if temp > 100.4 or temp < 95.0:
        return 15
    if temp > 99.5 or temp < 97.0:
        return 5
    return 0


def _oxygen_deduction(oxygen: float) -> int:
    if oxygen < 90:
        return 25
    if oxygen < 95:
        return 10
    return 0


def _activity_adjustment(avg_steps: int) -> int:
    """Negative deduction is a bonus."""
    if avg_steps < 5000:
        return 10
    if avg_steps > 10000:
        return -5
    return 0


def score_breakdown(stats: HealthStats) -> dict[str, int]:
    """Per-category deductions (positive = points lost)."""
    return {
        "heart_rate": _heart_rate_deduction(stats.avg_heart_rate),
        "blood_pressure": _blood_pressure_deduction(stats.avg_systolic, stats.avg_diastolic),
        "blood_sugar": _blood_sugar_deduction(stats.avg_blood_sugar),
        "temperature": _temperature_deduction(stats.avg_temperature),
        "oxygen": _oxygen_deduction(stats.avg_oxygen),
        "activity": _activity_adjustment(stats.avg_daily_steps),
    }


def calculate_health_score(stats: HealthStats) -> int:
    """Score ``stats`` from 0 (poor) to 100 (excellent)."""
    score = BASELINE_SCORE - sum(score_breakdown(stats).values())
    return _clamp(score)


def classify_score(score: int) -> str:
    """Display band for a score: Excellent, Good, Fair or Poor."""
    for minimum, label in SCORE_BANDS:
        if score >= minimum:
            return label
    return SCORE_BANDS[-1][1]
