"""Text rendering for analysis reports, score bars and the trends table.

The NORMAL/ABNORMAL/LOW/ELEVATED tags here are display-only and use their
own breakpoints, separate from the alert engine's severity rules.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from shm.domains.health.domain_logic.health_scorer import classify_score
from shm.domains.health.models import Alert, HealthRecord, HealthStats, Severity

logger = logging.getLogger(__name__)

SCORE_BAR_SEGMENTS = 20
TRENDS_LIMIT = 10

_SEVERITY_PREFIX = {
    Severity.CRITICAL: "[CRITICAL]",
    Severity.HIGH: "[HIGH]    ",
    Severity.MEDIUM: "[MEDIUM]  ",
    Severity.LOW: "[LOW]     ",
}

_FILE_DISCLAIMER = [
    "This report is generated by an automated analysis system",
    "and is NOT a substitute for professional medical advice.",
    "Please consult healthcare professionals for proper",
    "diagnosis and treatment.",
]


def _line(char: str, length: int) -> str:
    return char * length


# ---------------------------------------------------------------------------
# Display tags
# ---------------------------------------------------------------------------

def heart_rate_tag(avg: float) -> str:
    return "NORMAL" if 60 <= avg <= 100 else "ABNORMAL"


def blood_pressure_tag(systolic: float, diastolic: float) -> str:
    return "NORMAL" if systolic < 120 and diastolic < 80 else "ELEVATED"


def blood_sugar_tag(avg: float) -> str:
    return "NORMAL" if 70 <= avg <= 125 else "ABNORMAL"


def temperature_tag(avg: float) -> str:
    return "NORMAL" if 97.0 <= avg <= 99.0 else "ABNORMAL"


def oxygen_tag(avg: float) -> str:
    return "NORMAL" if avg >= 95 else "LOW"


def vital_status_tags(stats: HealthStats) -> dict[str, str]:
    """Display tag for each averaged vital."""
    return {
        "heart_rate": heart_rate_tag(stats.avg_heart_rate),
        "blood_pressure": blood_pressure_tag(stats.avg_systolic, stats.avg_diastolic),
        "blood_sugar": blood_sugar_tag(stats.avg_blood_sugar),
        "temperature": temperature_tag(stats.avg_temperature),
        "oxygen": oxygen_tag(stats.avg_oxygen),
    }


# ---------------------------------------------------------------------------
# Score
# ---------------------------------------------------------------------------

def render_score_bar(score: int) -> str:
    """``[####----...]`` with one filled segment per 5 points."""
    filled = min(score // 5, SCORE_BAR_SEGMENTS)
    return "[" + "#" * filled + "-" * (SCORE_BAR_SEGMENTS - filled) + "]"


def _score_status(score: int) -> str:
    label = classify_score(score).upper()
    return f"{label}!" if label == "EXCELLENT" else label


def render_score(score: int) -> str:
    lines = [
        _line("-", 50),
        "          OVERALL HEALTH SCORE",
        _line("-", 50),
        f"  {render_score_bar(score)}",
        f"          {score}/100 - {_score_status(score)}",
        _line("-", 50),
    ]
    return "\n".join(lines)


def format_alert(alert: Alert) -> str:
    return f"{_SEVERITY_PREFIX[alert.severity]} {alert.message}"


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------

def render_report(stats: HealthStats, alerts: Sequence[Alert], score: int) -> str:
    """Console analysis report."""
    tags = vital_status_tags(stats)
    lines = [
        _line("=", 60),
        "              HEALTH ANALYSIS REPORT",
        _line("=", 60),
        "",
        f"VITAL STATISTICS (Based on {stats.record_count} records)",
        _line("-", 60),
        f"  Heart Rate:      {stats.avg_heart_rate:.0f} BPM [{tags['heart_rate']}]",
        f"  Blood Pressure:  {stats.avg_systolic:.0f}/{stats.avg_diastolic:.0f} mmHg"
        f" [{tags['blood_pressure']}]",
        f"  Blood Sugar:     {stats.avg_blood_sugar:.0f} mg/dL [{tags['blood_sugar']}]",
        f"  Temperature:     {stats.avg_temperature:.1f} F [{tags['temperature']}]",
        f"  Oxygen Level:    {stats.avg_oxygen:.0f}% [{tags['oxygen']}]",
        f"  Total Steps:     {stats.total_steps} steps",
        f"  Avg Daily Steps: {stats.avg_daily_steps} steps/day",
        "",
        render_score(score),
    ]

    if alerts:
        lines += ["", "HEALTH ALERTS", _line("-", 60)]
        lines += [f"  {format_alert(a)}" for a in alerts]
    else:
        lines += ["", "[SUCCESS] All vitals are within normal ranges! Keep up the good work!"]

    return "\n".join(lines) + "\n"


def render_file_report(
    stats: HealthStats,
    alerts: Sequence[Alert],
    score: int,
    generated_at: datetime | None = None,
) -> str:
    """Exported report text: same content as the console report plus a timestamp."""
    generated_at = generated_at or datetime.now()
    status = classify_score(score).upper()
    if status == "POOR":
        status = "POOR - NEEDS ATTENTION"

    lines = [
        _line("=", 60),
        "           SMART HEALTH MONITOR - ANALYSIS REPORT",
        _line("=", 60),
        f"Generated: {generated_at.strftime('%a %b %d %H:%M:%S %Y')}",
        "",
        f"Based on {stats.record_count} health records",
        "",
        "VITAL STATISTICS SUMMARY",
        _line("-", 60),
        f"Average Heart Rate:      {stats.avg_heart_rate:.0f} BPM",
        f"Average Blood Pressure:  {stats.avg_systolic:.0f}/{stats.avg_diastolic:.0f} mmHg",
        f"Average Blood Sugar:     {stats.avg_blood_sugar:.0f} mg/dL",
        f"Average Temperature:     {stats.avg_temperature:.1f} F",
        f"Average Oxygen Level:    {stats.avg_oxygen:.0f}%",
        f"Total Steps:             {stats.total_steps} steps",
        f"Average Daily Steps:     {stats.avg_daily_steps} steps/day",
        "",
        f"OVERALL HEALTH SCORE: {score}/100",
        f"Status: {status}",
        "",
    ]

    if alerts:
        lines += ["HEALTH ALERTS", _line("-", 60)]
        lines += [format_alert(a) for a in alerts]
        lines.append("")

    lines += ["DISCLAIMER", _line("-", 60)]
    lines += _FILE_DISCLAIMER
    lines.append(_line("=", 60))
    return "\n".join(lines) + "\n"


def export_report(
    stats: HealthStats,
    alerts: Sequence[Alert],
    score: int,
    path: str | Path,
    generated_at: datetime | None = None,
) -> bool:
    """Write the file report to ``path``. Returns False if it cannot be written."""
    text = render_file_report(stats, alerts, score, generated_at)
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as exc:
        logger.warning("Failed to write report to %s: %s", path, exc)
        return False
    logger.info("Exported health report to %s", path)
    return True


# ---------------------------------------------------------------------------
# Trends
# ---------------------------------------------------------------------------

def render_trends(records: Sequence[HealthRecord], limit: int = TRENDS_LIMIT) -> str:
    """Fixed-width table of the most recent ``limit`` records, oldest first."""
    recent = list(records[-limit:]) if limit > 0 else []
    lines = [
        _line("=", 70),
        "                  HEALTH TRENDS",
        _line("=", 70),
        "",
        f"Last {len(recent)} Records:",
        _line("-", 70),
        f"{'Date':<12}  HR   BP       Sugar  Temp   SpO2  Steps",
        _line("-", 70),
    ]
    for r in recent:
        bp = f"{r.systolic_bp:3d}/{r.diastolic_bp:<3d}"
        lines.append(
            f"{r.date:<12}  {r.heart_rate:3d}  {bp}  {r.blood_sugar:3d}    "
            f"{r.temperature:.1f}   {r.oxygen_level:2d}%  {r.steps:5d}"
        )
    lines.append(_line("-", 70))
    return "\n".join(lines) + "\n"
