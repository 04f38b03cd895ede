"""Health record, statistics and alert models shared by the analysis pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


# ---------------------------------------------------------------------------
# Capacity bounds
# ---------------------------------------------------------------------------

MAX_RECORDS = 1000
MAX_ALERTS = 50


class Severity(IntEnum):
    """Alert severity band, ordinal 1-4."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    @property
    def label(self) -> str:
        return self.name


# ---------------------------------------------------------------------------
# Record and derived types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HealthRecord:
    """One entry's vitals.

    Absent numeric fields are stored as 0. A measured zero and a missing
    value are indistinguishable once parsed.
    """

    date: str
    heart_rate: int = 0        # BPM
    systolic_bp: int = 0       # mmHg
    diastolic_bp: int = 0      # mmHg
    blood_sugar: int = 0       # mg/dL
    temperature: float = 0.0   # °F
    oxygen_level: int = 0      # % saturation
    steps: int = 0             # daily count

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "heart_rate": self.heart_rate,
            "systolic_bp": self.systolic_bp,
            "diastolic_bp": self.diastolic_bp,
            "blood_sugar": self.blood_sugar,
            "temperature": self.temperature,
            "oxygen_level": self.oxygen_level,
            "steps": self.steps,
        }


@dataclass(frozen=True)
class HealthStats:
    """Population averages over a record sequence."""

    avg_heart_rate: float
    avg_systolic: float
    avg_diastolic: float
    avg_blood_sugar: float
    avg_temperature: float
    avg_oxygen: float
    total_steps: int
    record_count: int

    @property
    def avg_daily_steps(self) -> int:
        """Average steps per record, truncated toward zero."""
        return int(self.total_steps / self.record_count)

    def to_dict(self) -> dict:
        return {
            "avg_heart_rate": round(self.avg_heart_rate, 2),
            "avg_systolic": round(self.avg_systolic, 2),
            "avg_diastolic": round(self.avg_diastolic, 2),
            "avg_blood_sugar": round(self.avg_blood_sugar, 2),
            "avg_temperature": round(self.avg_temperature, 2),
            "avg_oxygen": round(self.avg_oxygen, 2),
            "total_steps": self.total_steps,
            "avg_daily_steps": self.avg_daily_steps,
            "record_count": self.record_count,
        }


@dataclass(frozen=True)
class Alert:
    """A severity-tagged finding from one analysis call."""

    message: str
    severity: Severity

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "severity": int(self.severity),
            "severity_label": self.severity.label,
        }


@dataclass
class ParseResult:
    """Outcome of loading one input file.

    An unreadable file and a file with no valid records both leave
    ``records`` empty; callers only need ``ok``.
    """

    path: str
    fmt: str
    records: list[HealthRecord] = field(default_factory=list)
    skipped: int = 0
    error: str = ""
    # Set by HealthSession.load: how many parsed records fit in the session.
    stored: int = 0

    @property
    def dropped(self) -> int:
        return len(self.records) - self.stored

    @property
    def ok(self) -> bool:
        return bool(self.records)


@dataclass
class AnalysisResult:
    """Statistics, alerts and score from one analysis request."""

    stats: HealthStats
    alerts: list[Alert]
    score: int

    def to_dict(self) -> dict:
        return {
            "stats": self.stats.to_dict(),
            "alerts": [a.to_dict() for a in self.alerts],
            "score": self.score,
        }
