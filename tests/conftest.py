"""Shared test fixtures for Smart Health Monitor tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.setenv("SHM_LOG_LEVEL", "debug")
    monkeypatch.delenv("MAX_RECORDS", raising=False)

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

# ---------------------------------------------------------------------------
# Sample input text
# ---------------------------------------------------------------------------

CSV_HEADER = "Date,HeartRate,SystolicBP,DiastolicBP,BloodSugar,Temperature,OxygenLevel,Steps\n"

TWO_DAY_CSV = (
    CSV_HEADER
    + "2025-01-01,72,118,78,95,98.2,98,8500\n"
    + "2025-01-02,122,152,99,195,99.8,93,3500\n"
)

TWO_BLOCK_TXT = """\
Date: 2025-01-01
Heart Rate: 72
Blood Pressure: 118/78
Blood Sugar: 95
Temperature: 98.2
Oxygen Level: 98
Steps: 8500

Date: 2025-01-02
Heart Rate: 122
Blood Pressure: 152/99
Blood Sugar: 195
Temperature: 99.8
Oxygen Level: 93
Steps: 3500
"""


@pytest.fixture
def csv_file(tmp_path: Path) -> Path:
    path = tmp_path / "readings.csv"
    path.write_text(TWO_DAY_CSV)
    return path


@pytest.fixture
def txt_file(tmp_path: Path) -> Path:
    path = tmp_path / "readings.txt"
    path.write_text(TWO_BLOCK_TXT)
    return path


@pytest.fixture
def session():
    """Create an empty HealthSession."""
    from shm.domains.health.session import HealthSession

    return HealthSession()


@pytest.fixture
def settings(tmp_path: Path):
    """Settings rooted at a temporary data directory."""
    from shm.core.config.settings import Settings

    return Settings(data_dir=str(tmp_path))
