"""Vital-sign record parsers for the delimited and labeled-block file formats.

Delimited (``.csv``)::

    Date,HeartRate,SystolicBP,DiastolicBP,BloodSugar,Temperature,OxygenLevel,Steps
    2025-10-26,72,118,78,95,98.2,98,8500

Labeled-block (``.txt``)::

    Date: 2025-10-26
    Heart Rate: 72
    Blood Pressure: 118/78
    Blood Sugar: 95
    Temperature: 98.2
    Oxygen Level: 98
    Steps: 8500

Malformed entries are skipped, never raised. A load that yields no records
is reported through ``ParseResult.ok`` exactly like an unreadable file.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from shm.domains.health.models import MAX_RECORDS, HealthRecord, ParseResult

logger = logging.getLogger(__name__)

FORMAT_CSV = "csv"
FORMAT_TXT = "txt"

# Lines shorter than this (after stripping the line ending) are noise.
_MIN_LINE_LENGTH = 5
# date + heart rate + systolic + diastolic + one more
_MIN_DELIMITED_FIELDS = 5

_INT_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

# (field name, value pattern) in column order after the date
_DELIMITED_COLUMNS = [
    ("heart_rate", _INT_RE),
    ("systolic_bp", _INT_RE),
    ("diastolic_bp", _INT_RE),
    ("blood_sugar", _INT_RE),
    ("temperature", _FLOAT_RE),
    ("oxygen_level", _INT_RE),
    ("steps", _INT_RE),
]

# Labels in the order they must appear within a block
_LABELS = [
    "Date:",
    "Heart Rate:",
    "Blood Pressure:",
    "Blood Sugar:",
    "Temperature:",
    "Oxygen Level:",
    "Steps:",
]
_FIELDS_PER_BLOCK = len(_LABELS)


def _strip_line_ending(line: str) -> str:
    """Cut the line at its first carriage return or newline."""
    return re.split(r"[\r\n]", line, maxsplit=1)[0]


def _convert(text: str) -> float:
    try:
        return int(text)
    except ValueError:
        return float(text)


# ---------------------------------------------------------------------------
# Delimited format
# ---------------------------------------------------------------------------

def _scan_delimited_line(line: str) -> tuple[int, dict]:
    """Scan fields left to right, stopping at the first one that fails.

    Returns ``(fields_scanned, values)``. The date counts as one field.
    """
    comma = line.find(",")
    date = line if comma < 0 else line[:comma]
    if not date:
        return 0, {}

    values: dict = {"date": date}
    scanned = 1
    if comma < 0:
        return scanned, values

    pos = comma
    for name, pattern in _DELIMITED_COLUMNS:
        if pos >= len(line) or line[pos] != ",":
            break
        match = pattern.match(line, pos + 1)
        if match is None:
            break
        values[name] = _convert(match.group(1))
        scanned += 1
        pos = match.end()

    return scanned, values


def parse_delimited_line(line: str) -> HealthRecord | None:
    """Parse one data line, or return None if it does not qualify."""
    line = _strip_line_ending(line)
    if len(line) < _MIN_LINE_LENGTH:
        return None

    scanned, values = _scan_delimited_line(line)
    if scanned < _MIN_DELIMITED_FIELDS:
        return None

    values["temperature"] = float(values.get("temperature", 0.0))
    for name, _ in _DELIMITED_COLUMNS:
        if name != "temperature":
            values[name] = int(values.get(name, 0))
    return HealthRecord(**values)


def parse_delimited_text(text: str) -> tuple[list[HealthRecord], int]:
    """Parse delimited text into records.

    The first line is always treated as a header and discarded.

    Returns:
        ``(records, skipped)`` where ``skipped`` counts non-blank lines
        that were rejected.
    """
    lines = text.split("\n")
    records: list[HealthRecord] = []
    skipped = 0

    for line in lines[1:]:
        if len(records) >= MAX_RECORDS:
            break
        record = parse_delimited_line(line)
        if record is not None:
            records.append(record)
        elif len(_strip_line_ending(line)) >= _MIN_LINE_LENGTH:
            skipped += 1

    return records, skipped


# ---------------------------------------------------------------------------
# Labeled-block format
# ---------------------------------------------------------------------------

class _Block:
    """In-progress labeled block."""

    def __init__(self) -> None:
        self.values: dict = {}
        self.fields_read = 0

    @property
    def complete(self) -> bool:
        return self.fields_read == _FIELDS_PER_BLOCK

    def to_record(self) -> HealthRecord:
        return HealthRecord(**self.values)


def _value_after(line: str, label: str) -> str:
    return line[line.index(label) + len(label):].strip()


def _int_value(text: str) -> int:
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else 0


def _float_value(text: str) -> float:
    match = _FLOAT_RE.match(text)
    return float(match.group(1)) if match else 0.0


def _apply_label(block: _Block, index: int, value: str) -> None:
    """Store the value for label ``index`` on the block."""
    if index == 1:
        block.values["heart_rate"] = _int_value(value)
    elif index == 2:
        systolic, _, diastolic = value.partition("/")
        block.values["systolic_bp"] = _int_value(systolic)
        block.values["diastolic_bp"] = _int_value(diastolic)
    elif index == 3:
        block.values["blood_sugar"] = _int_value(value)
    elif index == 4:
        block.values["temperature"] = _float_value(value)
    elif index == 5:
        block.values["oxygen_level"] = _int_value(value)
    elif index == 6:
        block.values["steps"] = _int_value(value)
    block.fields_read = index + 1


def parse_labeled_text(text: str) -> tuple[list[HealthRecord], int]:
    """Parse labeled-block text into records.

    A block is committed when the next ``Date:`` line arrives or input ends,
    and only if all seven labels were read for it.

    Returns:
        ``(records, skipped)`` where ``skipped`` counts discarded blocks.
    """
    records: list[HealthRecord] = []
    skipped = 0
    block: _Block | None = None

    for raw in text.split("\n"):
        if len(records) >= MAX_RECORDS:
            break
        line = _strip_line_ending(raw)

        if _LABELS[0] in line and len(line) > 6:
            if block is not None:
                if block.complete:
                    records.append(block.to_record())
                else:
                    skipped += 1
            block = _Block()
            tokens = _value_after(line, _LABELS[0]).split()
            block.values["date"] = tokens[0] if tokens else ""
            block.fields_read = 1
            continue

        if block is None:
            continue

        for index in range(1, _FIELDS_PER_BLOCK):
            label = _LABELS[index]
            if label in line and block.fields_read >= index:
                _apply_label(block, index, _value_after(line, label))
                break

    if block is not None:
        if block.complete and len(records) < MAX_RECORDS:
            records.append(block.to_record())
        elif not block.complete:
            skipped += 1

    return records, skipped


# ---------------------------------------------------------------------------
# File loading
# ---------------------------------------------------------------------------

_PARSERS = {
    FORMAT_CSV: parse_delimited_text,
    FORMAT_TXT: parse_labeled_text,
}


def detect_format(path: str | Path) -> str:
    """Pick a format from the file extension; unknown extensions are delimited."""
    return FORMAT_TXT if Path(path).suffix.lower() == ".txt" else FORMAT_CSV


def _load(path: str | Path, fmt: str) -> ParseResult:
    result = ParseResult(path=str(path), fmt=fmt)
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            text = f.read()
    except OSError as exc:
        result.error = f"Could not read {path}: {exc}"
        logger.warning("Failed to read health data file %s: %s", path, exc)
        return result

    records, skipped = _PARSERS[fmt](text)
    result.records = records
    result.skipped = skipped
    if skipped:
        logger.debug("Skipped %d malformed %s entries in %s", skipped, fmt, path)
    if not records:
        result.error = f"No valid health records found in {path}"
        logger.warning("No valid %s records in %s", fmt, path)
    else:
        logger.info("Loaded %d %s records from %s", len(records), fmt, path)
    return result


def load_delimited_file(path: str | Path) -> ParseResult:
    """Load a delimited (CSV) health data file."""
    return _load(path, FORMAT_CSV)


def load_labeled_file(path: str | Path) -> ParseResult:
    """Load a labeled-block (TXT) health data file."""
    return _load(path, FORMAT_TXT)


def load_health_file(path: str | Path, fmt: str | None = None) -> ParseResult:
    """Load a health data file in ``fmt``, or the format implied by its extension."""
    fmt = (fmt or detect_format(path)).lower()
    if fmt not in _PARSERS:
        return ParseResult(
            path=str(path),
            fmt=fmt,
            error=f"Unknown format {fmt!r}; expected one of {sorted(_PARSERS)}",
        )
    return _load(path, fmt)
