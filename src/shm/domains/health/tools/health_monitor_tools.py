"""MCP tools for loading, analyzing and reporting on personal health records.

One tool per monitor action: load a data file, add a reading by hand,
analyze, view recent trends, get advice, export a report, and create sample
data. Records accumulate in a single HealthSession for the server's lifetime.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from fastmcp import Context, FastMCP

from shm.domains.health.connectors.record_parser import FORMAT_CSV, FORMAT_TXT
from shm.domains.health.connectors.sample_data import write_sample_csv, write_sample_txt
from shm.domains.health.domain_logic.advice import advice_flags, generate_advice
from shm.domains.health.domain_logic.health_scorer import classify_score
from shm.domains.health.domain_logic.report_renderer import (
    export_report,
    render_report,
    render_trends,
    vital_status_tags,
)
from shm.domains.health.models import HealthRecord
from shm.domains.health.session import HealthSession, NoDataError

if TYPE_CHECKING:
    from shm.core.config.settings import Settings

logger = logging.getLogger(__name__)


def _error(message: str) -> str:
    return json.dumps({"status": "error", "message": message})


def register_health_monitor_tools(
    mcp: FastMCP,
    session: HealthSession,
    settings: Settings,
) -> None:
    """Register health monitor tools on the MCP server."""

    @mcp.tool
    async def load_health_data(
        ctx: Context,
        path: str,
        fmt: str = "",
    ) -> str:
        """Load health records from a CSV or labeled TXT file.

        Loaded records are added to those already held, up to the record
        capacity; records beyond it are reported as dropped.

        Args:
            path: Path to the data file. Relative paths use the configured data directory.
            fmt: 'csv' or 'txt'. Defaults to the file extension.
        """
        resolved = settings.resolve_path(path)
        result = session.load(resolved, fmt or None)
        if not result.ok:
            return json.dumps({
                "status": "error",
                "message": "Failed to load data.",
                "detail": result.error,
                "path": str(resolved),
            })
        if result.stored == 0:
            return json.dumps({
                "status": "error",
                "message": "Maximum records reached!",
                "path": str(resolved),
                "records_parsed": len(result.records),
                "records_dropped": result.dropped,
                "total_records": session.record_count,
            })
        return json.dumps({
            "status": "loaded",
            "path": str(resolved),
            "format": result.fmt,
            "records_parsed": len(result.records),
            "records_loaded": result.stored,
            "records_dropped": result.dropped,
            "entries_skipped": result.skipped,
            "total_records": session.record_count,
        })

    @mcp.tool
    async def add_health_record(
        ctx: Context,
        date: str,
        heart_rate: int,
        systolic_bp: int,
        diastolic_bp: int,
        blood_sugar: int,
        temperature: float,
        oxygen_level: int,
        steps: int,
    ) -> str:
        """Add one day's readings by hand.

        Args:
            date: Date label (e.g., '2025-11-02').
            heart_rate: Heart rate in BPM.
            systolic_bp: Systolic blood pressure (top number).
            diastolic_bp: Diastolic blood pressure (bottom number).
            blood_sugar: Blood sugar in mg/dL.
            temperature: Body temperature in Fahrenheit.
            oxygen_level: Oxygen saturation percentage.
            steps: Step count for the day.
        """
        record = HealthRecord(
            date=date,
            heart_rate=heart_rate,
            systolic_bp=systolic_bp,
            diastolic_bp=diastolic_bp,
            blood_sugar=blood_sugar,
            temperature=temperature,
            oxygen_level=oxygen_level,
            steps=steps,
        )
        if not session.add_record(record):
            return _error("Maximum records reached!")
        return json.dumps({
            "status": "added",
            "record": record.to_dict(),
            "total_records": session.record_count,
        })

    @mcp.tool
    async def analyze_health_data(ctx: Context) -> str:
        """Analyze all held records: averages, alerts, health score and a text report."""
        try:
            analysis = session.analyze()
        except NoDataError as exc:
            return _error(str(exc))

        payload = analysis.to_dict()
        payload["status"] = "ok"
        payload["score_label"] = classify_score(analysis.score)
        payload["vital_tags"] = vital_status_tags(analysis.stats)
        payload["report"] = render_report(analysis.stats, analysis.alerts, analysis.score)
        return json.dumps(payload, indent=2)

    @mcp.tool
    async def view_health_trends(ctx: Context, limit: int = 10) -> str:
        """Show the most recent records as a table.

        Args:
            limit: Number of recent records to include (default: 10).
        """
        if session.record_count == 0:
            return _error("No data loaded. Please load data first.")
        records = session.records
        recent = records[-limit:] if limit > 0 else ()
        return json.dumps({
            "status": "ok",
            "records": [r.to_dict() for r in recent],
            "table": render_trends(records, limit),
        }, indent=2)

    @mcp.tool
    async def get_health_advice(ctx: Context) -> str:
        """Personalized recommendations based on the most recent analysis."""
        analysis = session.last_analysis
        if analysis is None:
            return _error("No analysis performed yet. Please analyze data first.")
        return json.dumps({
            "status": "ok",
            "categories": advice_flags(analysis.alerts),
            "advice": generate_advice(analysis.alerts),
        }, indent=2)

    @mcp.tool
    async def export_health_report(ctx: Context, path: str = "") -> str:
        """Write the analysis report to a text file.

        Args:
            path: Output file. Defaults to the configured report filename.
        """
        if session.record_count == 0:
            return _error("No data to export.")
        analysis = session.analyze()
        resolved = settings.resolve_path(path or settings.report_filename)
        if not export_report(analysis.stats, analysis.alerts, analysis.score, resolved):
            return _error(f"Failed to create report file: {resolved}")
        return json.dumps({"status": "exported", "path": str(resolved)})

    @mcp.tool
    async def generate_sample_data(ctx: Context, fmt: str = "csv", path: str = "") -> str:
        """Create a sample data file with 7 days of readings.

        Args:
            fmt: 'csv' or 'txt'.
            path: Output file. Defaults to the configured sample filename.
        """
        fmt = fmt.lower()
        if fmt == FORMAT_CSV:
            resolved = settings.resolve_path(path or settings.sample_csv_filename)
            written = write_sample_csv(resolved)
        elif fmt == FORMAT_TXT:
            resolved = settings.resolve_path(path or settings.sample_txt_filename)
            written = write_sample_txt(resolved)
        else:
            return _error(f"Invalid format {fmt!r}; use 'csv' or 'txt'.")
        if not written:
            return _error(f"Failed to create file: {resolved}")
        return json.dumps({"status": "created", "format": fmt, "path": str(resolved)})

    @mcp.tool
    async def clear_health_data(ctx: Context) -> str:
        """Discard all held records and the last analysis."""
        cleared = session.record_count
        session.clear()
        logger.info("Cleared %d records from session", cleared)
        return json.dumps({"status": "cleared", "records_removed": cleared})
