"""Smart Health Monitor MCP Server: application factory.

This module provides:
- create_app() for testability (integration tests create fresh server instances)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from shm.core.config.settings import Settings, get_settings
from shm.domains.health.session import HealthSession
from shm.domains.health.tools.health_monitor_tools import register_health_monitor_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "Smart Health Monitor"
SERVER_VERSION = "0.1.0"


def create_app(
    *,
    settings_override: Settings | None = None,
    session_override: HealthSession | None = None,
) -> FastMCP:
    """Create and configure the Smart Health Monitor MCP server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Creates the session that accumulates health records
    3. Registers all tools
    """
    settings = settings_override or get_settings()

    # --- Server instance ---
    server = FastMCP(
        SERVER_NAME,
        instructions=(
            "Personal health-record analyzer. Load vital-sign readings from CSV "
            "or labeled text files (or add them by hand), then request averages, "
            "rule-based alerts, a 0-100 wellness score, advice and exportable "
            "reports. Results are heuristic wellness indicators, not diagnoses."
        ),
    )

    # --- Session state ---
    if session_override is not None:
        session = session_override
    else:
        session = HealthSession(max_records=settings.max_records)
    logger.info("Health session created (capacity %d records)", settings.max_records)

    # --- Register tools ---
    @server.tool
    def health_check() -> dict:
        """Check server health and return basic status information."""
        return {
            "status": "ok",
            "server": SERVER_NAME,
            "version": SERVER_VERSION,
            "records_loaded": session.record_count,
            "analysis_available": session.last_analysis is not None,
            "data_dir": settings.data_dir,
        }

    register_health_monitor_tools(server, session, settings)
    logger.info("Health monitor tools registered")

    return server


# Module-level instance for FastMCP discovery.
# Lazy: only created when this module is loaded directly (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
