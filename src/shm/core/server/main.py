"""Smart Health Monitor entry point: ``python -m shm.core.server.main``."""

from __future__ import annotations

import logging
from ipaddress import ip_address

from shm.core.config.settings import get_settings
from shm.core.server.app import create_app


def _is_loopback_host(host: str) -> bool:
    if host in {"localhost"}:
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def run() -> None:
    """Start the Smart Health Monitor MCP server with Streamable HTTP transport."""
    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.shm_log_level.upper(), logging.INFO))

    logger = logging.getLogger(__name__)
    if not settings.shm_allow_insecure_bind and not _is_loopback_host(settings.shm_host):
        raise RuntimeError(
            "Refusing to bind the health monitor to a non-loopback host without an auth layer. "
            "Set SHM_ALLOW_INSECURE_BIND=true to override (unsafe)."
        )
    logger.info(
        "Starting Smart Health Monitor server on %s:%d",
        settings.shm_host,
        settings.shm_port,
    )

    mcp = create_app(settings_override=settings)
    mcp.run(
        transport="streamable-http",
        host=settings.shm_host,
        port=settings.shm_port,
    )


if __name__ == "__main__":
    run()
