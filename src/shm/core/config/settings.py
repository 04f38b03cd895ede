"""Application settings loaded from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Smart Health Monitor server configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Loopback by default; health readings should not be served to the LAN
    # unless explicitly requested.
    shm_host: str = "127.0.0.1"
    shm_port: int = 8001
    shm_log_level: str = "info"
    # Binding to a non-loopback host also requires this flag (no auth layer).
    shm_allow_insecure_bind: bool = False

    # Files
    # Relative paths given to tools are resolved against this directory.
    data_dir: str = "."
    report_filename: str = "health_report.txt"
    sample_csv_filename: str = "sample_health_data.csv"
    sample_txt_filename: str = "sample_health_data.txt"

    # Limits
    max_records: int = 1000

    def resolve_path(self, path: str) -> Path:
        """Expand ``~`` and anchor relative paths at ``data_dir``."""
        candidate = Path(path).expanduser()
        if candidate.is_absolute():
            return candidate
        return Path(self.data_dir).expanduser() / candidate


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
