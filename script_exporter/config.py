"""Exporter configuration — loaded from environment / .env file."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings for the exporter process."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # Bind address
    exporter_host: str = "127.0.0.1"
    exporter_port: int = 9172

    # Auth (empty = no auth)
    exporter_token: str = ""

    # Script config: comma-separated files and/or directories, merged in order
    script_config: str = "script-exporter.yml"

    # Execution
    script_shell: str = "/bin/sh"
    script_default_timeout: float = 0  # applies to timeout: 0 scripts; 0 = none
    scrape_timeout_offset: float = 0.5  # subtracted from the Prometheus scrape timeout

    # Logging
    log_level: str = "INFO"

    @property
    def script_config_paths(self) -> list[str]:
        return [p.strip() for p in self.script_config.split(",") if p.strip()]


settings = Settings()
