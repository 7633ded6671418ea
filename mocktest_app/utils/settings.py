"""Runtime settings read from the environment (prefix ``MOCKTEST_``)."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from mocktest_app.constants.exam_constants import TICK_INTERVAL_MS
from mocktest_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from mocktest_app.constants.storage_constants import DEFAULT_DATA_DIR


class AppSettings(BaseSettings):
    """Settings for storage location, the local API and logging."""

    model_config = SettingsConfigDict(env_prefix="MOCKTEST_", env_file=".env", extra="ignore")

    data_dir: Path = DEFAULT_DATA_DIR
    api_enabled: bool = True
    api_host: str = DEFAULT_HOST
    api_port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    log_level: str = "INFO"
    tick_interval_ms: int = Field(default=TICK_INTERVAL_MS, ge=50, le=1000)
