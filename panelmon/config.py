from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

from panelmon.models.monitor import MonitorType


class Settings(BaseSettings):
    # --- app ---
    app_name: str = "Panel System Monitor"
    debug: bool = False
    log_level: str = "INFO"

    # --- sampling ---
    proc_root: str = "/proc"
    monitor_types: list[MonitorType] = [MonitorType.CPU]
    refresh_rate: int = Field(default=1000, ge=500, le=10000)  # milliseconds

    # --- display ---
    yellow_threshold: int = Field(default=50, ge=0, le=100)
    red_threshold: int = Field(default=80, ge=0, le=100)
    use_icon: bool = False

    # --- launcher ---
    terminal_command: str = "auto"  # "auto" or a template with %c
    btop_command: str = "btop"

    # --- panel placement ---
    panel_position: Literal["left", "center", "right"] = "right"
    panel_index: int = 0

    # --- local api ---
    host: str = "127.0.0.1"
    port: int = 8765

    model_config = {"env_file": ".env", "env_prefix": "PANELMON_"}

    @property
    def refresh_interval(self) -> float:
        """Refresh rate in seconds."""
        return self.refresh_rate / 1000


settings = Settings()
