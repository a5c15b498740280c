"""Standalone flowlint settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    default_mode: Literal["flow", "node"] = "flow"
    strict: bool = False
    require_versions: bool = False
    registry_file: Optional[str] = None
    flow_dir: str = "./flows"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "FLOWLINT_"
        extra = "ignore"

    @property
    def flow_dir_path(self) -> Path:
        return Path(self.flow_dir).expanduser().resolve()

    @property
    def registry_file_path(self) -> Path | None:
        if not self.registry_file:
            return None
        return Path(self.registry_file).expanduser().resolve()


settings = Settings()
