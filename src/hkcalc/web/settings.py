from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(default=3030, ge=1, le=65535)
    rules_path: Optional[Path] = None
    log_level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v

    @classmethod
    def from_env(cls) -> "Settings":
        # Unset variables fall back to the field defaults.
        env = {
            "host": os.getenv("HKCALC_HOST"),
            "port": os.getenv("HKCALC_PORT"),
            "rules_path": os.getenv("HKCALC_RULES"),
            "log_level": os.getenv("HKCALC_LOG_LEVEL"),
        }
        return cls(**{k: v for k, v in env.items() if v})
