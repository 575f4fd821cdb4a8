"""Log configuration."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class LogConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARN", "ERROR"] = Field("WARN", description="Logging level")
    file: str = Field("logs/launchdeck.log", description="Log file path, relative to the launchdeck home directory")
