"""Logging configuration model."""

from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["json", "console"]


class LoggingConfig(BaseModel):
    """Configuration for structured logging."""

    level: LogLevel = Field(default="WARNING", description="Minimum log level")
    format: LogFormat = Field(
        default="console",
        description="Output format: json for CI, console for terminals",
    )
    redact_secrets: bool = Field(
        default=True,
        description="Redact secret-looking keys such as tokens in plugin options",
    )
