"""Configuration model exports.

    from stylecfg.config.models import LoggingConfig, ResolutionConfig
"""

from stylecfg.config.models.observability import LogFormat, LoggingConfig, LogLevel
from stylecfg.config.models.resolution import ResolutionConfig

__all__ = [
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "ResolutionConfig",
]
