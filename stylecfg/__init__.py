"""stylecfg - settings resolution for a utility-first CSS build tool.

Usage:
    from stylecfg import DEFAULT_CONFIG, resolve

    resolved = resolve({"darkMode": "selector", "content": ["index.html"]}, DEFAULT_CONFIG)
"""

from stylecfg.errors import (
    ConfigError,
    DocumentError,
    DomainError,
    PluginResolutionError,
    ShapeError,
)
from stylecfg.resolver import (
    DEFAULT_CONFIG,
    ConfigResolver,
    LiveConfig,
    ResolvedConfig,
    load_raw_config,
    resolve,
    resolve_to_raw,
)

__all__ = [
    "DEFAULT_CONFIG",
    "ConfigError",
    "ConfigResolver",
    "DocumentError",
    "DomainError",
    "LiveConfig",
    "PluginResolutionError",
    "ResolvedConfig",
    "ShapeError",
    "load_raw_config",
    "resolve",
    "resolve_to_raw",
]
