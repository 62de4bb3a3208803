"""Settings document resolution.

Loads, validates and merges user settings documents into immutable
ResolvedConfig snapshots.
"""

from stylecfg.resolver.defaults import DEFAULT_CONFIG, build_default_config
from stylecfg.resolver.document import find_raw_config, load_raw_config
from stylecfg.resolver.engine import ConfigResolver, resolve, resolve_to_raw
from stylecfg.resolver.live import LiveConfig
from stylecfg.resolver.models import (
    BarePlugin,
    DarkModeStrategy,
    Disabled,
    MediaQuery,
    PluginReference,
    PluginWithOptions,
    RawConfig,
    ResolvedConfig,
    SelectorBased,
)

__all__ = [
    "DEFAULT_CONFIG",
    "BarePlugin",
    "ConfigResolver",
    "DarkModeStrategy",
    "Disabled",
    "LiveConfig",
    "MediaQuery",
    "PluginReference",
    "PluginWithOptions",
    "RawConfig",
    "ResolvedConfig",
    "SelectorBased",
    "build_default_config",
    "find_raw_config",
    "load_raw_config",
    "resolve",
    "resolve_to_raw",
]
