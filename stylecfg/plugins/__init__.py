"""Plugin loading for resolved configurations."""

from stylecfg.plugins.registry import (
    LoadedPlugin,
    PluginContext,
    PluginFactory,
    PluginRegistry,
    load_plugins,
)

__all__ = [
    "LoadedPlugin",
    "PluginContext",
    "PluginFactory",
    "PluginRegistry",
    "load_plugins",
]
