"""Plugin registry and loader.

Plugin implementations live outside stylecfg. They are registered here
under the identifiers settings documents use, and ``load_plugins``
instantiates them in the order a ResolvedConfig lists them.
"""

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from stylecfg.errors import PluginResolutionError
from stylecfg.observability.logging import get_logger
from stylecfg.resolver.models import (
    BarePlugin,
    DarkModeStrategy,
    PluginReference,
    PluginWithOptions,
    ResolvedConfig,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class PluginContext:
    """Shared context handed to every plugin factory."""

    plugin_id: str
    dark_mode: DarkModeStrategy
    prefix: str = ""
    options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


PluginFactory = Callable[[PluginContext], Any]


@dataclass(frozen=True)
class LoadedPlugin:
    """A plugin instance together with the reference it was built from."""

    reference: PluginReference
    instance: Any


class PluginRegistry:
    """Maps plugin identifiers to factories."""

    def __init__(self) -> None:
        self._factories: dict[str, PluginFactory] = {}

    def register(self, plugin_id: str, factory: PluginFactory, *, replace: bool = False) -> None:
        """Register ``factory`` under ``plugin_id``.

        Raises:
            ValueError: If the identifier is taken and ``replace`` is False
        """
        if plugin_id in self._factories and not replace:
            raise ValueError(f"Plugin already registered: {plugin_id}")
        self._factories[plugin_id] = factory

    def get(self, plugin_id: str) -> PluginFactory:
        """Return the factory for ``plugin_id``.

        Raises:
            PluginResolutionError: If nothing is registered under the identifier
        """
        try:
            return self._factories[plugin_id]
        except KeyError:
            raise PluginResolutionError(
                plugin_id, "no plugin registered under this identifier"
            ) from None

    def __contains__(self, plugin_id: object) -> bool:
        return plugin_id in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._factories))

    def __len__(self) -> int:
        return len(self._factories)


def _context_for(reference: PluginReference, resolved: ResolvedConfig) -> PluginContext:
    if isinstance(reference, BarePlugin):
        return PluginContext(
            plugin_id=reference.id,
            dark_mode=resolved.dark_mode,
            prefix=resolved.prefix,
        )
    if isinstance(reference, PluginWithOptions):
        return PluginContext(
            plugin_id=reference.id,
            dark_mode=resolved.dark_mode,
            prefix=resolved.prefix,
            options=reference.options,
        )
    raise TypeError(f"Unknown plugin reference: {reference!r}")


def load_plugins(resolved: ResolvedConfig, registry: PluginRegistry) -> list[LoadedPlugin]:
    """Instantiate every plugin of ``resolved`` in order.

    Raises:
        PluginResolutionError: If a plugin is unknown or its factory
            fails. A PluginResolutionError raised by a factory propagates
            unmodified; other exceptions are wrapped.
    """
    loaded: list[LoadedPlugin] = []
    for reference in resolved.plugins:
        factory = registry.get(reference.id)
        context = _context_for(reference, resolved)
        try:
            instance = factory(context)
        except PluginResolutionError:
            raise
        except Exception as e:
            raise PluginResolutionError(reference.id, f"factory failed: {e}") from e

        logger.debug(
            "plugin_loaded",
            plugin_id=reference.id,
            has_options=isinstance(reference, PluginWithOptions),
            dark_mode=resolved.dark_mode.kind,
        )
        loaded.append(LoadedPlugin(reference=reference, instance=instance))
    return loaded
