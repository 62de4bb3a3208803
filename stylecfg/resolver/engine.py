"""Configuration Resolver - settings document resolution.

Resolves a user settings document against a fully-populated baseline:

1. Shape validation (ShapeError)
2. Domain validation (DomainError)
3. Deep merge with the baseline
4. Freeze into a ResolvedConfig

Resolution is all-or-nothing. Nothing is built until every check has
passed, and the baseline is never modified.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from stylecfg.errors import DomainError
from stylecfg.observability.logging import get_logger
from stylecfg.resolver.defaults import DEFAULT_CONFIG
from stylecfg.resolver.domain import ValidatedConfig, check_domain
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
    thaw,
)
from stylecfg.resolver.shape import check_shape, child

logger = get_logger(__name__)


def merge_theme(
    base: Mapping[str, Any], extend: Mapping[str, Any], field: str = "theme.extend"
) -> dict[str, Any]:
    """Union ``extend`` into ``base``; extension values win at the leaves.

    Raises:
        DomainError: If an extension value would replace a token group of
            ``base`` with a single value
    """
    merged = thaw(base)
    for key, value in extend.items():
        path = child(field, key)
        current = merged.get(key)
        if isinstance(current, dict):
            if not isinstance(value, Mapping):
                raise DomainError(path, "cannot replace a token group with a single value")
            merged[key] = merge_theme(current, value, path)
        else:
            merged[key] = thaw(value)
    return merged


def _merge(validated: ValidatedConfig, defaults: ResolvedConfig) -> ResolvedConfig:
    content = defaults.content
    if validated.content:
        content = defaults.content + validated.content

    theme: Mapping[str, Any] = defaults.theme
    if validated.theme_extend:
        theme = merge_theme(defaults.theme, validated.theme_extend)

    def pick(value: Any, default: Any) -> Any:
        return default if value is None else value

    return ResolvedConfig(
        content=content,
        dark_mode=pick(validated.dark_mode, defaults.dark_mode),
        theme=theme,
        plugins=pick(validated.plugins, defaults.plugins),
        prefix=pick(validated.prefix, defaults.prefix),
        important=pick(validated.important, defaults.important),
    )


def resolve(
    raw: RawConfig,
    defaults: ResolvedConfig = DEFAULT_CONFIG,
    *,
    strict: bool = False,
    project_root: Path | None = None,
) -> ResolvedConfig:
    """Resolve a raw settings document against a baseline.

    Merge rules:
    - content: raw patterns are appended after the baseline's; an empty
      or missing list leaves the baseline's patterns unchanged
    - theme.extend: deep-merged into the baseline theme
    - plugins: replace the baseline's list entirely when present
    - darkMode, prefix, important: replace the baseline's value when present

    Args:
        raw: User settings document
        defaults: Baseline configuration
        strict: Reject unknown keys instead of ignoring them
        project_root: Directory content patterns must stay inside

    Returns:
        A new, frozen ResolvedConfig

    Raises:
        ShapeError: If a known field holds a value of the wrong kind
        DomainError: If a value is of the right kind but invalid
    """
    shaped = check_shape(raw, strict=strict)
    validated = check_domain(shaped, project_root=project_root)
    resolved = _merge(validated, defaults)

    logger.debug(
        "config_resolved",
        content_patterns=len(resolved.content),
        theme_categories=len(resolved.theme),
        plugins=[plugin.id for plugin in resolved.plugins],
        dark_mode=resolved.dark_mode.kind,
        strict=strict,
    )
    return resolved


def _dark_mode_to_raw(strategy: DarkModeStrategy) -> Any:
    if isinstance(strategy, MediaQuery):
        return "media"
    if isinstance(strategy, Disabled):
        return False
    if isinstance(strategy, SelectorBased):
        return {"selector": strategy.selector}
    raise TypeError(f"Unknown dark mode strategy: {strategy!r}")


def _plugin_to_raw(plugin: PluginReference) -> Any:
    if isinstance(plugin, BarePlugin):
        return plugin.id
    if isinstance(plugin, PluginWithOptions):
        return {"id": plugin.id, "options": thaw(plugin.options)}
    raise TypeError(f"Unknown plugin reference: {plugin!r}")


def resolve_to_raw(
    resolved: ResolvedConfig, defaults: ResolvedConfig = DEFAULT_CONFIG
) -> dict[str, Any]:
    """Project a resolved configuration back to the raw document shape.

    Resolving the returned document against the same ``defaults`` yields
    a configuration equal to ``resolved``: the baseline's content
    patterns are stripped (they are re-added on resolution) and the whole
    theme is emitted as an extension.
    """
    content = list(resolved.content)
    baseline = list(defaults.content)
    if content[: len(baseline)] == baseline:
        content = content[len(baseline) :]

    return {
        "content": content,
        "darkMode": _dark_mode_to_raw(resolved.dark_mode),
        "theme": {"extend": thaw(resolved.theme)},
        "plugins": [_plugin_to_raw(plugin) for plugin in resolved.plugins],
        "prefix": resolved.prefix,
        "important": resolved.important,
    }


class ConfigResolver:
    """Resolves settings documents against a fixed baseline.

    Holds the options that stay constant for a process (baseline,
    strictness, project root) so callers such as a watch loop only pass
    the raw document.
    """

    def __init__(
        self,
        defaults: ResolvedConfig = DEFAULT_CONFIG,
        *,
        strict: bool = False,
        project_root: Path | None = None,
    ):
        self._defaults = defaults
        self._strict = strict
        self._project_root = project_root

    @property
    def defaults(self) -> ResolvedConfig:
        """Baseline every document is resolved against."""
        return self._defaults

    @property
    def strict(self) -> bool:
        """Whether unknown keys are rejected instead of ignored."""
        return self._strict

    def resolve(self, raw: RawConfig) -> ResolvedConfig:
        """Resolve ``raw`` against this resolver's baseline."""
        return resolve(
            raw,
            self._defaults,
            strict=self._strict,
            project_root=self._project_root,
        )

    def to_raw(self, resolved: ResolvedConfig) -> dict[str, Any]:
        """Project ``resolved`` back to a raw document for this baseline."""
        return resolve_to_raw(resolved, self._defaults)
