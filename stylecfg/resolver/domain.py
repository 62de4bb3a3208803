"""Domain validation of shape-checked settings.

Turns a ``ShapedConfig`` into domain values (dark mode strategies,
plugin references, trimmed content patterns) or raises ``DomainError``
naming the field and the violated constraint.
"""

import posixpath
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from stylecfg.errors import DomainError
from stylecfg.resolver.models import (
    DEFAULT_DARK_SELECTOR,
    BarePlugin,
    DarkModeStrategy,
    Disabled,
    MediaQuery,
    PluginReference,
    PluginWithOptions,
    SelectorBased,
)
from stylecfg.resolver.shape import ShapedConfig, ShapedPlugin, child

SELECTOR_MODES = frozenset({"selector", "class"})
PREFIX_PATTERN = re.compile(r"^[A-Za-z0-9_-]*$")
WINDOWS_DRIVE = re.compile(r"^[A-Za-z]:/")

_FORBIDDEN_SELECTOR_CHARS = frozenset("{};")
_SELECTOR_START = re.compile(r"[.#\[:*&A-Za-z_\\>+~]")
_NAME_START = re.compile(r"[A-Za-z_\-\\\u00a0-\U0010ffff]")
_CLOSERS = {")": "(", "]": "["}


@dataclass(frozen=True)
class ValidatedConfig:
    """Domain values of a raw document. None means 'not given'."""

    content: tuple[str, ...] | None = None
    dark_mode: DarkModeStrategy | None = None
    theme_extend: Mapping[str, Any] | None = None
    plugins: tuple[PluginReference, ...] | None = None
    prefix: str | None = None
    important: bool | str | None = None


def check_selector(value: str, field: str) -> str:
    """Check that ``value`` is a plausible CSS selector fragment.

    This is a syntactic sanity check, not a full selector parser:
    brackets, parentheses and quotes must balance, declaration block
    characters are refused, and ``.``/``#`` must introduce a name.

    Returns:
        The selector with surrounding whitespace removed
    """
    selector = value.strip()
    if not selector:
        raise DomainError(field, "selector must not be empty")
    if not _SELECTOR_START.match(selector):
        raise DomainError(field, f"{selector!r} does not start like a CSS selector")
    if selector[-1] in ",>+~":
        raise DomainError(field, f"{selector!r} ends with a dangling combinator")

    stack: list[str] = []
    quote: str | None = None
    index = 0
    while index < len(selector):
        char = selector[index]
        if char == "\\":
            index += 2
            continue
        if quote:
            if char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char in _FORBIDDEN_SELECTOR_CHARS:
            raise DomainError(field, f"{selector!r} must not contain {char!r}")
        elif char in "([":
            stack.append(char)
        elif char in _CLOSERS:
            if not stack or stack.pop() != _CLOSERS[char]:
                raise DomainError(field, f"{selector!r} has an unbalanced {char!r}")
        elif char in ".#" and "[" not in stack:
            following = selector[index + 1 : index + 2]
            if not following or not _NAME_START.match(following):
                raise DomainError(field, f"{char!r} in {selector!r} must be followed by a name")
        index += 1

    if quote:
        raise DomainError(field, f"{selector!r} has an unterminated string")
    if stack:
        raise DomainError(field, f"{selector!r} has an unclosed {stack[-1]!r}")
    return selector


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternatives so each variant can be checked."""
    start = pattern.find("{")
    if start == -1:
        return [pattern]
    depth = 0
    parts: list[str] = []
    last = start + 1
    for index in range(start, len(pattern)):
        char = pattern[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                parts.append(pattern[last:index])
                head, tail = pattern[:start], pattern[index + 1 :]
                return [
                    expanded
                    for part in parts
                    for expanded in expand_braces(head + part + tail)
                ]
        elif char == "," and depth == 1:
            parts.append(pattern[last:index])
            last = index + 1
    # Unclosed brace: glob engines treat it literally.
    return [pattern]


def _escapes_root(pattern: str, project_root: Path | None) -> bool:
    path = pattern.replace("\\", "/")
    if path.startswith("/") or WINDOWS_DRIVE.match(path):
        if project_root is None:
            return True
        root = posixpath.normpath(project_root.absolute().as_posix())
        target = posixpath.normpath(path)
        return not (target == root or target.startswith(root.rstrip("/") + "/"))

    depth = 0
    for segment in path.split("/"):
        if segment in ("", ".", "**"):
            # '**' may match zero directories, so it never adds depth.
            continue
        if segment == "..":
            depth -= 1
            if depth < 0:
                return True
        else:
            depth += 1
    return False


def check_content_pattern(
    pattern: str, field: str, project_root: Path | None = None
) -> str:
    """Check a content glob and return it trimmed.

    A leading ``!`` marks an exclusion pattern; the remainder is checked.
    Absolute patterns are accepted only when they point inside
    ``project_root``.
    """
    trimmed = pattern.strip()
    body = trimmed[1:].strip() if trimmed.startswith("!") else trimmed
    if not body:
        raise DomainError(field, "pattern must not be empty")
    for variant in expand_braces(body):
        if _escapes_root(variant, project_root):
            raise DomainError(field, f"pattern {trimmed!r} resolves outside the project root")
    return trimmed


def _domain_dark_mode(shaped: ShapedConfig) -> DarkModeStrategy:
    value = shaped.dark_mode
    if shaped.dark_mode_selector is not None:
        selector = check_selector(shaped.dark_mode_selector, "darkMode.selector")
        return SelectorBased(selector=selector)
    if value is False:
        return Disabled()
    if value is True:
        raise DomainError("darkMode", 'true is not a strategy; use "media", "selector" or false')
    if isinstance(value, str):
        if value == "media":
            return MediaQuery()
        if value in SELECTOR_MODES:
            return SelectorBased(selector=DEFAULT_DARK_SELECTOR)
        raise DomainError(
            "darkMode", f'unknown strategy {value!r}; use "media", "selector" or false'
        )
    if isinstance(value, tuple) and len(value) == 2 and value[0] in SELECTOR_MODES:
        return SelectorBased(selector=check_selector(value[1], "darkMode.selector"))
    raise DomainError("darkMode", 'array form must be ["selector", "<css selector>"]')


def _domain_theme(extend: Mapping[str, Any], field: str = "theme.extend") -> None:
    for key, value in extend.items():
        if not key.strip():
            raise DomainError(child(field, key), "theme keys must not be empty")
        if isinstance(value, Mapping):
            _domain_theme(value, child(field, key))


def _domain_plugin(plugin: ShapedPlugin) -> PluginReference:
    plugin_id = plugin.id.strip()
    if not plugin_id:
        field = plugin.field if plugin.options is None else child(plugin.field, "id")
        raise DomainError(field, "plugin identifier must not be empty")
    if plugin.options is None:
        return BarePlugin(id=plugin_id)
    return PluginWithOptions(id=plugin_id, options=plugin.options)


def check_domain(
    shaped: ShapedConfig, *, project_root: Path | None = None
) -> ValidatedConfig:
    """Validate the values of a shape-checked document.

    Args:
        shaped: Output of ``check_shape``
        project_root: Directory content patterns must stay inside. When
            None, absolute patterns are refused.

    Raises:
        DomainError: On the first invalid value
    """
    content = None
    if shaped.content is not None:
        content = tuple(
            check_content_pattern(pattern, child("content", index), project_root)
            for index, pattern in enumerate(shaped.content)
        )

    dark_mode = None
    if shaped.dark_mode is not None or shaped.dark_mode_selector is not None:
        dark_mode = _domain_dark_mode(shaped)

    if shaped.theme_extend is not None:
        _domain_theme(shaped.theme_extend)

    plugins = None
    if shaped.plugins is not None:
        plugins = tuple(_domain_plugin(plugin) for plugin in shaped.plugins)

    if shaped.prefix is not None and not PREFIX_PATTERN.match(shaped.prefix):
        raise DomainError("prefix", "may only contain letters, digits, '-' and '_'")

    important = shaped.important
    if isinstance(important, str):
        important = check_selector(important, "important")

    return ValidatedConfig(
        content=content,
        dark_mode=dark_mode,
        theme_extend=shaped.theme_extend,
        plugins=plugins,
        prefix=shaped.prefix,
        important=important,
    )
