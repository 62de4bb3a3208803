"""Shape validation of raw settings documents.

The document is declared as pydantic models and validated in one pass.
Validation errors are translated into a ``ShapeError`` naming the
deepest offending field. Values are not judged here beyond their kind;
that is the job of ``stylecfg.resolver.domain``.

Unknown keys are collected by the models (``extra="allow"``) and then
rejected in strict mode or logged and dropped in loose mode, both at
the top level and inside object-valued fields.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    RootModel,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
)

from stylecfg.errors import ShapeError, describe_kind
from stylecfg.observability.logging import get_logger

logger = get_logger(__name__)

DARK_MODE_EXPECTED = (
    'false, "media", "selector", {selector: string} or ["selector", string]'
)
TOKEN_EXPECTED = "string, number, array or object"

TOP_LEVEL_EXPECTED = {
    "content": "array of strings",
    "darkMode": DARK_MODE_EXPECTED,
    "theme": "object",
    "plugins": "array",
    "prefix": "string",
    "important": "boolean or selector string",
}

TokenScalar = StrictStr | StrictInt | StrictFloat


class TokenGroup(RootModel):
    """A mapping of token names to values or nested token groups."""

    root: "dict[str, TokenScalar | list[TokenScalar] | TokenGroup]"


class _DocumentModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class DarkModeDocument(_DocumentModel):
    """Object form of ``darkMode``."""

    selector: StrictStr


class ThemeDocument(_DocumentModel):
    """The ``theme`` object. Only ``extend`` is recognised."""

    extend: dict[str, TokenGroup] = Field(default_factory=dict)


class PluginDocument(_DocumentModel):
    """Object form of a plugin entry."""

    id: StrictStr
    options: dict[str, Any] = Field(default_factory=dict)


class SettingsDocument(_DocumentModel):
    """A user settings document. Every field is optional."""

    content: list[StrictStr] = Field(default_factory=list)
    dark_mode: StrictBool | StrictStr | DarkModeDocument | list[StrictStr] = Field(
        default=False, alias="darkMode"
    )
    theme: ThemeDocument = Field(default_factory=ThemeDocument)
    plugins: list[StrictStr | PluginDocument] = Field(default_factory=list)
    prefix: StrictStr = ""
    important: StrictBool | StrictStr = False


@dataclass(frozen=True)
class ShapedPlugin:
    """A plugin entry whose kind has been checked."""

    field: str
    id: str
    options: Mapping[str, Any] | None = None


@dataclass(frozen=True)
class ShapedConfig:
    """Raw document values of the right kind. None means 'not given'."""

    content: tuple[str, ...] | None = None
    dark_mode: str | bool | tuple[str, ...] | None = None
    dark_mode_selector: str | None = None
    theme_extend: Mapping[str, Any] | None = None
    plugins: tuple[ShapedPlugin, ...] | None = None
    prefix: str | None = None
    important: bool | str | None = None


def child(parent: str, key: str | int) -> str:
    """Build the path of a nested field for error messages."""
    if isinstance(key, int):
        return f"{parent}[{key}]"
    return f"{parent}.{key}" if parent else key


def _error_path(raw: Any, error: Mapping[str, Any]) -> list[str | int]:
    """Follow an error location through the document.

    Location entries that are not keys or indexes of the document (union
    member tags) are dropped. A missing key is kept as the last entry.
    """
    path: list[str | int] = []
    current = raw
    loc = error["loc"]
    for position, part in enumerate(loc):
        if isinstance(current, Mapping) and part in current:
            path.append(part)
            current = current[part]
        elif (
            isinstance(part, int)
            and isinstance(current, Sequence)
            and not isinstance(current, str)
            and 0 <= part < len(current)
        ):
            path.append(part)
            current = current[part]
        elif error["type"] == "missing" and position == len(loc) - 1:
            path.append(part)
    return path


def _expected(path: list[str | int]) -> str:
    head = path[0]
    if len(path) == 1:
        return TOP_LEVEL_EXPECTED.get(str(head), "object")
    if head == "theme":
        if len(path) <= 3:
            return "object"
        return "string or number" if isinstance(path[-1], int) else TOKEN_EXPECTED
    if head == "plugins":
        if len(path) == 2:
            return "string or {id, options} object"
        return "object" if path[-1] == "options" else "string"
    return "string"


def _to_shape_error(raw: Mapping[str, Any], exc: ValidationError) -> ShapeError:
    located = [(_error_path(raw, error), error) for error in exc.errors()]
    path, error = max(located, key=lambda item: len(item[0]))

    field = ""
    for part in path:
        field = child(field, part)
    actual = "missing" if error["type"] == "missing" else describe_kind(error["input"])
    return ShapeError(field or "<root>", _expected(path) if path else "object", actual)


def _check_unknown_keys(value: Any, path: str, strict: bool) -> None:
    if isinstance(value, BaseModel):
        fields = type(value).model_fields
        for key in value.model_extra or {}:
            field = child(path, str(key))
            if strict:
                known = sorted(info.alias or name for name, info in fields.items())
                raise ShapeError(field, f"one of {', '.join(known)}", "unknown key")
            logger.warning("unknown_key_ignored", field=field)
        for name, info in fields.items():
            if name in value.model_fields_set:
                _check_unknown_keys(getattr(value, name), child(path, info.alias or name), strict)
    elif isinstance(value, list):
        for index, item in enumerate(value):
            _check_unknown_keys(item, child(path, index), strict)


def _shape_dark_mode(
    value: bool | str | DarkModeDocument | list[str],
) -> tuple[str | bool | tuple[str, ...], str | None]:
    if isinstance(value, DarkModeDocument):
        return "selector", value.selector
    if isinstance(value, list):
        return tuple(value), None
    return value, None


def _shape_plugin(value: str | PluginDocument, index: int) -> ShapedPlugin:
    field = child("plugins", index)
    if isinstance(value, str):
        return ShapedPlugin(field=field, id=value)
    if "options" not in value.model_fields_set:
        return ShapedPlugin(field=field, id=value.id)
    return ShapedPlugin(field=field, id=value.id, options=value.options)


def check_shape(raw: Mapping[str, Any], *, strict: bool = False) -> ShapedConfig:
    """Check the kind of every known field of a raw settings document.

    Args:
        raw: User settings document
        strict: Reject unknown keys instead of ignoring them

    Returns:
        The document's values, grouped by field

    Raises:
        ShapeError: On the deepest value of the wrong kind or, in strict
            mode, the first unknown key
    """
    if not isinstance(raw, Mapping):
        raise ShapeError("<root>", "object", describe_kind(raw))

    try:
        document = SettingsDocument.model_validate(dict(raw))
    except ValidationError as e:
        raise _to_shape_error(raw, e) from e

    _check_unknown_keys(document, "", strict)

    given = document.model_fields_set

    dark_mode: str | bool | tuple[str, ...] | None = None
    dark_mode_selector = None
    if "dark_mode" in given:
        dark_mode, dark_mode_selector = _shape_dark_mode(document.dark_mode)

    theme_extend = None
    if "theme" in given and "extend" in document.theme.model_fields_set:
        theme_extend = {
            category: tokens.model_dump() for category, tokens in document.theme.extend.items()
        }

    plugins = None
    if "plugins" in given:
        plugins = tuple(_shape_plugin(item, index) for index, item in enumerate(document.plugins))

    return ShapedConfig(
        content=tuple(document.content) if "content" in given else None,
        dark_mode=dark_mode,
        dark_mode_selector=dark_mode_selector,
        theme_extend=theme_extend,
        plugins=plugins,
        prefix=document.prefix if "prefix" in given else None,
        important=document.important if "important" in given else None,
    )
