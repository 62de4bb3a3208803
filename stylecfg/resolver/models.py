"""Resolved configuration models.

Every model here is frozen. Mapping-valued fields (theme tokens, plugin
options) are additionally deep-frozen into read-only views so that no
consumer can change a resolved configuration after it was produced.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

RawConfig = Mapping[str, Any]
"""A user-authored settings document. Every key is optional."""

DEFAULT_DARK_SELECTOR = ".dark"


def freeze(value: Any) -> Any:
    """Return a deep read-only copy of a document value.

    Mappings become ``MappingProxyType`` views over fresh dicts and
    sequences become tuples. Scalars are returned unchanged.
    """
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def hashable(value: Any) -> Any:
    """Return a hashable equivalent of a frozen document value.

    Equal values give equal results regardless of mapping key order.
    """
    if isinstance(value, Mapping):
        return tuple(sorted((key, hashable(item)) for key, item in value.items()))
    if isinstance(value, (list, tuple)):
        return tuple(hashable(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Inverse of ``freeze``: plain dicts and lists suitable for JSON."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(item) for item in value]
    return value


class MediaQuery(BaseModel):
    """Dark mode follows the ``prefers-color-scheme`` media query."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["media"] = "media"


class SelectorBased(BaseModel):
    """Dark mode is active when an ancestor matches ``selector``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["selector"] = "selector"
    selector: str = Field(
        default=DEFAULT_DARK_SELECTOR,
        description="CSS selector that switches dark mode on",
    )


class Disabled(BaseModel):
    """Dark mode variants are not generated."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["disabled"] = "disabled"


DarkModeStrategy = Annotated[
    MediaQuery | SelectorBased | Disabled,
    Field(discriminator="kind"),
]


class BarePlugin(BaseModel):
    """A plugin referenced by identifier only."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["bare"] = "bare"
    id: str = Field(..., description="Identifier handed to the plugin loader")


class PluginWithOptions(BaseModel):
    """A plugin referenced by identifier with an options payload."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["with_options"] = "with_options"
    id: str = Field(..., description="Identifier handed to the plugin loader")
    options: Mapping[str, Any] = Field(
        default_factory=dict,
        description="Opaque options passed to the plugin factory",
    )

    @field_validator("options", mode="after")
    @classmethod
    def _freeze_options(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return freeze(value)

    @field_serializer("options")
    def _serialize_options(self, value: Mapping[str, Any]) -> dict[str, Any]:
        return thaw(value)

    def __hash__(self) -> int:
        return hash((self.kind, self.id, hashable(self.options)))


PluginReference = Annotated[
    BarePlugin | PluginWithOptions,
    Field(discriminator="kind"),
]


class ResolvedConfig(BaseModel):
    """Fully-defaulted, validated, immutable configuration.

    This is the only object downstream consumers read:

    - the scanner reads ``content``
    - the theme engine reads ``theme`` (or ``token()``)
    - the plugin loader reads ``plugins`` and ``dark_mode``

    Instances are produced by ``ConfigResolver`` and by the defaults
    module. Re-resolution always produces a new instance.
    """

    model_config = ConfigDict(frozen=True)

    content: tuple[str, ...] = Field(
        default=(),
        description="Ordered glob patterns naming files to scan for class names",
    )
    dark_mode: DarkModeStrategy = Field(
        default_factory=MediaQuery,
        description="How dark mode variants are activated",
    )
    theme: Mapping[str, Any] = Field(
        default_factory=dict,
        description="Theme tokens by category",
    )
    plugins: tuple[PluginReference, ...] = Field(
        default=(),
        description="Ordered plugin references; later plugins win",
    )
    prefix: str = Field(default="", description="Prefix added to every utility class")
    important: bool | str = Field(
        default=False,
        description="Mark utilities !important, or scope them under a selector",
    )

    @field_validator("theme", mode="after")
    @classmethod
    def _freeze_theme(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return freeze(value)

    @field_serializer("theme")
    def _serialize_theme(self, value: Mapping[str, Any]) -> dict[str, Any]:
        return thaw(value)

    def __hash__(self) -> int:
        return hash(
            (
                self.content,
                self.dark_mode,
                hashable(self.theme),
                self.plugins,
                self.prefix,
                self.important,
            )
        )

    def token(self, category: str, *path: str) -> Any:
        """Look up a theme token, e.g. ``token("colors", "blue", "500")``.

        Raises:
            KeyError: If the category or any path segment is unknown
        """
        node: Any = self.theme[category]
        for segment in path:
            if not isinstance(node, Mapping):
                raise KeyError(segment)
            node = node[segment]
        return node

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-compatible representation."""
        return self.model_dump(mode="json")
