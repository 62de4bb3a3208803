"""Built-in default configuration.

``DEFAULT_CONFIG`` is the process-wide baseline every settings document
is resolved against. It is an ordinary ``ResolvedConfig`` and therefore
frozen; callers that need a different baseline build their own and pass
it to ``resolve`` explicitly.
"""

from typing import Any

from stylecfg.resolver.models import MediaQuery, ResolvedConfig

DEFAULT_THEME: dict[str, Any] = {
    "screens": {
        "sm": "640px",
        "md": "768px",
        "lg": "1024px",
        "xl": "1280px",
        "2xl": "1536px",
    },
    "colors": {
        "inherit": "inherit",
        "current": "currentColor",
        "transparent": "transparent",
        "black": "#000",
        "white": "#fff",
        "slate": {
            "50": "#f8fafc",
            "100": "#f1f5f9",
            "500": "#64748b",
            "900": "#0f172a",
        },
        "blue": {
            "50": "#eff6ff",
            "100": "#dbeafe",
            "500": "#3b82f6",
            "900": "#1e3a8a",
        },
    },
    "spacing": {
        "px": "1px",
        "0": "0px",
        "0.5": "0.125rem",
        "1": "0.25rem",
        "2": "0.5rem",
        "4": "1rem",
        "8": "2rem",
        "16": "4rem",
    },
    "fontFamily": {
        "sans": ["ui-sans-serif", "system-ui", "sans-serif"],
        "serif": ["ui-serif", "Georgia", "serif"],
        "mono": ["ui-monospace", "SFMono-Regular", "monospace"],
    },
    "borderRadius": {
        "none": "0px",
        "sm": "0.125rem",
        "DEFAULT": "0.25rem",
        "lg": "0.5rem",
        "full": "9999px",
    },
}


def build_default_config() -> ResolvedConfig:
    """Build a fresh copy of the built-in baseline."""
    return ResolvedConfig(
        content=(),
        dark_mode=MediaQuery(),
        theme=DEFAULT_THEME,
        plugins=(),
        prefix="",
        important=False,
    )


DEFAULT_CONFIG = build_default_config()
