"""Unit tests for domain validation."""

from pathlib import Path

import pytest

from stylecfg.errors import DomainError
from stylecfg.resolver.domain import (
    check_content_pattern,
    check_domain,
    check_selector,
    expand_braces,
)
from stylecfg.resolver.models import (
    BarePlugin,
    Disabled,
    MediaQuery,
    PluginWithOptions,
    SelectorBased,
)
from stylecfg.resolver.shape import check_shape


def validate(raw, **kwargs):
    return check_domain(check_shape(raw), **kwargs)


class TestCheckSelector:
    """Tests for CSS selector fragment checks."""

    @pytest.mark.parametrize(
        "selector",
        [
            ".dark",
            "#app",
            "[data-theme=\"dark\"]",
            "[data-mode='dark'] body",
            ":root.dark",
            "html.dark > body",
            "&:where(.dark, .dark *)",
            ".theme\\:dark",
        ],
    )
    def test_valid(self, selector: str) -> None:
        """Common selector fragments pass."""
        assert check_selector(selector, "darkMode.selector") == selector

    def test_trims(self) -> None:
        """Surrounding whitespace is removed."""
        assert check_selector("  .dark ", "f") == ".dark"

    @pytest.mark.parametrize(
        "selector",
        ["", "   ", ".", ".1dark", "[data-theme", "a)", ".dark {", "p; color: red", ".dark >", "'x", "@media"],
    )
    def test_invalid(self, selector: str) -> None:
        """Malformed fragments fail with the given field."""
        with pytest.raises(DomainError) as exc_info:
            check_selector(selector, "darkMode.selector")
        assert exc_info.value.field == "darkMode.selector"


class TestExpandBraces:
    """Tests for brace expansion."""

    def test_no_braces(self) -> None:
        """Patterns without braces are returned as is."""
        assert expand_braces("src/**/*.html") == ["src/**/*.html"]

    def test_single_group(self) -> None:
        """One group expands to each alternative."""
        assert expand_braces("./_includes/**/*.{html,js}") == [
            "./_includes/**/*.html",
            "./_includes/**/*.js",
        ]

    def test_nested_and_multiple_groups(self) -> None:
        """Nested and repeated groups expand fully."""
        assert sorted(expand_braces("{a,b{c,d}}/x.{1,2}")) == sorted([
            "a/x.1", "a/x.2", "bc/x.1", "bc/x.2", "bd/x.1", "bd/x.2",
        ])


class TestCheckContentPattern:
    """Tests for content pattern checks."""

    @pytest.mark.parametrize(
        "pattern",
        [
            "index.html",
            "./_includes/**/*.{html,js}",
            "src/../templates/*.html",
            "!./vendor/**",
        ],
    )
    def test_inside_root(self, pattern: str) -> None:
        """Patterns inside the project are accepted."""
        assert check_content_pattern(pattern, "content[0]") == pattern

    def test_trimmed(self) -> None:
        """Patterns are stored trimmed."""
        assert check_content_pattern("  index.html\n", "content[0]") == "index.html"

    @pytest.mark.parametrize("pattern", ["", "   ", "!", "! "])
    def test_empty_rejected(self, pattern: str) -> None:
        """Empty patterns fail."""
        with pytest.raises(DomainError) as exc_info:
            check_content_pattern(pattern, "content[2]")
        assert exc_info.value.field == "content[2]"

    @pytest.mark.parametrize(
        "pattern",
        [
            "../shared/*.html",
            "src/../../x.html",
            "**/../../x",
            "{src,..}/x.html",
            "..\\x.html",
            "/etc/**",
        ],
    )
    def test_escaping_rejected(self, pattern: str) -> None:
        """Patterns leaving the project root fail."""
        with pytest.raises(DomainError, match="outside the project root"):
            check_content_pattern(pattern, "content[0]")

    def test_absolute_inside_root_accepted(self, tmp_path: Path) -> None:
        """Absolute patterns under the project root are accepted."""
        pattern = f"{tmp_path.as_posix()}/src/**/*.html"
        assert check_content_pattern(pattern, "content[0]", tmp_path) == pattern

    def test_absolute_outside_root_rejected(self, tmp_path: Path) -> None:
        """Absolute patterns elsewhere are rejected even with a root."""
        with pytest.raises(DomainError):
            check_content_pattern(f"{tmp_path.parent.as_posix()}/other/*.html", "content[0]", tmp_path)


class TestDarkModeDomain:
    """Tests for dark mode strategy selection."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("media", MediaQuery()),
            ("selector", SelectorBased(selector=".dark")),
            ("class", SelectorBased(selector=".dark")),
            (False, Disabled()),
            ({"selector": ".night"}, SelectorBased(selector=".night")),
            (["selector", "[data-theme=dark]"], SelectorBased(selector="[data-theme=dark]")),
            (["class", ".night"], SelectorBased(selector=".night")),
        ],
    )
    def test_forms(self, value, expected) -> None:
        """Every accepted form maps to a strategy."""
        assert validate({"darkMode": value}).dark_mode == expected

    def test_not_given(self) -> None:
        """No darkMode leaves the strategy unset."""
        assert validate({}).dark_mode is None

    @pytest.mark.parametrize("value", [{"selector": ""}, {"selector": "  "}, ["selector", ""]])
    def test_empty_selector(self, value) -> None:
        """An empty selector fails on darkMode.selector."""
        with pytest.raises(DomainError) as exc_info:
            validate({"darkMode": value})
        assert exc_info.value.field == "darkMode.selector"

    @pytest.mark.parametrize("value", [True, "variant", "dark", ["selector"], ["media", ".x"]])
    def test_unknown_strategy(self, value) -> None:
        """Unknown strategies fail on darkMode."""
        with pytest.raises(DomainError) as exc_info:
            validate({"darkMode": value})
        assert exc_info.value.field == "darkMode"


class TestOtherFields:
    """Tests for plugins, theme, prefix and important."""

    def test_plugins(self) -> None:
        """Plugin entries become tagged references."""
        validated = validate({"plugins": [" typography ", {"id": "forms", "options": {"strategy": "class"}}]})
        assert validated.plugins == (
            BarePlugin(id="typography"),
            PluginWithOptions(id="forms", options={"strategy": "class"}),
        )

    def test_empty_plugin_id(self) -> None:
        """Blank plugin ids fail."""
        with pytest.raises(DomainError) as exc_info:
            validate({"plugins": ["typography", " "]})
        assert exc_info.value.field == "plugins[1]"

    def test_empty_theme_key(self) -> None:
        """Blank theme keys fail."""
        with pytest.raises(DomainError) as exc_info:
            validate({"theme": {"extend": {"colors": {"": "#fff"}}}})
        assert exc_info.value.field == "theme.extend.colors."

    def test_prefix(self) -> None:
        """Valid prefixes pass and invalid ones fail."""
        assert validate({"prefix": "tw-"}).prefix == "tw-"
        with pytest.raises(DomainError) as exc_info:
            validate({"prefix": "tw:"})
        assert exc_info.value.field == "prefix"

    def test_important_selector(self) -> None:
        """important selectors are checked and trimmed."""
        assert validate({"important": " #app "}).important == "#app"
        with pytest.raises(DomainError):
            validate({"important": ""})

    def test_content_paths_indexed(self) -> None:
        """Content errors name the offending index."""
        with pytest.raises(DomainError) as exc_info:
            validate({"content": ["index.html", "../x.html"]})
        assert exc_info.value.field == "content[1]"
