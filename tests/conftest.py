"""Shared test fixtures for the stylecfg test suite."""

from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import structlog

from stylecfg.resolver.models import MediaQuery, ResolvedConfig


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "[resolution]\\nstrict = true",
                "development.toml": "[logging]\\nlevel = 'DEBUG'",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            toml_file = test_config_dir / filename
            toml_file.write_text(content)

    return _create_toml_files


@pytest.fixture
def baseline() -> ResolvedConfig:
    """Baseline with empty content and plugins and a small theme."""
    return ResolvedConfig(
        content=(),
        dark_mode=MediaQuery(),
        theme={
            "colors": {"black": "#000", "blue": {"100": "#dbeafe", "500": "#3b82f6"}},
            "spacing": {"1": "0.25rem", "2": "0.5rem"},
        },
        plugins=(),
    )


@pytest.fixture
def sample_raw() -> dict[str, Any]:
    """Settings document mirroring a typical project config."""
    return {
        "darkMode": "selector",
        "content": [
            "index.html",
            "./_includes/**/*.{html,js}",
            "./_layouts/**/*.{html,js}",
        ],
        "theme": {"extend": {}},
        "plugins": ["@tailwindcss/typography"],
    }


@pytest.fixture(autouse=True)
def isolate_settings(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Clear the settings cache and keep the real environment out of tests."""
    from stylecfg.config import get_settings
    from stylecfg.config.settings import set_toml_config

    for name in ("STYLECFG_CONFIG_DIR", "STYLECFG_ENV"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

    set_toml_config({})
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    set_toml_config({})


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Drop any structlog configuration a test installed."""
    yield
    structlog.reset_defaults()
