"""Settings document loading.

Reads a user settings document from disk. TOML and JSON are supported;
the format is chosen by file suffix.
"""

import json
import tomllib
from pathlib import Path
from typing import Any

from stylecfg.errors import DocumentError
from stylecfg.observability.logging import get_logger

logger = get_logger(__name__)

SUPPORTED_SUFFIXES = (".toml", ".json")


def load_raw_config(path: Path) -> dict[str, Any]:
    """Load a raw settings document.

    Args:
        path: Path to a ``.toml`` or ``.json`` file

    Returns:
        The parsed document, unvalidated

    Raises:
        FileNotFoundError: If the file doesn't exist
        DocumentError: If the suffix is unsupported, the file cannot be
            parsed, or its top level is not an object
    """
    if not path.exists():
        raise FileNotFoundError(f"Settings document not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".toml":
        with path.open("rb") as f:
            try:
                document: Any = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise DocumentError(path, f"invalid TOML: {e}") from e
    elif suffix == ".json":
        try:
            document = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise DocumentError(path, f"invalid JSON: {e}") from e
    else:
        raise DocumentError(
            path,
            f"unsupported format {suffix or '(none)'!r}; "
            f"use one of {', '.join(SUPPORTED_SUFFIXES)}",
        )

    if not isinstance(document, dict):
        raise DocumentError(path, "top level must be an object")

    logger.debug("settings_document_loaded", path=str(path), keys=sorted(document))
    return document


def find_raw_config(directory: Path, stem: str = "stylecfg") -> Path | None:
    """Find ``<stem>.toml`` or ``<stem>.json`` in ``directory``.

    TOML wins when both exist.
    """
    for suffix in SUPPORTED_SUFFIXES:
        candidate = directory / f"{stem}{suffix}"
        if candidate.is_file():
            return candidate
    return None
