"""Command line entry point.

    stylecfg [PATH] [--strict | --loose] [--root DIR] [--output resolved|raw]

Resolves a settings document and prints the result as JSON. Exit status
is 0 on success, 1 when no document is found and 2 when the document is
invalid; the error message names the offending field.
"""

import argparse
import json
import sys
from pathlib import Path

from stylecfg.config import get_settings
from stylecfg.errors import ConfigError
from stylecfg.observability.logging import get_logger, setup_logging
from stylecfg.resolver import (
    DEFAULT_CONFIG,
    find_raw_config,
    load_raw_config,
    resolve,
    resolve_to_raw,
)

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_INVALID = 2

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stylecfg",
        description="Validate and resolve a utility CSS settings document",
    )
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        help="Settings document (.toml or .json); defaults to stylecfg.toml/.json in --root",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--strict", dest="strict", action="store_true", help="Reject unknown keys")
    mode.add_argument("--loose", dest="strict", action="store_false", help="Ignore unknown keys")
    parser.set_defaults(strict=None)
    parser.add_argument("--root", type=Path, help="Project root content patterns must stay inside")
    parser.add_argument(
        "--output",
        choices=("resolved", "raw"),
        default="resolved",
        help="Print the resolved config, or its projection back to document shape",
    )
    parser.add_argument("--log-level", help="Override the configured log level")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    # Settings loading logs too; stdout carries only the JSON result.
    setup_logging(level=args.log_level or "WARNING")
    try:
        settings = get_settings()
    except FileNotFoundError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_NOT_FOUND

    setup_logging(
        level=args.log_level or settings.logging.level,
        format=settings.logging.format,
        redact_secrets=settings.logging.redact_secrets,
    )

    strict = settings.resolution.strict if args.strict is None else args.strict
    root: Path = args.root or settings.resolution.project_root

    path = args.path or find_raw_config(root)
    if path is None:
        print(f"error: no stylecfg.toml or stylecfg.json in {root}", file=sys.stderr)
        return EXIT_NOT_FOUND

    try:
        raw = load_raw_config(path)
        resolved = resolve(raw, DEFAULT_CONFIG, strict=strict, project_root=root)
    except FileNotFoundError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_NOT_FOUND
    except ConfigError as e:
        logger.error("config_invalid", path=str(path), field=e.field, error=e.message)
        print(f"error: {e.message}", file=sys.stderr)
        return EXIT_INVALID

    if args.output == "raw":
        payload = resolve_to_raw(resolved, DEFAULT_CONFIG)
    else:
        payload = resolved.to_dict()
    print(json.dumps(payload, indent=2))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
