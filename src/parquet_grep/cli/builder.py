#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Argument parser construction for the parquet-grep CLI.

Help text for option flags is taken from the ``help`` metadata of the
matching ``GrepOptions`` / ``RemoteOptions`` fields, so the dataclasses stay
the single source of truth for what each setting means.
"""

from __future__ import annotations

import argparse
from dataclasses import fields
from typing import Any, Dict

from parquet_grep.constants import (
    COLOR_MODES,
    DEFAULT_LIMIT,
    DEFAULT_OFFSET,
    DEFAULT_TRIM,
    DISABLE_NETWORK_ENV,
)
from parquet_grep.exceptions import InvalidWindowParameterError, ValidationError
from parquet_grep.options.grep import GrepOptions
from parquet_grep.options.network import RemoteOptions

EXIT_SUCCESS = 0
EXIT_ERROR = 1

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _field_help(options_class: type, name: str, suffix: str = "") -> str:
    for item in fields(options_class):
        if item.name == name:
            text = item.metadata.get("help", "")
            return f"{text} {suffix}".strip()
    raise KeyError(name)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for ``parquet-grep``.

    Window and trim values are collected as raw strings so that bad values are
    reported as validation errors (exit code 1) rather than argparse usage
    errors.
    """
    from parquet_grep import __version__

    parser = argparse.ArgumentParser(
        prog="parquet-grep",
        description="Search Parquet files for rows where any field matches a regular expression.",
        epilog=(
            "Smart case: an all-lowercase query matches case-insensitively; any uppercase letter makes it "
            f"case-sensitive. Set {DISABLE_NETWORK_ENV}=1 to refuse http(s) locators."
        ),
    )
    parser.add_argument("query", help="Regular expression to search for")
    parser.add_argument(
        "path",
        nargs="?",
        help="Parquet file, directory or http(s) URL (default: search the current directory recursively)",
    )

    matching = parser.add_argument_group("matching")
    case_group = matching.add_mutually_exclusive_group()
    case_group.add_argument(
        "-i", "--ignore-case", dest="ignore_case", action="store_true", help=_field_help(GrepOptions, "ignore_case")
    )
    case_group.add_argument(
        "-s",
        "--case-sensitive",
        dest="case_sensitive",
        action="store_true",
        help=_field_help(GrepOptions, "case_sensitive"),
    )
    matching.add_argument(
        "-v", "--invert-match", dest="invert", action="store_true", help=_field_help(GrepOptions, "invert")
    )

    window = parser.add_argument_group("result window")
    window.add_argument(
        "-m",
        "--limit",
        dest="limit",
        metavar="N",
        help=_field_help(GrepOptions, "limit", f"(default: {DEFAULT_LIMIT})"),
    )
    window.add_argument(
        "--offset", dest="offset", metavar="N", help=_field_help(GrepOptions, "offset", f"(default: {DEFAULT_OFFSET})")
    )

    output = parser.add_argument_group("output")
    view_group = output.add_mutually_exclusive_group()
    view_group.add_argument(
        "--jsonl", dest="view_mode", action="store_const", const="jsonl", help="Output one JSON object per match"
    )
    view_group.add_argument(
        "--table", dest="view_mode", action="store_const", const="table", help="Output Markdown tables (default)"
    )
    output.add_argument(
        "--trim", dest="trim", metavar="N", help=_field_help(GrepOptions, "trim", f"(default: {DEFAULT_TRIM})")
    )
    output.add_argument("--color", dest="color", choices=COLOR_MODES, help=_field_help(GrepOptions, "color"))
    output.add_argument("--rich", dest="rich", action="store_true", help=_field_help(GrepOptions, "rich"))

    remote = parser.add_argument_group("remote files")
    remote.add_argument("--timeout", dest="timeout", type=float, metavar="SECONDS", help=_field_help(RemoteOptions, "timeout"))
    remote.add_argument(
        "--require-https", dest="require_https", action="store_true", help=_field_help(RemoteOptions, "require_https")
    )

    config = parser.add_argument_group("configuration")
    config.add_argument(
        "--config",
        help="Path to configuration file (TOML, YAML or JSON). If not specified, searches for "
        ".parquet-grep.{toml,yaml,yml,json} or pyproject.toml [tool.parquet-grep] in the current "
        "directory and its parents, then in the home directory.",
    )
    config.add_argument(
        "--no-config",
        action="store_true",
        dest="no_config",
        help="Disable loading of configuration files, including PARQUET_GREP_CONFIG and --config.",
    )

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "-V",
        "--verbose",
        action="store_true",
        help="Enable verbose output with detailed logging (equivalent to --log-level DEBUG)",
    )
    logging_group.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Set logging level (default: WARNING). Overrides --verbose if both are specified.",
    )
    logging_group.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help="Write log messages to specified file in addition to stderr",
    )
    logging_group.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace mode with timestamps and per-file timing",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def parse_non_negative_int(name: str, raw: str) -> int:
    """Convert a CLI window/trim value to a non-negative int.

    Raises
    ------
    InvalidWindowParameterError
        For ``limit`` and ``offset``
    ValidationError
        For any other parameter

    """
    try:
        value = int(raw, 10)
    except ValueError:
        value = -1
    if value < 0:
        if name in ("limit", "offset"):
            raise InvalidWindowParameterError(name, raw)
        raise ValidationError(f"{name} must be a non-negative integer", parameter_name=name, parameter_value=raw)
    return value


def collect_overrides(parsed: argparse.Namespace) -> Dict[str, Any]:
    """Collect the option values that were given explicitly on the command line."""
    overrides: Dict[str, Any] = {}
    for name in ("limit", "offset", "trim"):
        raw = getattr(parsed, name)
        if raw is not None:
            overrides[name] = parse_non_negative_int(name, raw)

    if parsed.ignore_case:
        overrides.update(ignore_case=True, case_sensitive=False)
    if parsed.case_sensitive:
        overrides.update(case_sensitive=True, ignore_case=False)
    if parsed.invert:
        overrides["invert"] = True
    if parsed.view_mode is not None:
        overrides["view_mode"] = parsed.view_mode
    if parsed.color is not None:
        overrides["color"] = parsed.color
    if parsed.rich:
        overrides["rich"] = True
    return overrides


def collect_remote_overrides(parsed: argparse.Namespace) -> Dict[str, Any]:
    """Collect explicit ``RemoteOptions`` values from the command line."""
    overrides: Dict[str, Any] = {}
    if parsed.timeout is not None:
        overrides["timeout"] = parsed.timeout
    if parsed.require_https:
        overrides["require_https"] = True
    return overrides


def build_options(parsed: argparse.Namespace, base: GrepOptions | None = None) -> GrepOptions:
    """Layer command-line values over ``base`` (defaults or loaded configuration)."""
    base = base or GrepOptions()
    overrides = collect_overrides(parsed)
    remote_overrides = collect_remote_overrides(parsed)
    if remote_overrides:
        overrides["remote"] = base.remote.create_updated(**remote_overrides)
    return base.create_updated(**overrides) if overrides else base


__all__ = [
    "EXIT_ERROR",
    "EXIT_SUCCESS",
    "build_options",
    "collect_overrides",
    "create_parser",
    "parse_non_negative_int",
]
