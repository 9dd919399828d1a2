#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for parquet-grep.

Usage::

    parquet-grep [options] <query> [path]

Results go to stdout; log messages and per-file read errors go to stderr.
The exit status is 0 whenever the search ran to completion, including when
nothing matched or some files could not be read, and 1 when the query, the
window parameters, the configuration or the environment prevented it.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from parquet_grep.cli.builder import EXIT_ERROR, EXIT_SUCCESS, build_options, create_parser
from parquet_grep.cli.config import load_options
from parquet_grep.cli.output import should_highlight, should_use_rich_output
from parquet_grep.constants import CONFIG_ENV_VAR
from parquet_grep.exceptions import ParquetGrepError
from parquet_grep.logging_utils import configure_logging
from parquet_grep.options.grep import GrepOptions

logger = logging.getLogger(__name__)


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    """
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _load_base_options(parsed_args: argparse.Namespace) -> GrepOptions:
    """Load configuration unless ``--no-config`` was given."""
    if parsed_args.no_config:
        return GrepOptions()
    return load_options(explicit_path=parsed_args.config, env_var_path=os.environ.get(CONFIG_ENV_VAR))


def run_grep(parsed_args: argparse.Namespace) -> int:
    """Run a search for already-parsed arguments and return the exit code."""
    from parquet_grep.renderers import TransformSettings, create_renderer
    from parquet_grep.search.service import GrepService

    options = build_options(parsed_args, _load_base_options(parsed_args))

    settings = TransformSettings(budget=options.trim, highlight=should_highlight(options.color, sys.stdout))
    use_rich = options.view_mode == "table" and should_use_rich_output(options.rich, sys.stdout)
    renderer = create_renderer(options.view_mode, settings, use_rich=use_rich)

    # The query is compiled here, before any file is opened
    service = GrepService(parsed_args.query, options, renderer=renderer)
    summary = service.run(parsed_args.path)

    if summary.no_files and parsed_args.path is None:
        print("No .parquet files found in current directory", file=sys.stderr)

    logger.debug(
        f"Searched {summary.files_searched} file(s): {summary.files_matched} with matches, "
        f"{summary.matches_emitted} match(es) shown, {len(summary.failures)} unreadable"
    )
    return EXIT_SUCCESS


def main(args: list[str] | None = None) -> int:
    """Execute the parquet-grep CLI and return its exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    try:
        return run_grep(parsed_args)
    except ParquetGrepError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        return EXIT_ERROR
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        print(f"Unexpected error: {e}", file=sys.stderr)
        return EXIT_ERROR


__all__ = ["main", "run_grep"]
