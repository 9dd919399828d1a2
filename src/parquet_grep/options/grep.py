"""Configuration options for a grep run."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from parquet_grep.constants import (
    COLOR_MODES,
    DEFAULT_COLOR_MODE,
    DEFAULT_LIMIT,
    DEFAULT_OFFSET,
    DEFAULT_TRIM,
    DEFAULT_VIEW_MODE,
    VIEW_MODES,
    ColorMode,
    ViewMode,
)
from parquet_grep.exceptions import InvalidWindowParameterError, ValidationError
from parquet_grep.options.base import CloneFrozenMixin
from parquet_grep.options.network import RemoteOptions


def _is_non_negative_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


@dataclass(frozen=True)
class GrepOptions(CloneFrozenMixin):
    """Search configuration used by the CLI and the Python API."""

    limit: int = field(
        default=DEFAULT_LIMIT,
        metadata={
            "help": "Maximum matches shown per file (0 = unlimited)",
            "type": int,
            "importance": "core",
        },
    )
    offset: int = field(
        default=DEFAULT_OFFSET,
        metadata={
            "help": "Number of leading matches skipped per file",
            "type": int,
            "importance": "core",
        },
    )
    ignore_case: bool = field(
        default=False,
        metadata={
            "help": "Force case-insensitive matching, overriding smart case",
            "importance": "core",
        },
    )
    case_sensitive: bool = field(
        default=False,
        metadata={
            "help": "Force case-sensitive matching, overriding smart case",
            "importance": "core",
        },
    )
    invert: bool = field(
        default=False,
        metadata={
            "help": "Select rows where no field matches the pattern",
            "importance": "core",
        },
    )
    trim: int = field(
        default=DEFAULT_TRIM,
        metadata={
            "help": "Characters of context kept around the match in long strings (0 = no trimming)",
            "type": int,
            "importance": "core",
        },
    )
    view_mode: ViewMode = field(
        default=DEFAULT_VIEW_MODE,
        metadata={
            "help": "Output format",
            "choices": list(VIEW_MODES),
            "importance": "core",
        },
    )
    color: ColorMode = field(
        default=DEFAULT_COLOR_MODE,
        metadata={
            "help": "Highlight matches: auto (only on a terminal), always, never",
            "choices": list(COLOR_MODES),
            "importance": "advanced",
        },
    )
    rich: bool = field(
        default=False,
        metadata={
            "help": "Render tables with rich when writing to a terminal",
            "importance": "advanced",
        },
    )
    remote: RemoteOptions = field(
        default_factory=RemoteOptions,
        metadata={
            "help": "Settings for reading http(s):// locators",
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Validate window parameters and enumerated settings at construction time."""
        if not _is_non_negative_int(self.limit):
            raise InvalidWindowParameterError("limit", self.limit)
        if not _is_non_negative_int(self.offset):
            raise InvalidWindowParameterError("offset", self.offset)
        if not _is_non_negative_int(self.trim):
            raise ValidationError("trim must be a non-negative integer", parameter_name="trim", parameter_value=self.trim)
        if self.ignore_case and self.case_sensitive:
            raise ValidationError(
                "ignore_case and case_sensitive are mutually exclusive", parameter_name="case_sensitive"
            )
        if self.view_mode not in VIEW_MODES:
            raise ValidationError(
                f"view_mode must be one of {', '.join(VIEW_MODES)}",
                parameter_name="view_mode",
                parameter_value=self.view_mode,
            )
        if self.color not in COLOR_MODES:
            raise ValidationError(
                f"color must be one of {', '.join(COLOR_MODES)}", parameter_name="color", parameter_value=self.color
            )
        if not isinstance(self.remote, RemoteOptions):
            raise ValidationError("remote must be a RemoteOptions instance", parameter_name="remote")


__all__ = ["GrepOptions"]
