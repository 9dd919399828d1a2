#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Utility helpers for parquet-grep."""

from parquet_grep.utils.values import stringify_value, to_json_compatible

__all__ = ["stringify_value", "to_json_compatible"]
