#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for parquet-grep.

Options are frozen dataclasses: build them once (from defaults, a config
file and CLI flags) and derive variants with ``create_updated``.
"""

from parquet_grep.options.base import CloneFrozenMixin
from parquet_grep.options.grep import GrepOptions
from parquet_grep.options.network import RemoteOptions

__all__ = ["CloneFrozenMixin", "GrepOptions", "RemoteOptions"]
