#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Options controlling how remote Parquet files are read over HTTP."""

from __future__ import annotations

from dataclasses import dataclass, field

from parquet_grep.constants import DEFAULT_HTTP_TIMEOUT, DEFAULT_MAX_REDIRECTS, DEFAULT_USER_AGENT
from parquet_grep.exceptions import ValidationError
from parquet_grep.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class RemoteOptions(CloneFrozenMixin):
    """Settings for HTTP range reads of remote Parquet files.

    Parameters
    ----------
    timeout : float, default 30.0
        Timeout in seconds applied to each HTTP request.
    max_redirects : int, default 5
        Maximum number of redirects to follow per request.
    require_https : bool, default False
        Reject plain ``http://`` locators when True.
    user_agent : str
        User-Agent header sent with every request.
    block_size : int, default 1 MiB
        Read-ahead buffer size. Each range request fetches at least this many
        bytes, so small metadata reads do not turn into many tiny requests.

    """

    timeout: float = field(
        default=DEFAULT_HTTP_TIMEOUT,
        metadata={"help": "Timeout in seconds for each HTTP request", "type": float},
    )
    max_redirects: int = field(
        default=DEFAULT_MAX_REDIRECTS,
        metadata={"help": "Maximum number of HTTP redirects to follow", "type": int},
    )
    require_https: bool = field(
        default=False,
        metadata={"help": "Only allow https:// locators"},
    )
    user_agent: str = field(
        default=DEFAULT_USER_AGENT,
        metadata={"help": "User-Agent header for remote requests"},
    )
    block_size: int = field(
        default=1024 * 1024,
        metadata={"help": "Minimum number of bytes fetched per range request", "type": int},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges."""
        if self.timeout <= 0:
            raise ValidationError("timeout must be positive", parameter_name="timeout", parameter_value=self.timeout)
        if self.max_redirects < 0:
            raise ValidationError(
                "max_redirects cannot be negative", parameter_name="max_redirects", parameter_value=self.max_redirects
            )
        if self.block_size <= 0:
            raise ValidationError(
                "block_size must be positive", parameter_name="block_size", parameter_value=self.block_size
            )


__all__ = ["RemoteOptions"]
