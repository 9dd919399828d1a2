"""HTTP helpers for reading remote Parquet files.

Parquet readers need random access: the footer is read first, then only the
row groups that are actually consumed. ``HttpRangeFile`` exposes a remote
resource as a seekable, read-only file object that fetches byte ranges on
demand, so early termination also avoids downloading unread row groups.

Functions
---------
- is_url: Check whether a locator uses an http(s) scheme
- is_network_disabled: Check the global network kill switch
- validate_remote_locator: Reject malformed or disallowed locators
- create_http_client: Create an httpx client with request validation hooks
- open_remote_file: Validate a locator and open it as an ``HttpRangeFile``
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/parquet_grep/utils/network.py

from __future__ import annotations

import io
import logging
import os
from typing import Any
from urllib.parse import urlparse

from parquet_grep.constants import DEPS_NETWORK, DISABLE_NETWORK_ENV, REMOTE_SCHEMES
from parquet_grep.exceptions import NetworkSecurityError
from parquet_grep.options.network import RemoteOptions
from parquet_grep.utils.decorators import requires_dependencies

logger = logging.getLogger(__name__)


def is_url(locator: str) -> bool:
    """Return True when the locator starts with an http:// or https:// scheme."""
    scheme, sep, _ = locator.partition("://")
    return bool(sep) and scheme.lower() in REMOTE_SCHEMES


def is_network_disabled() -> bool:
    """Check if network access is globally disabled via environment variable.

    Returns
    -------
    bool
        True if network access should be disabled, False otherwise

    """
    return os.getenv(DISABLE_NETWORK_ENV, "").lower() in ("true", "1", "yes", "on")


def validate_remote_locator(url: str, require_https: bool = False) -> None:
    """Validate a remote locator before any request is made.

    Parameters
    ----------
    url : str
        Locator to validate
    require_https : bool, default False
        If True, only HTTPS locators are allowed

    Raises
    ------
    NetworkSecurityError
        If the scheme is unsupported, HTTPS is required but not used, or the
        locator has no hostname

    """
    parsed = urlparse(url)
    scheme = parsed.scheme.lower()
    if scheme not in REMOTE_SCHEMES:
        raise NetworkSecurityError(f"Unsupported URL scheme: {parsed.scheme or '(none)'}")
    if require_https and scheme != "https":
        raise NetworkSecurityError(f"HTTPS required but got: {scheme}")
    if not parsed.hostname:
        raise NetworkSecurityError("URL missing hostname")
    if scheme == "http":
        logger.debug(f"Reading {url} over plain HTTP")


@requires_dependencies("network", DEPS_NETWORK)
def create_http_client(options: RemoteOptions | None = None, transport: Any = None) -> Any:
    """Create an httpx client that validates every request and redirect.

    Parameters
    ----------
    options : RemoteOptions, optional
        Timeout, redirect limit, HTTPS policy and User-Agent
    transport : httpx.BaseTransport, optional
        Transport override (``httpx.MockTransport`` in tests)

    Returns
    -------
    httpx.Client
        Configured HTTP client

    """
    import httpx

    options = options or RemoteOptions()

    def validate_request_url(request: Any) -> None:
        """Event hook to validate URLs before each request, redirects included."""
        validate_remote_locator(str(request.url), require_https=options.require_https)

    def validate_response_redirects(response: Any) -> None:
        """Event hook enforcing the redirect limit."""
        if len(response.history) > options.max_redirects:
            raise NetworkSecurityError(f"Too many redirects: {len(response.history)} > {options.max_redirects}")

    return httpx.Client(
        timeout=options.timeout,
        follow_redirects=True,
        max_redirects=options.max_redirects,
        event_hooks={"request": [validate_request_url], "response": [validate_response_redirects]},
        headers={"User-Agent": options.user_agent},
        transport=transport,
    )


class HttpRangeFile(io.RawIOBase):
    """Seekable read-only file object backed by HTTP range requests.

    Parameters
    ----------
    url : str
        Remote locator
    client : httpx.Client
        Client used for every request
    block_size : int, default 1 MiB
        Minimum number of bytes fetched per request. The last fetched block is
        kept so consecutive small reads are served locally.
    owns_client : bool, default True
        Close the client when the file is closed

    Raises
    ------
    OSError
        If the size cannot be determined or a request fails. HTTP errors are
        re-raised as ``OSError`` so readers treat them like local I/O errors.

    """

    def __init__(self, url: str, client: Any, block_size: int = 1024 * 1024, owns_client: bool = True) -> None:
        """Probe the remote size and prepare for reads."""
        super().__init__()
        self.url = url
        self._client = client
        self._block_size = block_size
        self._owns_client = owns_client
        self._position = 0
        self._block = b""
        self._block_start = 0
        self.request_count = 0
        self._size = self._probe_size()

    @property
    def size(self) -> int:
        """Total size of the remote resource in bytes."""
        return self._size

    def _request(self, method: str, headers: dict[str, str] | None = None) -> Any:
        import httpx

        self.request_count += 1
        try:
            response = self._client.request(method, self.url, headers=headers)
            if response.status_code >= 400 and method != "HEAD":
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise OSError(f"Request to {self.url} failed: {e}") from e
        return response

    def _probe_size(self) -> int:
        response = self._request("HEAD")
        length = response.headers.get("content-length", "")
        if response.status_code < 400 and length.isdigit():
            return int(length)

        logger.debug(f"HEAD gave no usable Content-Length for {self.url}, probing with a range request")
        response = self._request("GET", headers={"Range": "bytes=0-0"})
        if response.status_code == 206:
            total = response.headers.get("content-range", "").rpartition("/")[2]
            if total.isdigit():
                return int(total)
        elif response.status_code == 200:
            return len(response.content)
        raise OSError(f"Cannot determine the size of {self.url}")

    def _fetch(self, start: int, length: int) -> bytes:
        end = min(start + max(length, self._block_size), self._size) - 1
        response = self._request("GET", headers={"Range": f"bytes={start}-{end}"})
        if response.status_code == 206:
            return response.content
        # Server ignored the Range header and sent everything
        return response.content[start : end + 1]

    def _read_range(self, start: int, length: int) -> bytes:
        block_end = self._block_start + len(self._block)
        if not (self._block_start <= start and start + length <= block_end):
            self._block = self._fetch(start, length)
            self._block_start = start
        offset = start - self._block_start
        return self._block[offset : offset + length]

    def readable(self) -> bool:
        """Return True; the file supports reading."""
        return True

    def seekable(self) -> bool:
        """Return True; the file supports random access."""
        return True

    def tell(self) -> int:
        """Return the current position."""
        return self._position

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        """Move the read position and return the new absolute position."""
        if whence == io.SEEK_SET:
            position = offset
        elif whence == io.SEEK_CUR:
            position = self._position + offset
        elif whence == io.SEEK_END:
            position = self._size + offset
        else:
            raise ValueError(f"Invalid whence: {whence}")
        if position < 0:
            raise ValueError(f"Negative seek position: {position}")
        self._position = position
        return position

    def readinto(self, buffer: Any) -> int:
        """Read up to ``len(buffer)`` bytes at the current position."""
        if self.closed:
            raise ValueError("I/O operation on closed file")
        if self._position >= self._size:
            return 0
        wanted = min(len(buffer), self._size - self._position)
        data = self._read_range(self._position, wanted)
        count = len(data)
        buffer[:count] = data
        self._position += count
        return count

    def close(self) -> None:
        """Close the file and, when owned, its HTTP client."""
        if not self.closed and self._owns_client:
            self._client.close()
        self._block = b""
        super().close()


@requires_dependencies("network", DEPS_NETWORK)
def open_remote_file(url: str, options: RemoteOptions | None = None, transport: Any = None) -> HttpRangeFile:
    """Validate a remote locator and open it for random-access reads.

    Parameters
    ----------
    url : str
        http:// or https:// locator
    options : RemoteOptions, optional
        HTTP settings
    transport : httpx.BaseTransport, optional
        Transport override for tests

    Returns
    -------
    HttpRangeFile
        Open file object; the caller is responsible for closing it

    Raises
    ------
    NetworkSecurityError
        If network access is disabled or the locator is rejected
    OSError
        If the remote size cannot be determined

    """
    if is_network_disabled():
        raise NetworkSecurityError(f"Network access is disabled ({DISABLE_NETWORK_ENV} is set)")

    options = options or RemoteOptions()
    validate_remote_locator(url, require_https=options.require_https)

    client = create_http_client(options, transport=transport)
    try:
        return HttpRangeFile(url, client, block_size=options.block_size)
    except Exception:
        client.close()
        raise


__all__ = [
    "HttpRangeFile",
    "create_http_client",
    "is_network_disabled",
    "is_url",
    "open_remote_file",
    "validate_remote_locator",
]
