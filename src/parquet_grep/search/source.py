#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/parquet_grep/search/source.py
"""Lazy record streams over Parquet row groups.

A Parquet file is split into row groups that can be decoded independently.
The adapter reads the file's structural metadata up front, then decodes one
row group at a time and yields its records with their logical row offsets.
Only the current group is held in memory, and a consumer that stops early
(closing the generator) prevents any further group from being decoded.

Local paths are opened directly by pyarrow. ``http://`` and ``https://``
locators are opened through ``HttpRangeFile`` so that only the footer and the
consumed row groups are downloaded.

"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Protocol

from parquet_grep.constants import DEPS_PARQUET
from parquet_grep.exceptions import SecurityError, SourceUnreadableError
from parquet_grep.options.network import RemoteOptions
from parquet_grep.utils.decorators import requires_dependencies
from parquet_grep.utils.network import is_url, open_remote_file
from parquet_grep.utils.values import (
    format_nanosecond_duration,
    format_nanosecond_time,
    format_nanosecond_timestamp,
)

logger = logging.getLogger(__name__)

Record = dict[str, Any]


class RecordGroupReader(Protocol):
    """Structural access to a file made of independently decodable record groups."""

    def row_group_sizes(self) -> list[int]:
        """Return the number of records in each group, in file order."""
        ...

    def read_row_group(self, index: int) -> list[Record]:
        """Decode one group into a list of records."""
        ...

    def close(self) -> None:
        """Release the underlying file or connection."""
        ...


ReaderOpener = Callable[[str], RecordGroupReader]


def _read_errors() -> tuple[type[BaseException], ...]:
    """Exception types that mean "this source cannot be read"."""
    import pyarrow as pa

    return (OSError, ValueError, EOFError, SecurityError, pa.ArrowException)


def _nanosecond_formatter(data_type: Any) -> Callable[[int], str] | None:
    """Text formatter for a nanosecond temporal type, or None for any other type."""
    import pyarrow as pa

    if getattr(data_type, "unit", None) != "ns":
        return None
    if pa.types.is_timestamp(data_type):
        utc = data_type.tz is not None
        return lambda value: format_nanosecond_timestamp(value, utc=utc)
    if pa.types.is_duration(data_type):
        return format_nanosecond_duration
    if pa.types.is_time64(data_type):
        return format_nanosecond_time
    return None


def _decode_table(table: Any) -> list[Record]:
    """Convert a pyarrow table to records.

    Nanosecond timestamps, durations and times do not fit Python's
    microsecond types, so those top-level columns are decoded as ISO text
    from their raw integer values instead.
    """
    import pyarrow as pa

    for position, field in enumerate(table.schema):
        formatter = _nanosecond_formatter(field.type)
        if formatter is None:
            continue
        raw = table.column(position).cast(pa.int64()).to_pylist()
        texts = pa.array([None if value is None else formatter(value) for value in raw], type=pa.string())
        table = table.set_column(position, pa.field(field.name, pa.string()), texts)
    return table.to_pylist()


class ParquetGroupReader:
    """``RecordGroupReader`` backed by ``pyarrow.parquet.ParquetFile``.

    Parameters
    ----------
    locator : str
        Local path or http(s) locator
    remote_options : RemoteOptions, optional
        HTTP settings for remote locators
    transport : httpx.BaseTransport, optional
        Transport override for remote locators (tests)

    """

    def __init__(self, locator: str, remote_options: RemoteOptions | None = None, transport: Any = None) -> None:
        """Open the file and read its footer metadata."""
        import pyarrow.parquet as pq

        self.locator = locator
        self._handle: Any = None
        if is_url(locator):
            self._handle = open_remote_file(locator, remote_options, transport=transport)
        try:
            self._file = pq.ParquetFile(self._handle if self._handle is not None else locator)
            metadata = self._file.metadata
            self._sizes = [metadata.row_group(index).num_rows for index in range(metadata.num_row_groups)]
        except BaseException:
            if self._handle is not None:
                self._handle.close()
            raise

    @property
    def schema_names(self) -> list[str]:
        """Column names in file order."""
        return list(self._file.schema_arrow.names)

    def row_group_sizes(self) -> list[int]:
        """Return the number of rows in each row group."""
        return list(self._sizes)

    def read_row_group(self, index: int) -> list[Record]:
        """Decode one row group into a list of dicts keyed by column name."""
        return _decode_table(self._file.read_row_group(index))

    def close(self) -> None:
        """Close the Parquet file and any HTTP connection behind it."""
        try:
            self._file.close()
        finally:
            if self._handle is not None:
                self._handle.close()
                self._handle = None


@requires_dependencies("parquet", DEPS_PARQUET)
def open_reader(
    locator: str,
    file_id: str | None = None,
    remote_options: RemoteOptions | None = None,
    transport: Any = None,
) -> ParquetGroupReader:
    """Open a Parquet source and read its structural metadata.

    Parameters
    ----------
    locator : str
        Local path or http(s) locator
    file_id : str, optional
        Identifier used in errors (defaults to ``locator``)
    remote_options : RemoteOptions, optional
        HTTP settings for remote locators
    transport : httpx.BaseTransport, optional
        Transport override for remote locators

    Returns
    -------
    ParquetGroupReader
        Open reader; the caller must close it

    Raises
    ------
    SourceUnreadableError
        If the source is missing, not Parquet, or unreachable. Raised before
        any record is produced.

    """
    file_id = file_id or locator
    try:
        reader = ParquetGroupReader(locator, remote_options=remote_options, transport=transport)
    except _read_errors() as e:
        raise SourceUnreadableError(file_id, original_error=e) from e

    logger.debug(f"Opened {file_id}: {len(reader.row_group_sizes())} row group(s)")
    return reader


def iter_records(reader: RecordGroupReader, file_id: str) -> Iterator[tuple[int, Record]]:
    """Yield ``(row_offset, record)`` pairs one row group at a time.

    The first offset of group *g* is the total row count of the groups before
    it, so offsets are zero-based logical row positions across the whole file.

    Raises
    ------
    SourceUnreadableError
        If decoding a row group fails. Records already yielded from earlier
        groups stay valid for the caller to discard.

    """
    try:
        sizes = reader.row_group_sizes()
    except _read_errors() as e:
        raise SourceUnreadableError(file_id, original_error=e) from e

    group_start = 0
    for index, size in enumerate(sizes):
        try:
            records = reader.read_row_group(index)
        except SourceUnreadableError:
            raise
        except _read_errors() as e:
            raise SourceUnreadableError(file_id, original_error=e) from e

        for position, record in enumerate(records):
            yield group_start + position, record
        group_start += size


@contextmanager
def stream_records(
    locator: str,
    file_id: str | None = None,
    remote_options: RemoteOptions | None = None,
    transport: Any = None,
) -> Iterator[Iterator[tuple[int, Record]]]:
    """Open a source and yield its lazy record stream, closing everything on exit.

    Examples
    --------
        >>> with stream_records("data.parquet") as records:
        ...     for row_offset, record in records:
        ...         print(row_offset, record)

    """
    file_id = file_id or locator
    reader = open_reader(locator, file_id=file_id, remote_options=remote_options, transport=transport)
    records = iter_records(reader, file_id)
    try:
        yield records
    finally:
        records.close()
        reader.close()


__all__ = [
    "ParquetGroupReader",
    "ReaderOpener",
    "Record",
    "RecordGroupReader",
    "iter_records",
    "open_reader",
    "stream_records",
]
