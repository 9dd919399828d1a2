"""Test utilities for the parquet-grep test suite.

This module provides helpers for writing small Parquet files with several row
groups, an in-memory record group reader that counts decoded groups, and an
HTTP handler that serves byte ranges for ``httpx.MockTransport``.
"""

import tempfile
from pathlib import Path
from typing import Any, Iterable, Mapping, Sequence

import pyarrow as pa
import pyarrow.parquet as pq


def write_parquet(path: Path, records: Sequence[Mapping[str, Any]], row_group_size: int = 4) -> Path:
    """Write records to a Parquet file, splitting them into small row groups."""
    path.parent.mkdir(parents=True, exist_ok=True)
    table = pa.Table.from_pylist(list(records))
    pq.write_table(table, str(path), row_group_size=row_group_size)
    return path


def people_records(count: int = 12) -> list[dict[str, Any]]:
    """Build ``count`` simple records; every third name contains ``"alice"``."""
    records = []
    for index in range(count):
        name = f"alice-{index}" if index % 3 == 0 else f"bob-{index}"
        records.append({"id": index, "name": name, "city": "Paris" if index % 2 else "Berlin"})
    return records


def needle_records(total: int, needles: Iterable[int]) -> list[dict[str, Any]]:
    """Build ``total`` records where only the positions in ``needles`` contain ``"needle"``."""
    needle_positions = set(needles)
    return [
        {"id": index, "text": f"hay needle {index}" if index in needle_positions else f"hay {index}"}
        for index in range(total)
    ]


class FakeGroupReader:
    """In-memory ``RecordGroupReader`` that records which groups were decoded."""

    def __init__(self, groups: Sequence[Sequence[Mapping[str, Any]]], fail_on: int | None = None):
        self.groups = [list(group) for group in groups]
        self.fail_on = fail_on
        self.reads: list[int] = []
        self.closed = False

    def row_group_sizes(self) -> list[int]:
        return [len(group) for group in self.groups]

    def read_row_group(self, index: int) -> list[dict[str, Any]]:
        self.reads.append(index)
        if self.fail_on == index:
            raise OSError(f"corrupt row group {index}")
        return [dict(record) for record in self.groups[index]]

    def close(self) -> None:
        self.closed = True


def split_groups(records: Sequence[Mapping[str, Any]], size: int) -> list[list[Mapping[str, Any]]]:
    """Split records into consecutive groups of ``size``."""
    return [list(records[start : start + size]) for start in range(0, len(records), size)]


def range_handler(payload: bytes, support_head: bool = True, log: list | None = None):
    """Return an ``httpx.MockTransport`` handler serving ``payload`` with Range support."""
    import httpx

    def handler(request: "httpx.Request") -> "httpx.Response":
        if log is not None:
            log.append((request.method, request.headers.get("range")))
        if request.method == "HEAD":
            if not support_head:
                return httpx.Response(405)
            return httpx.Response(200, headers={"Content-Length": str(len(payload))})

        range_header = request.headers.get("range")
        if range_header is None:
            return httpx.Response(200, content=payload)

        start_text, _, end_text = range_header.removeprefix("bytes=").partition("-")
        start = int(start_text)
        end = min(int(end_text), len(payload) - 1)
        body = payload[start : end + 1]
        return httpx.Response(
            206,
            content=body,
            headers={"Content-Range": f"bytes {start}-{end}/{len(payload)}"},
        )

    return handler


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp())


def cleanup_test_dir(temp_dir: Path) -> None:
    """Clean up test directory and files."""
    import shutil

    if temp_dir.exists():
        shutil.rmtree(temp_dir)
