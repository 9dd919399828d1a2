import datetime as dt
import json
from decimal import Decimal

import pytest

from parquet_grep.constants import HIGHLIGHT_END, HIGHLIGHT_START
from parquet_grep.renderers import create_renderer
from parquet_grep.renderers.jsonl import JsonLinesRenderer
from parquet_grep.renderers.transform import TransformSettings
from parquet_grep.search.pattern import compile_pattern
from parquet_grep.search.types import FileResult, Match


def make_result(records: list[dict], query: str = "alice", truncated: bool = False) -> FileResult:
    pattern = compile_pattern(query)
    matches = tuple(Match(row_offset=i * 2, record=r, pattern=pattern) for i, r in enumerate(records))
    return FileResult(file_id="users.parquet", matches=matches, truncated=truncated)


@pytest.mark.unit
class TestJsonLinesRenderer:
    def test_one_compact_line_per_match(self) -> None:
        result = make_result([{"id": 1, "name": "alice"}, {"id": 2, "name": "alice b"}])

        lines = list(JsonLinesRenderer().render(result))

        assert lines == [
            '{"filename":"users.parquet","rowOffset":0,"value":{"id":1,"name":"alice"}}',
            '{"filename":"users.parquet","rowOffset":2,"value":{"id":2,"name":"alice b"}}',
        ]

    def test_truncation_marker(self) -> None:
        lines = list(JsonLinesRenderer().render(make_result([{"name": "alice"}], truncated=True)))
        assert lines[-1] == "..."
        assert len(lines) == 2

    def test_empty_result_renders_nothing(self) -> None:
        assert list(JsonLinesRenderer().render(FileResult(file_id="x.parquet", truncated=True))) == []

    def test_every_line_is_valid_json(self) -> None:
        record = {
            "big": 2**60,
            "price": Decimal("12.50"),
            "when": dt.datetime(2024, 1, 2, 3, 4, 5),
            "blob": b"alice",
            "nan": float("nan"),
            "tags": ["alice", None],
            "nested": {"k": 1},
            "missing": None,
        }
        line = next(JsonLinesRenderer().render(make_result([record])))

        value = json.loads(line)["value"]

        assert value == {
            "big": str(2**60),
            "price": "12.50",
            "when": "2024-01-02T03:04:05",
            "blob": "YWxpY2U=",
            "nan": None,
            "tags": ["alice", None],
            "nested": {"k": 1},
            "missing": None,
        }

    def test_non_ascii_is_kept_verbatim(self) -> None:
        line = next(JsonLinesRenderer().render(make_result([{"name": "alice é"}])))
        assert "alice é" in line

    def test_string_leaves_are_trimmed_and_highlighted(self) -> None:
        record = {"bio": "x" * 50 + "alice" + "y" * 50, "list": ["alice"]}
        renderer = JsonLinesRenderer(TransformSettings(budget=15, highlight=True))

        obj = renderer.to_object(make_result([record]).matches[0], "users.parquet")

        hl = f"{HIGHLIGHT_START}alice{HIGHLIGHT_END}"
        assert obj["value"]["bio"] == f"…xxxxx{hl}yyyyy…"
        assert obj["value"]["list"] == [hl]

    def test_factory_returns_jsonl_even_when_rich_requested(self) -> None:
        assert isinstance(create_renderer("jsonl", use_rich=True), JsonLinesRenderer)
