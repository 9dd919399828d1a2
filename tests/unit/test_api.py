from pathlib import Path

import pytest
from utils import people_records, write_parquet

import parquet_grep
from parquet_grep import FileFailure, FileResult, GrepOptions, grep, grep_to_string
from parquet_grep.exceptions import InvalidPatternError, InvalidWindowParameterError


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    root = tmp_path / "data"
    write_parquet(root / "a.parquet", people_records(12))
    write_parquet(root / "b.parquet", [{"id": 1, "note": "nothing here"}])
    (root / "c.parquet").write_text("garbage", encoding="utf-8")
    return root


@pytest.mark.unit
class TestGrep:
    def test_returns_one_outcome_per_file(self, data_dir: Path) -> None:
        outcomes = grep("alice", cwd=str(data_dir))

        assert [o.file_id for o in outcomes] == ["a.parquet", "b.parquet", "c.parquet"]
        assert isinstance(outcomes[0], FileResult)
        assert [m.row_offset for m in outcomes[0].matches] == [0, 3, 6, 9]
        assert isinstance(outcomes[1], FileResult)
        assert outcomes[1].is_empty
        assert isinstance(outcomes[2], FileFailure)

    def test_overrides(self, data_dir: Path) -> None:
        outcomes = grep("alice", "a.parquet", cwd=str(data_dir), limit=2, offset=1)
        result = outcomes[0]
        assert isinstance(result, FileResult)
        assert [m.row_offset for m in result.matches] == [3, 6]
        assert result.truncated is True

    def test_options_and_overrides_combine(self, data_dir: Path) -> None:
        outcomes = grep("ALICE", "a.parquet", GrepOptions(limit=0), cwd=str(data_dir), ignore_case=True)
        assert len(outcomes[0].matches) == 4

    def test_smart_case(self, data_dir: Path) -> None:
        assert grep("ALICE", "a.parquet", cwd=str(data_dir))[0].matches == ()

    def test_invalid_pattern(self, data_dir: Path) -> None:
        with pytest.raises(InvalidPatternError):
            grep("[", cwd=str(data_dir))

    def test_invalid_window(self, data_dir: Path) -> None:
        with pytest.raises(InvalidWindowParameterError):
            grep("alice", cwd=str(data_dir), limit=-3)


@pytest.mark.unit
class TestGrepToString:
    def test_markdown(self, data_dir: Path) -> None:
        text = grep_to_string("alice-3", "a.parquet", cwd=str(data_dir))
        assert text == "## a.parquet\n\n| Row | id | name | city |\n|-----|-----|-----|-----|\n| 3 | 3 | alice-3 | Paris |\n\n"

    def test_jsonl(self, data_dir: Path) -> None:
        text = grep_to_string("alice-3", "a.parquet", cwd=str(data_dir), view_mode="jsonl")
        assert text == '{"filename":"a.parquet","rowOffset":3,"value":{"id":3,"name":"alice-3","city":"Paris"}}\n'

    def test_color_always_highlights(self, data_dir: Path) -> None:
        text = grep_to_string("alice-3", "a.parquet", cwd=str(data_dir), color="always")
        assert "\x1b[7malice-3\x1b[27m" in text

    def test_nothing_matched(self, data_dir: Path) -> None:
        assert grep_to_string("zzz", cwd=str(data_dir)) == ""


@pytest.mark.unit
def test_package_exports() -> None:
    assert parquet_grep.__version__ == "0.1.0"
    for name in parquet_grep.__all__:
        assert hasattr(parquet_grep, name)
