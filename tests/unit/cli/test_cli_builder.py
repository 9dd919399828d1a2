import pytest

from parquet_grep.cli.builder import (
    build_options,
    collect_overrides,
    create_parser,
    parse_non_negative_int,
)
from parquet_grep.exceptions import InvalidWindowParameterError, ValidationError
from parquet_grep.options import GrepOptions, RemoteOptions


def parse(*argv: str):
    return create_parser().parse_args(list(argv))


@pytest.mark.unit
@pytest.mark.cli
class TestCreateParser:
    def test_positionals(self) -> None:
        parsed = parse("alice", "data/")
        assert parsed.query == "alice"
        assert parsed.path == "data/"

    def test_path_is_optional(self) -> None:
        assert parse("alice").path is None

    def test_case_flags_are_mutually_exclusive(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            parse("-i", "-s", "alice")
        assert exc_info.value.code == 2

    def test_view_flags_are_mutually_exclusive(self) -> None:
        with pytest.raises(SystemExit):
            parse("--jsonl", "--table", "alice")

    def test_window_values_are_raw_strings(self) -> None:
        parsed = parse("-m", "3", "--offset", "x", "alice")
        assert parsed.limit == "3"
        assert parsed.offset == "x"

    def test_help_text_comes_from_option_metadata(self) -> None:
        help_text = create_parser().format_help()
        assert "Maximum matches shown per file (0 = unlimited)" in help_text
        assert "Select rows where no field matches the pattern" in help_text

    def test_version(self, capsys: pytest.CaptureFixture) -> None:
        with pytest.raises(SystemExit) as exc_info:
            parse("--version")
        assert exc_info.value.code == 0
        assert "parquet-grep 0.1.0" in capsys.readouterr().out


@pytest.mark.unit
@pytest.mark.cli
class TestParseNonNegativeInt:
    @pytest.mark.parametrize("raw,expected", [("0", 0), ("12", 12), ("007", 7)])
    def test_valid(self, raw: str, expected: int) -> None:
        assert parse_non_negative_int("limit", raw) == expected

    @pytest.mark.parametrize("raw", ["-1", "abc", "1.5", ""])
    def test_invalid_window_values(self, raw: str) -> None:
        with pytest.raises(InvalidWindowParameterError) as exc_info:
            parse_non_negative_int("offset", raw)
        assert exc_info.value.parameter_name == "offset"

    def test_invalid_trim_is_a_validation_error(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            parse_non_negative_int("trim", "-3")
        assert not isinstance(exc_info.value, InvalidWindowParameterError)


@pytest.mark.unit
@pytest.mark.cli
class TestBuildOptions:
    def test_no_flags_keeps_base(self) -> None:
        base = GrepOptions(limit=9)
        assert build_options(parse("alice"), base) is base

    def test_flags_override_base(self) -> None:
        options = build_options(parse("-m", "0", "--offset", "2", "-v", "--jsonl", "--trim", "10", "alice"))
        assert options.limit == 0
        assert options.offset == 2
        assert options.invert is True
        assert options.view_mode == "jsonl"
        assert options.trim == 10

    def test_case_flag_clears_opposite_config_flag(self) -> None:
        base = GrepOptions(case_sensitive=True)
        options = build_options(parse("-i", "alice"), base)
        assert options.ignore_case is True
        assert options.case_sensitive is False

    def test_remote_flags(self) -> None:
        base = GrepOptions(remote=RemoteOptions(max_redirects=2))
        options = build_options(parse("--timeout", "4.5", "--require-https", "alice"), base)
        assert options.remote.timeout == 4.5
        assert options.remote.require_https is True
        assert options.remote.max_redirects == 2

    def test_collect_overrides_only_includes_given_flags(self) -> None:
        assert collect_overrides(parse("--color", "never", "alice")) == {"color": "never"}

    def test_invalid_limit_raises(self) -> None:
        with pytest.raises(InvalidWindowParameterError):
            build_options(parse("-m", "-4", "alice"))
