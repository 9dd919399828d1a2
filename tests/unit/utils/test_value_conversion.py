import datetime as dt
from decimal import Decimal

import pytest

from parquet_grep.utils.values import (
    format_nanosecond_duration,
    format_nanosecond_time,
    format_nanosecond_timestamp,
    stringify_value,
    to_json_compatible,
)


@pytest.mark.unit
class TestStringifyValue:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("text", "text"),
            (True, "true"),
            (False, "false"),
            (42, "42"),
            (-7, "-7"),
            (1.5, "1.5"),
            (0.1, "0.1"),
            (1.0, "1"),
            (-0.0, "0"),
            (100.0, "100"),
            (1e-05, "0.00001"),
            (1.5e-07, "1.5e-7"),
            (-2.5e-07, "-2.5e-7"),
            (1e21, "1e+21"),
            (1.2345678901234568e20, "123456789012345680000"),
            (float("nan"), "NaN"),
            (float("inf"), "Infinity"),
            (float("-inf"), "-Infinity"),
            (Decimal("12.500"), "12.500"),
            (dt.date(2024, 2, 29), "2024-02-29"),
            (dt.datetime(2024, 1, 2, 3, 4, 5), "2024-01-02T03:04:05"),
            (dt.time(13, 30), "13:30:00"),
            (b"bytes", "bytes"),
        ],
    )
    def test_scalars(self, value, expected: str) -> None:
        assert stringify_value(value) == expected

    def test_null_has_no_text(self) -> None:
        assert stringify_value(None) is None

    def test_invalid_utf8_bytes_are_replaced(self) -> None:
        assert stringify_value(b"ok\xff") == "ok�"

    def test_nested_values_are_compact_json(self) -> None:
        assert stringify_value({"a": [1, None, "x"]}) == '{"a":[1,null,"x"]}'
        assert stringify_value(["é"]) == '["é"]'

    def test_map_pairs_are_lists(self) -> None:
        assert stringify_value([("k", 1)]) == '[["k",1]]'

    def test_unknown_types_fall_back_to_str(self) -> None:
        assert stringify_value(dt.timedelta(seconds=5)) == "0:00:05"


@pytest.mark.unit
class TestToJsonCompatible:
    def test_safe_integers_stay_numbers(self) -> None:
        assert to_json_compatible(2**53 - 1) == 2**53 - 1
        assert to_json_compatible(-(2**53 - 1)) == -(2**53 - 1)

    def test_large_integers_become_strings(self) -> None:
        assert to_json_compatible(2**53) == str(2**53)
        assert to_json_compatible(-(2**63)) == str(-(2**63))

    def test_bool_is_not_treated_as_int(self) -> None:
        assert to_json_compatible(True) is True

    def test_decimal_keeps_precision(self) -> None:
        assert to_json_compatible(Decimal("0.10000000000000000001")) == "0.10000000000000000001"

    def test_non_finite_floats_become_null(self) -> None:
        assert to_json_compatible(float("nan")) is None
        assert to_json_compatible(float("inf")) is None
        assert to_json_compatible(2.5) == 2.5

    def test_temporal_values(self) -> None:
        assert to_json_compatible(dt.date(2024, 1, 1)) == "2024-01-01"
        assert to_json_compatible(dt.timedelta(days=1)) == "1 day, 0:00:00"

    def test_bytes_become_base64(self) -> None:
        assert to_json_compatible(b"\x00\x01") == "AAE="

    def test_nested_structures(self) -> None:
        value = {1: (2**60, None), "m": {"d": Decimal("1.0")}}
        assert to_json_compatible(value) == {"1": [str(2**60), None], "m": {"d": "1.0"}}


@pytest.mark.unit
class TestNanosecondFormatting:
    def test_timestamp(self) -> None:
        assert format_nanosecond_timestamp(1_700_000_000_000_000_001) == "2023-11-14T22:13:20.000000001"
        assert format_nanosecond_timestamp(0, utc=True) == "1970-01-01T00:00:00+00:00"

    def test_timestamp_before_epoch(self) -> None:
        assert format_nanosecond_timestamp(-1) == "1969-12-31T23:59:59.999999999"

    def test_duration(self) -> None:
        assert format_nanosecond_duration(86_400_000_000_007) == "1 day, 0:00:00.000000007"
        assert format_nanosecond_duration(5_000_000_000) == "0:00:05"

    def test_time_of_day(self) -> None:
        assert format_nanosecond_time(45_296_000_000_123) == "12:34:56.000000123"
