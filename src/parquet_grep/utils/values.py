#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/parquet_grep/utils/values.py
"""Value conversion helpers shared by the matcher and the renderers.

Decoded Parquet values arrive as native Python objects (``int``, ``Decimal``,
``datetime``, ``bytes``, nested lists and dicts, ...). Two conversions are
needed:

- ``stringify_value`` gives the text the pattern is searched against and the
  text shown in table cells. It is deterministic and locale-independent.
- ``to_json_compatible`` gives a structure ``json.dumps`` can encode without
  losing information a JSON reader would silently corrupt (large integers,
  decimals).

"""

from __future__ import annotations

import base64
import datetime as dt
import json
import math
from decimal import Decimal
from typing import Any, Mapping

from parquet_grep.constants import MAX_SAFE_INTEGER

_BINARY_TYPES = (bytes, bytearray, memoryview)
_TEMPORAL_TYPES = (dt.datetime, dt.date, dt.time)
_EPOCH = dt.datetime(1970, 1, 1)
_NANOS_PER_SECOND = 1_000_000_000


def _format_float(value: float) -> str:
    """Shortest round-trip digits in plain or exponent notation.

    Integral values drop the ``.0``, plain notation covers ``1e-6 <= |x| < 1e21``
    and the exponent form has no padding (``1e+21``, ``1.5e-7``).
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    n = exponent + k  # value == 0.<digits> * 10**n

    if k <= n <= 21:
        body = digits + "0" * (n - k)
    elif 0 < n <= 21:
        body = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        body = "0." + "0" * -n + digits
    else:
        mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
        body = f"{mantissa}e{'+' if n - 1 >= 0 else '-'}{abs(n - 1)}"
    return sign + body


def _nanosecond_fraction(nanos: int) -> str:
    return f".{nanos:09d}" if nanos else ""


def format_nanosecond_timestamp(value: int, utc: bool = False) -> str:
    """ISO 8601 text for nanoseconds since the Unix epoch.

    ``utc`` appends ``+00:00`` for zone-aware columns, whose stored values
    are UTC instants.

    Examples
    --------
    >>> format_nanosecond_timestamp(1_700_000_000_000_000_001)
    '2023-11-14T22:13:20.000000001'

    """
    seconds, nanos = divmod(value, _NANOS_PER_SECOND)
    text = (_EPOCH + dt.timedelta(seconds=seconds)).isoformat() + _nanosecond_fraction(nanos)
    return text + "+00:00" if utc else text


def format_nanosecond_duration(value: int) -> str:
    """``str(timedelta)`` layout with nine fractional digits."""
    seconds, nanos = divmod(value, _NANOS_PER_SECOND)
    return str(dt.timedelta(seconds=seconds)) + _nanosecond_fraction(nanos)


def format_nanosecond_time(value: int) -> str:
    """ISO time of day for nanoseconds since midnight."""
    seconds, nanos = divmod(value, _NANOS_PER_SECOND)
    minutes, second = divmod(seconds, 60)
    hour, minute = divmod(minutes, 60)
    return dt.time(hour, minute, second).isoformat() + _nanosecond_fraction(nanos)


def to_json_compatible(value: Any) -> Any:
    """Convert a decoded value into a structure that encodes losslessly as JSON.

    Parameters
    ----------
    value : Any
        Decoded field value, possibly nested

    Returns
    -------
    Any
        ``None``, ``bool``, ``int``, ``float``, ``str``, ``list`` or ``dict``

    Notes
    -----
    - Integers outside +/-(2**53 - 1) become decimal strings
    - ``Decimal`` becomes its string form
    - Dates and times become ISO 8601 strings
    - Binary values become base64 text
    - NaN and infinities become ``None``
    - Map columns decoded as ``(key, value)`` pairs stay lists of pairs

    """
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, int):
        return str(value) if abs(value) > MAX_SAFE_INTEGER else value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, _TEMPORAL_TYPES):
        return value.isoformat()
    if isinstance(value, dt.timedelta):
        return str(value)
    if isinstance(value, _BINARY_TYPES):
        return base64.b64encode(bytes(value)).decode("ascii")
    if isinstance(value, Mapping):
        return {str(key): to_json_compatible(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_compatible(item) for item in value]
    return str(value)


def stringify_value(value: Any) -> str | None:
    """Return the searchable text form of a field value, or None for nulls.

    Examples
    --------
    >>> stringify_value(True)
    'true'
    >>> stringify_value(float("-inf"))
    '-Infinity'
    >>> stringify_value(1.0), stringify_value(1e-05), stringify_value(1e21)
    ('1', '0.00001', '1e+21')
    >>> stringify_value({"a": [1, 2]})
    '{"a":[1,2]}'

    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, _TEMPORAL_TYPES):
        return value.isoformat()
    if isinstance(value, _BINARY_TYPES):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(to_json_compatible(value), ensure_ascii=False, separators=(",", ":"))
    return str(value)


__all__ = [
    "format_nanosecond_duration",
    "format_nanosecond_time",
    "format_nanosecond_timestamp",
    "stringify_value",
    "to_json_compatible",
]
