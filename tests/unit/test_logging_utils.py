import logging
from pathlib import Path

import pytest

from parquet_grep.logging_utils import configure_logging, resolve_log_level


@pytest.mark.unit
@pytest.mark.parametrize(
    "value,expected",
    [("debug", logging.DEBUG), ("WARNING", logging.WARNING), (logging.ERROR, logging.ERROR), ("nope", logging.INFO)],
)
def test_resolve_log_level(value, expected: int) -> None:
    assert resolve_log_level(value) == expected


@pytest.mark.unit
def test_configure_logging_uses_stderr_only() -> None:
    root = configure_logging("warning")

    assert root.level == logging.WARNING
    assert len(root.handlers) == 1
    handler = root.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    assert handler.formatter._fmt == "%(levelname)s: %(message)s"


@pytest.mark.unit
def test_configure_logging_trace_mode_and_file(tmp_path: Path) -> None:
    log_file = tmp_path / "run.log"

    root = configure_logging(logging.DEBUG, log_file=str(log_file), trace_mode=True)
    logging.getLogger("parquet_grep.test").debug("hello from test")
    for handler in root.handlers:
        handler.flush()

    assert len(root.handlers) == 2
    assert "[parquet_grep.test] hello from test" in log_file.read_text(encoding="utf-8")
    for handler in root.handlers:
        handler.close()


@pytest.mark.unit
def test_configure_logging_bad_log_file_warns(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    root = configure_logging("info", log_file=str(tmp_path / "missing-dir" / "run.log"))

    assert len(root.handlers) == 1
    assert "WARNING: Could not create log file" in capsys.readouterr().err
