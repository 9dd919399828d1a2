import logging

import pytest

from parquet_grep.exceptions import DependencyError
from parquet_grep.utils.decorators import debug_timer, requires_dependencies
from parquet_grep.utils.packages import installed_version, unmet_requirements


@pytest.mark.unit
class TestRequiresDependencies:
    def test_present_dependency_calls_through(self) -> None:
        @requires_dependencies("parquet", [("pyarrow", "pyarrow", "")])
        def work(value: int) -> int:
            return value * 2

        assert work(4) == 8

    def test_missing_dependency_raises(self) -> None:
        @requires_dependencies("imaginary", [("not-a-real-pkg-xyz", "not_a_real_pkg_xyz", ">=1.0")])
        def work() -> None:
            raise AssertionError("should not be called")

        with pytest.raises(DependencyError) as exc_info:
            work()
        assert exc_info.value.missing_packages == [("not-a-real-pkg-xyz", ">=1.0")]
        assert "not-a-real-pkg-xyz" in str(exc_info.value)

    def test_version_mismatch_raises(self) -> None:
        @requires_dependencies("parquet", [("pyarrow", "pyarrow", ">=9999")])
        def work() -> None:
            raise AssertionError("should not be called")

        with pytest.raises(DependencyError) as exc_info:
            work()
        assert exc_info.value.version_mismatches[0][0] == "pyarrow"

    def test_preserves_metadata(self) -> None:
        @requires_dependencies("parquet", [])
        def documented() -> None:
            """Docstring kept."""

        assert documented.__name__ == "documented"
        assert documented.__doc__ == "Docstring kept."


@pytest.mark.unit
class TestUnmetRequirements:
    def test_all_satisfied(self) -> None:
        assert unmet_requirements([("pyarrow", "pyarrow", ">=1"), ("packaging", "packaging", "")]) == ([], [], None)

    def test_missing_module_keeps_first_import_error(self) -> None:
        missing, too_old, error = unmet_requirements(
            [("not-a-real-pkg-xyz", "not_a_real_pkg_xyz", ">=1.0"), ("other-fake-pkg", "other_fake_pkg", "")]
        )
        assert missing == [("not-a-real-pkg-xyz", ">=1.0"), ("other-fake-pkg", "")]
        assert too_old == []
        assert isinstance(error, ImportError)
        assert "not_a_real_pkg_xyz" in str(error)

    def test_version_outside_spec(self) -> None:
        missing, too_old, error = unmet_requirements([("pyarrow", "pyarrow", "<1")])
        assert missing == []
        assert too_old == [("pyarrow", "<1", installed_version("pyarrow"))]
        assert error is None

    def test_installed_version(self) -> None:
        assert installed_version("not-a-real-pkg-xyz") is None
        assert installed_version("pyarrow")


@pytest.mark.unit
def test_debug_timer_logs_only_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("parquet_grep.timer_test")

    with caplog.at_level(logging.INFO, logger="parquet_grep.timer_test"):
        with debug_timer(logger, "Quiet step"):
            pass
    assert "Quiet step" not in caplog.text

    with caplog.at_level(logging.DEBUG, logger="parquet_grep.timer_test"):
        with debug_timer(logger, "Timed step"):
            pass
    assert "Timed step completed in" in caplog.text
