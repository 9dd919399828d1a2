#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the parquet-grep library.

This module defines the exception classes raised while compiling a query,
validating window parameters, and reading Parquet sources. They carry more
context than the generic built-ins so the CLI can classify failures.

Exception Hierarchy
-------------------
- ParquetGrepError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidPatternError (query fails to compile as a regular expression)
    - InvalidWindowParameterError (offset/limit not a non-negative integer)
    - ConfigurationError (unreadable or malformed configuration file)

  - FileError (file access and I/O)
    - SourceUnreadableError (file or remote resource cannot be opened or decoded)

  - SecurityError (security violations)
    - NetworkSecurityError (bad URL scheme, network disabled)

  - DependencyError (missing/incompatible packages)

Only ``SourceUnreadableError`` is recovered from during a run; it is reported
against the single file that raised it. Everything under ``ValidationError``
aborts the invocation before any file is opened.

"""

from typing import Any


class ParquetGrepError(Exception):
    """Base exception class for all parquet-grep errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(ParquetGrepError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidPatternError(ValidationError):
    """Exception raised when the query cannot be compiled as a regular expression.

    Parameters
    ----------
    pattern : str
        The query string that failed to compile
    original_error : Exception, optional
        The ``re.error`` raised by the compiler

    """

    def __init__(self, pattern: str, original_error: Exception | None = None):
        """Initialize the invalid pattern error."""
        detail = f": {original_error}" if original_error is not None else ""
        super().__init__(
            f"Invalid regex pattern '{pattern}'{detail}",
            parameter_name="query",
            parameter_value=pattern,
            original_error=original_error,
        )
        self.pattern = pattern


class InvalidWindowParameterError(ValidationError):
    """Exception raised when offset or limit is not a non-negative integer.

    Parameters
    ----------
    parameter_name : str
        Either ``"offset"`` or ``"limit"``
    parameter_value : any
        The rejected value

    """

    def __init__(self, parameter_name: str, parameter_value: Any, original_error: Exception | None = None):
        """Initialize the window parameter error."""
        super().__init__(
            f"{parameter_name} must be a non-negative integer",
            parameter_name=parameter_name,
            parameter_value=parameter_value,
            original_error=original_error,
        )


class ConfigurationError(ValidationError):
    """Exception raised when a configuration file cannot be loaded or applied."""

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error."""
        super().__init__(message, parameter_name="config", parameter_value=config_path, original_error=original_error)
        self.config_path = config_path


class FileError(ParquetGrepError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path or locator of the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class SourceUnreadableError(FileError):
    """Exception raised when a Parquet source cannot be opened or decoded.

    The orchestrator catches this per file: the failing file produces no
    matches and processing continues with the next file.

    Parameters
    ----------
    file_id : str
        Local path or remote locator of the source
    original_error : Exception, optional
        The underlying cause
    message : str, optional
        Custom error message. Defaults to the cause's text.

    """

    def __init__(self, file_id: str, original_error: Exception | None = None, message: str | None = None):
        """Initialize the unreadable source error."""
        if message is None:
            message = str(original_error) if original_error is not None else f"Cannot read source: {file_id}"
        super().__init__(message, file_path=file_id, original_error=original_error)
        self.file_id = file_id


class SecurityError(ParquetGrepError):
    """Base exception for security violations."""


class NetworkSecurityError(SecurityError):
    """Exception raised when a remote locator is rejected before any request is made."""


class DependencyError(ParquetGrepError):
    """Exception raised when required dependencies are not available.

    Parameters
    ----------
    converter_name : str
        Name of the feature requiring dependencies (e.g. "network")
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    version_mismatches : list[tuple[str, str, str]], optional
        List of (package_name, required_version, installed_version) tuples
    install_command : str, optional
        Suggested pip install command to resolve the issue
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        converter_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        install_command: str = "",
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []
        self.original_import_error = original_import_error
        if message is None:
            message_parts = []

            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                message_parts.append(f"{converter_name} support requires the following packages: {pkg_list}")

            if version_mismatches:
                mismatch_str = ", ".join(
                    f"'{name}' (requires {required}, but {installed} is installed)"
                    for name, required, installed in version_mismatches
                )
                message_parts.append(f"{converter_name} support has version mismatches: {mismatch_str}")

            message = "\n".join(message_parts)

            if install_command:
                message += f"\nInstall with: {install_command}"
            else:
                all_packages = missing_packages + [(name, req) for name, req, _ in version_mismatches]
                if all_packages:
                    packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in all_packages)
                    message += f"\nInstall with: pip install --upgrade {packages_str}"

        super().__init__(message)
        self.converter_name = converter_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.install_command = install_command


__all__ = [
    "ParquetGrepError",
    "ValidationError",
    "InvalidPatternError",
    "InvalidWindowParameterError",
    "ConfigurationError",
    "FileError",
    "SourceUnreadableError",
    "SecurityError",
    "NetworkSecurityError",
    "DependencyError",
]
