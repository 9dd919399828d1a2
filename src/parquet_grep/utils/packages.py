#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/parquet_grep/utils/packages.py
"""Checks for the optional libraries behind each parquet-grep feature."""

from __future__ import annotations

import importlib
from importlib import metadata
from typing import Iterable, Optional

Requirement = tuple[str, str, str]


def installed_version(distribution: str) -> Optional[str]:
    """Return the installed version of ``distribution``, or None."""
    try:
        return metadata.version(distribution)
    except metadata.PackageNotFoundError:
        return None


def unmet_requirements(
    packages: Iterable[Requirement],
) -> tuple[list[tuple[str, str]], list[tuple[str, str, str]], Optional[ImportError]]:
    """Split ``(install_name, import_name, version_spec)`` requirements by failure.

    Returns
    -------
    tuple
        ``(missing, too_old, first_import_error)``. ``missing`` holds
        ``(install_name, version_spec)`` for modules that fail to import and
        ``too_old`` holds ``(install_name, version_spec, installed)`` for
        modules whose distribution does not satisfy ``version_spec``.

    """
    from packaging.specifiers import SpecifierSet

    missing: list[tuple[str, str]] = []
    too_old: list[tuple[str, str, str]] = []
    first_error: Optional[ImportError] = None
    for install_name, import_name, version_spec in packages:
        try:
            importlib.import_module(import_name)
        except ImportError as e:
            missing.append((install_name, version_spec))
            first_error = first_error or e
            continue
        if not version_spec:
            continue
        version = installed_version(install_name)
        if version is None or not SpecifierSet(version_spec).contains(version, prereleases=True):
            too_old.append((install_name, version_spec, version or "unknown"))
    return missing, too_old, first_error
