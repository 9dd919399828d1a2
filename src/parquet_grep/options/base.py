"""Base classes for parquet-grep option dataclasses."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from __future__ import annotations

import sys
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    Option objects are immutable; callers derive modified copies instead of
    mutating shared configuration.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)

    @classmethod
    def field_names(cls) -> set[str]:
        """Return the names of all dataclass fields."""
        return {f.name for f in fields(cls)}  # type: ignore[arg-type]

    def split_known(self, values: Mapping[str, Any]) -> tuple[dict[str, Any], list[str]]:
        """Partition a mapping into known field values and unknown keys."""
        known = self.field_names()
        accepted = {key: value for key, value in values.items() if key in known}
        unknown = sorted(key for key in values if key not in known)
        return accepted, unknown
