"""Internal type aliases for strict typing of decoded configuration.

These types enable strict typing without Any, object, or cast.
"""

from __future__ import annotations

from collections.abc import Mapping

# Recursive type for TOML/JSON data - only for internal _load*/_decode* functions
UnknownJson = dict[str, "UnknownJson"] | list["UnknownJson"] | str | int | float | bool | None

# A decoded TOML table (the root document or any nested section)
TomlTable = Mapping[str, UnknownJson]

__all__ = ["TomlTable", "UnknownJson"]
