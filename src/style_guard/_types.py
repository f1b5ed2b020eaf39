"""Internal type aliases for strict typing.

These types enable strict typing without Any, object, or cast.
"""

from __future__ import annotations

# Recursive type for JSON data - only for internal _load*/_decode* functions
UnknownJson = dict[str, "UnknownJson"] | list["UnknownJson"] | str | int | float | bool | None


__all__ = ["UnknownJson"]
