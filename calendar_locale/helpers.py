"""Small generic helpers shared by the calendar locale modules."""

from __future__ import annotations

from typing import Any, Mapping


def clamp(value: int, lower: int, upper: int) -> int:
    """Clamp ``value`` into the closed range ``[lower, upper]``."""
    return max(lower, min(value, upper))


def pad(value: Any, length: int, char: str = "0") -> str:
    """Left-pad ``value`` (converted to ``str``) to ``length`` characters."""
    return str(value).rjust(length, char)


def defaults_deep(overrides: Mapping[str, Any], defaults: Mapping[str, Any]) -> dict:
    """
    Recursively merge ``overrides`` onto ``defaults``.

    Values present in ``overrides`` win. Nested mappings are merged key by
    key so that missing keys are filled from ``defaults``. Lists and other
    values are treated as atomic and replaced as a whole.

    Neither argument is modified.
    """
    result = dict(defaults)
    for key, value in overrides.items():
        if value is None:
            continue
        current = result.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            result[key] = defaults_deep(value, current)
        elif isinstance(value, Mapping):
            result[key] = defaults_deep(value, {})
        elif isinstance(value, list):
            result[key] = list(value)
        else:
            result[key] = value
    return result
