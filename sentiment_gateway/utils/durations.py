"""Parsing of human-readable durations used in configuration.

Accepts the same compact notation operators already use for flags such as
``--timeout 1s`` or ``--cache-entry-ttl 10m``: one or more ``<number><unit>``
groups (``ms``, ``s``, ``m``, ``h``), e.g. ``"500ms"``, ``"1m30s"``,
``"1.5h"``.  A bare number is read as seconds.
"""

from __future__ import annotations

import re

_UNIT_SECONDS = {
    "ms": 0.001,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_GROUP_RE = re.compile(r"(\d+(?:\.\d+)?|\.\d+)(ms|s|m|h)")


def parse_duration(value: str | int | float) -> float:
    """Convert *value* to a number of seconds.

    Raises:
        ValueError: If *value* is not a number and not a valid duration string.
    """
    if isinstance(value, bool):
        raise ValueError(f"invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)

    text = value.strip()
    if not text:
        raise ValueError("invalid duration: empty string")

    try:
        return float(text)
    except ValueError:
        pass

    total = 0.0
    position = 0
    for match in _GROUP_RE.finditer(text):
        if match.start() != position:
            raise ValueError(f"invalid duration: {value!r}")
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        position = match.end()

    if position == 0 or position != len(text):
        raise ValueError(f"invalid duration: {value!r}")
    return total
