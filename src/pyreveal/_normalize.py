"""Normalization helpers.

Centralizes defensive parsing of untrusted JSON values.
"""

from __future__ import annotations

import math
from typing import Any


def safe_number(value: Any) -> float | None:
    """Return *value* as a float only if it already is a finite JSON number.

    Strings, booleans and non-finite floats are rejected: a geolocation body
    carrying ``"28.6"`` is treated as unresolved rather than coerced.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    result = float(value)
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def safe_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text if text else None
