"""Small numeric helpers and shared constants."""

from __future__ import annotations

import math
from typing import TypeVar

N = TypeVar("N", int, float)

PI = math.pi
E = math.e
SQRT2 = math.sqrt(2.0)
TWO_PI = 2.0 * math.pi

PI_POW_2 = PI * PI
PI_POW_3 = PI_POW_2 * PI
PI_POW_5 = PI_POW_3 * PI_POW_2
PI_POW_7 = PI_POW_5 * PI_POW_2
PI_POW_9 = PI_POW_7 * PI_POW_2
PI_POW_11 = PI_POW_9 * PI_POW_2


def sign(value: float) -> int:
    """Return 1, -1 or 0 according to the sign of ``value``."""
    return int(value > 0) - int(value < 0)


def constrain(value: N, minimum: N, maximum: N) -> N:
    """Clamp ``value`` to the closed range [minimum, maximum]."""
    if value > maximum:
        return maximum
    if value < minimum:
        return minimum
    return value


def flushed(value: float) -> float:
    """Replace NaN and infinities with zero."""
    if not math.isfinite(value):
        return 0.0
    return value