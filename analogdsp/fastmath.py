"""Fast approximations of tan(pi * f) for filter coefficient computation."""

from __future__ import annotations

import math
from enum import Enum

from analogdsp.utils import PI, PI_POW_3, PI_POW_5, PI_POW_7, PI_POW_9, PI_POW_11


class FrequencyApproximation(Enum):
    """Accuracy level of the tangent approximation."""

    EXACT = 0
    ACCURATE = 1
    FAST = 2
    DIRTY = 3


_DIRTY_A = 3.736e-01 * PI_POW_3

_FAST_A = 3.260e-01 * PI_POW_3
_FAST_B = 1.823e-01 * PI_POW_5

_ACC_A = 3.333314036e-01 * PI_POW_3
_ACC_B = 1.333923995e-01 * PI_POW_5
_ACC_C = 5.33740603e-02 * PI_POW_7
_ACC_D = 2.900525e-03 * PI_POW_9
_ACC_E = 9.5168091e-03 * PI_POW_11


def fasttan(
    f: float, approximation: FrequencyApproximation = FrequencyApproximation.FAST
) -> float:
    """Approximate tan(pi * f), where f is a frequency normalised to the sample rate."""
    if approximation is FrequencyApproximation.EXACT:
        # Clip coefficient to about 100.
        return math.tan(PI * min(f, 0.497))
    if approximation is FrequencyApproximation.DIRTY:
        # Optimised for frequencies below 8kHz.
        return f * (PI + _DIRTY_A * f * f)
    if approximation is FrequencyApproximation.FAST:
        # Coefficients tuned for 16Hz to 16kHz at a 48kHz sample rate.
        f2 = f * f
        return f * (PI + f2 * (_FAST_A + _FAST_B * f2))
    if approximation is FrequencyApproximation.ACCURATE:
        f2 = f * f
        return f * (
            PI
            + f2 * (_ACC_A + f2 * (_ACC_B + f2 * (_ACC_C + f2 * (_ACC_D + f2 * _ACC_E))))
        )
    raise ValueError(f"unknown approximation: {approximation!r}")