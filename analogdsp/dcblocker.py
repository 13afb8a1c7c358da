"""One-pole, one-zero DC blocking filter."""

from __future__ import annotations


class DcBlocker:
    """Removes the DC component of a signal: y[n] = x[n] - x[n-1] + r * y[n-1]."""

    def __init__(self, r: float = 0.995) -> None:
        self.r = r
        self._xm1 = 0.0
        self._ym1 = 0.0

    def reset(self) -> None:
        """Clear the filter memory."""
        self._xm1 = 0.0
        self._ym1 = 0.0

    def process(self, sample: float) -> float:
        """Filter one sample."""
        y = sample - self._xm1 + self.r * self._ym1
        self._xm1 = sample
        self._ym1 = y
        return y