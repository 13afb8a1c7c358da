"""Virtual analog one-pole filter, the building block of the ladder-style filters."""

from __future__ import annotations

import math

from analogdsp.fastmath import FrequencyApproximation, fasttan


class VAOnePoleFilter:
    """Topology-preserving one-pole low or high pass filter.

    The coefficients are public so that composite filters can wire several
    stages together:

    * ``alpha``: feed-forward coefficient
    * ``beta``: scale of the feedback output
    * ``gamma``: input pre-gain
    * ``delta``: scale of the feedback input inside the feedback output
    * ``epsilon``: amount of the feedback output mixed into the input
    * ``a_0``: input gain
    * ``feedback``: feedback input supplied by the enclosing filter
    """

    def __init__(self, samplerate: float = 44100.0, is_lowpass: bool = True) -> None:
        self.alpha = 1.0
        self.beta = 0.0
        self.gamma = 1.0
        self.delta = 0.0
        self.epsilon = 0.0
        self.a_0 = 1.0
        self.feedback = 0.0
        self.samplerate = samplerate
        self.is_lowpass = is_lowpass
        self._freq = 0.0
        self._z1 = 0.0

    @property
    def freq(self) -> float:
        """Cutoff frequency in Hz; setting it recomputes ``alpha``."""
        return self._freq

    @freq.setter
    def freq(self, freq: float) -> None:
        self._freq = freq
        self.update()

    def reset(self) -> None:
        """Clear the filter memory and the feedback input."""
        self._z1 = 0.0
        self.feedback = 0.0

    def update(self) -> None:
        """Recompute ``alpha`` from the cutoff frequency and sample rate."""
        wd = 2.0 * math.pi * self._freq
        t = 1.0 / self.samplerate
        wa = (2.0 / t) * fasttan(wd * t / 2.0, FrequencyApproximation.FAST)
        g = wa * t / 2.0
        self.alpha = g / (1.0 + g)

    def feedback_output(self) -> float:
        """Return the value this stage contributes to its enclosing feedback loop."""
        return self.beta * (self._z1 + self.feedback * self.delta)

    def process(self, xn: float) -> float:
        """Filter one sample."""
        xn = xn * self.gamma + self.feedback + self.epsilon * self.feedback_output()
        vn = (self.a_0 * xn - self._z1) * self.alpha
        lpf = vn + self._z1
        self._z1 = vn + lpf
        if self.is_lowpass:
            return lpf
        return xn - lpf