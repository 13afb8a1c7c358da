"""Two-pole state variable filter with a continuous low/notch/high pass transition."""

from __future__ import annotations

import math

from analogdsp.fastmath import FrequencyApproximation, fasttan
from analogdsp.utils import constrain


class SEMFilter12:
    """12 dB/octave state variable filter.

    ``transition`` runs from -1 (low pass) through 0 (band stop) to 1 (high pass).
    """

    def __init__(self, samplerate: float = 44100.0) -> None:
        self._alpha_0 = 1.0
        self._alpha = 1.0
        self._rho = 1.0
        self.transition = -1.0
        self.transition_mod = 0.0
        self.resonance_mod = 0.0
        self._z1 = 0.0
        self._z2 = 0.0
        self._resonance_control = 0.0
        self._resonance = 0.5
        self._resonance_modded = 0.5
        self._last_freq = -1.0
        self._freq = 500.0
        self._samplerate = samplerate
        self._one_over_samplerate = 1.0 / samplerate
        self.resonance = 0.0
        self.samplerate = samplerate
        self.freq = 500.0

    @property
    def samplerate(self) -> float:
        """Sample rate in Hz; coefficients are recomputed on the next update."""
        return self._samplerate

    @samplerate.setter
    def samplerate(self, samplerate: float) -> None:
        self._last_freq = -1.0
        self._samplerate = samplerate
        self._one_over_samplerate = 1.0 / samplerate

    @property
    def freq(self) -> float:
        """Cutoff frequency in Hz; setting it updates the coefficients."""
        return self._freq

    @freq.setter
    def freq(self, freq: float) -> None:
        self._freq = freq
        self.update()

    @property
    def resonance(self) -> float:
        """Resonance control from 0 to 1; applies on the next update."""
        return self._resonance_control

    @resonance.setter
    def resonance(self, res: float) -> None:
        self._resonance_control = res
        self._resonance = 24.5 * res**4 + 0.5
        self._last_freq = -1.0

    def reset(self) -> None:
        """Clear the filter memory."""
        self._z1 = 0.0
        self._z2 = 0.0

    def update(self) -> None:
        """Recompute the coefficients if anything they depend on changed."""
        if self._freq == self._last_freq and not self.resonance_mod:
            return
        self._last_freq = self._freq

        one_over = self._one_over_samplerate
        wd = 2.0 * math.pi * self._freq
        wa = (2.0 * self._samplerate) * fasttan(
            wd * one_over * 0.5, FrequencyApproximation.FAST
        )
        g = wa * one_over * 0.5

        self._resonance_modded = constrain(
            self._resonance + self.resonance_mod * 24.5, 0.5, 25.0
        )
        r = 1.0 / (2.0 * self._resonance_modded)

        self._alpha_0 = 1.0 / (1.0 + 2.0 * r * g + g * g)
        self._alpha = g
        self._rho = 2.0 * r + g

    def process(self, xn: float) -> float:
        """Filter one sample."""
        hpf = self._alpha_0 * (xn - self._rho * self._z1 - self._z2)
        bpf = self._alpha * hpf + self._z1
        lpf = self._alpha * bpf + self._z2
        r = 1.0 / (2.0 * self._resonance_modded)
        bsf = xn - 2.0 * r * bpf

        self._z1 = self._alpha * hpf + bpf
        self._z2 = self._alpha * bpf + lpf

        transition = constrain(self.transition + self.transition_mod * 2.0, -1.0, 1.0)
        if transition < 0.0:
            return (1.0 + transition) * bsf - transition * lpf
        return transition * hpf + (1.0 - transition) * bsf