"""Korg 35 (MS-20 style) low or high pass filter with overdrive."""

from __future__ import annotations

from analogdsp.diode import apply_overdrive
from analogdsp.fastmath import FrequencyApproximation, fasttan
from analogdsp.utils import constrain
from analogdsp.va_onepole import VAOnePoleFilter


class Korg35Filter:
    """Sallen-Key style filter built from two low pass and two high pass stages."""

    def __init__(self, samplerate: float = 44100.0) -> None:
        self._lpf1 = VAOnePoleFilter(samplerate, is_lowpass=True)
        self._lpf2 = VAOnePoleFilter(samplerate, is_lowpass=True)
        self._hpf1 = VAOnePoleFilter(samplerate, is_lowpass=False)
        self._hpf2 = VAOnePoleFilter(samplerate, is_lowpass=False)
        self._is_lowpass = True
        self.resonance_mod = 0.0
        self.overdrive = 0.0
        self.saturation_mod = 1.0
        self._k = 0.01
        self._k_modded = 0.01
        self._alpha = 0.0
        self._resonance = 0.0
        self._last_freq = -1.0
        self._freq = 500.0
        self._samplerate = samplerate
        self._one_over_samplerate = 1.0 / samplerate
        self.samplerate = samplerate
        self.freq = 500.0
        self.resonance = 0.5
        self.reset()

    @property
    def samplerate(self) -> float:
        """Sample rate in Hz; coefficients are recomputed on the next update."""
        return self._samplerate

    @samplerate.setter
    def samplerate(self, samplerate: float) -> None:
        for stage in (self._lpf1, self._lpf2, self._hpf1, self._hpf2):
            stage.samplerate = samplerate
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
        return self._resonance

    @resonance.setter
    def resonance(self, res: float) -> None:
        self._resonance = res
        # Kept away from zero (it divides the output) and below self-oscillation.
        self._k = res * 1.95 + 0.01
        self._last_freq = -1.0

    @property
    def is_lowpass(self) -> bool:
        """True for the low pass response, False for high pass."""
        return self._is_lowpass

    @is_lowpass.setter
    def is_lowpass(self, is_lowpass: bool) -> None:
        self._is_lowpass = is_lowpass
        self._last_freq = -1.0

    def reset(self) -> None:
        """Clear the memory of every stage."""
        for stage in (self._lpf1, self._lpf2, self._hpf1, self._hpf2):
            stage.reset()

    def update(self) -> None:
        """Recompute the coefficients if anything they depend on changed."""
        if self._freq == self._last_freq and not self.resonance_mod:
            return
        self._last_freq = self._freq

        one_over = self._one_over_samplerate
        wd = 2.0 * 3.141592653 * self._freq
        wa = (2.0 * self._samplerate) * fasttan(
            wd * one_over * 0.5, FrequencyApproximation.FAST
        )
        g = wa * one_over * 0.5
        big_g = g / (1.0 + g)

        for stage in (self._lpf1, self._lpf2, self._hpf1, self._hpf2):
            stage.alpha = big_g

        k = constrain(self._k + self.resonance_mod * 2.0, 0.01, 1.96)
        self._k_modded = k
        self._alpha = 1.0 / (1.0 - k * big_g + k * big_g * big_g)

        if self._is_lowpass:
            self._lpf2.beta = (k - k * big_g) / (1.0 + g)
            self._hpf1.beta = -1.0 / (1.0 + g)
        else:
            self._hpf2.beta = -1.0 * big_g / (1.0 + g)
            self._lpf1.beta = 1.0 / (1.0 + g)

    def process(self, xn: float) -> float:
        """Filter one sample."""
        k = self._k_modded
        if self._is_lowpass:
            y1 = self._lpf1.process(xn)
            s35 = self._lpf2.feedback_output() + self._hpf1.feedback_output()
            u = self._alpha * (y1 + s35)
            y = k * self._lpf2.process(u)
            self._hpf1.process(y)
        else:
            y1 = self._hpf1.process(xn)
            s35 = self._hpf2.feedback_output() + self._lpf1.feedback_output()
            u = self._alpha * (y1 + s35)
            y = k * u
            self._lpf1.process(self._hpf2.process(y))
        y /= k

        # Gentler saturation: this filter is very aggressive.
        return apply_overdrive(y, self.overdrive, self.saturation_mod, 3.0)