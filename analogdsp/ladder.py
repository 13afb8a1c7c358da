"""Four-pole ladder filter with Oberheim Xpander style output mixing."""

from __future__ import annotations

import math
from enum import Enum

from analogdsp.diode import apply_overdrive
from analogdsp.fastmath import FrequencyApproximation, fasttan
from analogdsp.utils import constrain
from analogdsp.va_onepole import VAOnePoleFilter

_MAX_K = 3.88


class LadderFilterType(Enum):
    """Response of the ladder filter."""

    LP4 = 0
    LP2 = 1
    BP4 = 2
    BP2 = 3
    HP4 = 4
    HP2 = 5


# Mix of (input, stage 1, stage 2, stage 3, stage 4) for each response.
_MIX = {
    LadderFilterType.LP4: (0.0, 0.0, 0.0, 0.0, 1.0),
    LadderFilterType.LP2: (0.0, 0.0, 1.0, 0.0, 0.0),
    LadderFilterType.BP4: (0.0, 0.0, 4.0, -8.0, 4.0),
    LadderFilterType.BP2: (0.0, 2.0, -2.0, 0.0, 0.0),
    LadderFilterType.HP4: (1.0, -4.0, 6.0, -4.0, 1.0),
    LadderFilterType.HP2: (1.0, -2.0, 1.0, 0.0, 0.0),
}


class LadderFilter:
    """Cascade of four one-pole low pass stages with global resonance feedback."""

    def __init__(self, samplerate: float = 44100.0) -> None:
        self._stages = [VAOnePoleFilter(samplerate) for _ in range(4)]
        self.resonance_mod = 0.0
        self.overdrive = 0.0
        self.saturation_mod = 1.0
        self._filter_type = LadderFilterType.LP4
        self._k = 0.0
        self._k_modded = 0.0
        self._gamma = 0.0
        self._alpha_0 = 1.0
        self._mix = _MIX[LadderFilterType.LP4]
        self._resonance = 0.0
        self._last_freq = -1.0
        self._freq = 500.0
        self._samplerate = samplerate
        self._one_over_samplerate = 1.0 / samplerate
        self.samplerate = samplerate
        self.resonance = 0.25
        self.freq = 500.0
        self.filter_type = LadderFilterType.LP4
        self.reset()

    @property
    def samplerate(self) -> float:
        """Sample rate in Hz; coefficients are recomputed on the next update."""
        return self._samplerate

    @samplerate.setter
    def samplerate(self, samplerate: float) -> None:
        for stage in self._stages:
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
        # Scaled a little below 4 to avoid harsh self-oscillation.
        self._k = _MAX_K * res
        self._last_freq = -1.0

    @property
    def filter_type(self) -> LadderFilterType:
        """Response of the filter; applies on the next update."""
        return self._filter_type

    @filter_type.setter
    def filter_type(self, filter_type: LadderFilterType | int) -> None:
        self._filter_type = LadderFilterType(filter_type)
        self._last_freq = -1.0

    def reset(self) -> None:
        """Clear the memory of every stage."""
        for stage in self._stages:
            stage.reset()

    def update(self) -> None:
        """Recompute the coefficients if anything they depend on changed."""
        if self._last_freq == self._freq and not self.resonance_mod:
            return
        self._last_freq = self._freq

        self._k_modded = constrain(self._k + 4.0 * self.resonance_mod, 0.0, _MAX_K)

        one_over = self._one_over_samplerate
        wd = 2.0 * math.pi * self._freq
        wa = (2.0 * self._samplerate) * fasttan(
            wd * one_over * 0.5, FrequencyApproximation.FAST
        )
        g = wa * one_over * 0.5
        big_g = g / (1.0 + g)

        betas = (
            big_g * big_g * big_g / (1.0 + g),
            big_g * big_g / (1.0 + g),
            big_g / (1.0 + g),
            1.0 / (1.0 + g),
        )
        for stage, beta in zip(self._stages, betas):
            stage.alpha = big_g
            stage.beta = beta

        self._gamma = big_g**4
        self._alpha_0 = 1.0 / (1.0 + self._k_modded * self._gamma)
        self._mix = _MIX[self._filter_type]

    def process(self, xn: float) -> float:
        """Filter one sample."""
        sigma = sum(stage.feedback_output() for stage in self._stages)
        u = (xn - self._k_modded * sigma) * self._alpha_0

        taps = [u]
        for stage in self._stages:
            taps.append(stage.process(taps[-1]))

        output = sum(weight * tap for weight, tap in zip(self._mix, taps))
        return apply_overdrive(output, self.overdrive, self.saturation_mod)