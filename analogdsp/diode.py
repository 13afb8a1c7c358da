"""Diode ladder low pass filter with overdrive."""

from __future__ import annotations

import math

from analogdsp.fastmath import FrequencyApproximation, fasttan
from analogdsp.utils import constrain
from analogdsp.va_onepole import VAOnePoleFilter


def apply_overdrive(
    value: float,
    overdrive: float,
    saturation_mod: float = 1.0,
    tanh_factor: float = 3.5,
) -> float:
    """Saturate ``value`` with tanh according to the overdrive amount.

    Small amounts blend linearly between the clean and saturated signal;
    amounts of one or more drive the tanh directly.
    """
    amount = max(overdrive + 2.0 * saturation_mod, 0.0)
    if 0.01 < amount < 1.0:
        return value * (1.0 - amount) + amount * math.tanh(tanh_factor * value)
    if amount >= 1.0:
        return math.tanh(tanh_factor * amount * value)
    return value


class DiodeFilter:
    """Four coupled one-pole stages modelling a diode ladder."""

    def __init__(self, samplerate: float = 44100.0) -> None:
        self._stages = [VAOnePoleFilter(samplerate) for _ in range(4)]
        self.overdrive = 0.0
        self.saturation_mod = 1.0
        self.resonance_mod = 0.0
        self._k = 0.0
        self._resonance = 0.0
        self._gamma = 0.0
        self._sg = (0.0, 0.0, 0.0, 0.0)
        self._last_freq = -1.0
        self._freq = 500.0
        self._samplerate = samplerate
        self._one_over_samplerate = 1.0 / samplerate
        self.samplerate = samplerate
        self.update()
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
        """Resonance control from 0 to 1."""
        return self._resonance

    @resonance.setter
    def resonance(self, res: float) -> None:
        self._resonance = res
        self._k = 16.0 * res

    def reset(self) -> None:
        """Clear the memory of every stage."""
        for stage in self._stages:
            stage.reset()

    def update(self) -> None:
        """Recompute the coefficients if the cutoff or sample rate changed."""
        if self._last_freq == self._freq:
            return
        self._last_freq = self._freq

        one_over = self._one_over_samplerate
        wd = 2.0 * 3.141592653 * self._freq
        wa = (2.0 * self._samplerate) * fasttan(
            wd * one_over * 0.5, FrequencyApproximation.FAST
        )
        g = wa * one_over / 2.0

        g4 = 0.5 * g / (1.0 + g)
        g3 = 0.5 * g / (1.0 + g - 0.5 * g * g4)
        g2 = 0.5 * g / (1.0 + g - 0.5 * g * g3)
        g1 = g / (1.0 + g - g * g2)
        self._gamma = g4 * g3 * g2 * g1
        self._sg = (g4 * g3 * g2, g4 * g3, g4, 1.0)

        big_g = g / (1.0 + g)
        betas = (
            1.0 / (1.0 + g - g * g2),
            1.0 / (1.0 + g - 0.5 * g * g3),
            1.0 / (1.0 + g - 0.5 * g * g4),
            1.0 / (1.0 + g),
        )
        deltas = (g, 0.5 * g, 0.5 * g, 0.0)
        gammas = (1.0 + g1 * g2, 1.0 + g2 * g3, 1.0 + g3 * g4, 1.0)
        epsilons = (g2, g3, g4, 0.0)
        input_gains = (1.0, 0.5, 0.5, 0.5)

        for stage, beta, delta, gamma, epsilon, a_0 in zip(
            self._stages, betas, deltas, gammas, epsilons, input_gains
        ):
            stage.alpha = big_g
            stage.beta = beta
            stage.delta = delta
            stage.gamma = gamma
            stage.epsilon = epsilon
            stage.a_0 = a_0

    def process(self, xn: float) -> float:
        """Filter one sample."""
        lpf1, lpf2, lpf3, lpf4 = self._stages
        lpf4.feedback = 0.0
        lpf3.feedback = lpf4.feedback_output()
        lpf2.feedback = lpf3.feedback_output()
        lpf1.feedback = lpf2.feedback_output()

        sigma = sum(
            scale * stage.feedback_output() for scale, stage in zip(self._sg, self._stages)
        )

        k = constrain(self._k + self.resonance_mod * 16.0, 0.0, 16.0)

        # Passband gain compensation.
        xn *= 1.0 + 0.3 * k

        output = (xn - k * sigma) / (1.0 + k * self._gamma)
        for stage in self._stages:
            output = stage.process(output)

        return apply_overdrive(output, self.overdrive, self.saturation_mod)