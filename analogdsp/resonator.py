"""Modal resonator built from a bank of state variable band-pass filters."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from enum import Enum

from analogdsp.fastmath import FrequencyApproximation, fasttan
from analogdsp.lookup_tables import LUT_STIFFNESS, interpolate, semitones_to_ratio
from analogdsp.utils import flushed

MAX_NUM_MODES = 512
MODE_BATCH_SIZE = 8


class FilterMode(Enum):
    """Which response of a filter to output."""

    LOW_PASS = 0
    BAND_PASS = 1
    BAND_PASS_NORMALIZED = 2
    HIGH_PASS = 3


class CosineOscillatorMode(Enum):
    """How the cosine oscillator computes its recursion coefficient."""

    APPROXIMATE = 0
    EXACT = 1


class ResonatorProcessingMode(Enum):
    """Quality setting of the resonator: the number of modes it renders."""

    CHEAP = 0
    BUDGET = 1
    PRETTY_GOOD = 2
    EXPENSIVE = 3
    LUXURY = 4
    EXTREME = 5


_NUM_MODES = {
    ResonatorProcessingMode.CHEAP: 16,
    ResonatorProcessingMode.BUDGET: 32,
    ResonatorProcessingMode.PRETTY_GOOD: 64,
    ResonatorProcessingMode.EXPENSIVE: 128,
    ResonatorProcessingMode.LUXURY: 256,
    ResonatorProcessingMode.EXTREME: 512,
}


def nth_harmonic_compensation(n: int, stiffness: float) -> float:
    """Return the factor that keeps the n-th partial in tune under ``stiffness``."""
    stretch_factor = 1.0
    for _ in range(n - 1):
        stretch_factor += stiffness
        stiffness *= 0.93 if stiffness < 0.0 else 0.98
    return 1.0 / stretch_factor


class CosineOscillator:
    """Recursive cosine oscillator, output offset to the range [0, 1]."""

    def __init__(
        self,
        frequency: float,
        mode: CosineOscillatorMode = CosineOscillatorMode.APPROXIMATE,
    ) -> None:
        # The modes are deliberately swapped: APPROXIMATE uses the cosine,
        # EXACT uses the polynomial, matching the reference voice.
        if mode is CosineOscillatorMode.EXACT:
            self._init_polynomial(frequency)
        else:
            self._coefficient = 2.0 * math.cos(2.0 * math.pi * frequency)
            self._initial_amplitude = self._coefficient * 0.25
        self._y0 = 0.0
        self._y1 = 0.0
        self.start()

    def _init_polynomial(self, frequency: float) -> None:
        sign = 16.0
        frequency -= 0.25
        if frequency < 0.0:
            frequency = -frequency
        elif frequency > 0.5:
            frequency -= 0.5
        else:
            sign = -16.0
        self._coefficient = sign * frequency * (1.0 - 2.0 * frequency)
        self._initial_amplitude = self._coefficient * 0.25

    def start(self) -> None:
        """Restart the oscillator from its initial phase."""
        self._y1 = self._initial_amplitude
        self._y0 = 0.5

    def value(self) -> float:
        """Return the current output without advancing."""
        return self._y1 + 0.5

    def next_sample(self) -> float:
        """Advance one step and return the output."""
        current = self._y0
        self._y0 = self._coefficient * self._y0 - self._y1
        self._y1 = current
        return current + 0.5


class OnePole:
    """Topology-preserving one-pole filter with low and high pass outputs."""

    def __init__(self) -> None:
        self._g = 0.0
        self._gi = 1.0
        self._state = 0.0
        self.set_f(0.01, FrequencyApproximation.DIRTY)

    def reset(self) -> None:
        """Clear the filter memory."""
        self._state = 0.0

    def set_f(
        self,
        f: float,
        approximation: FrequencyApproximation = FrequencyApproximation.DIRTY,
    ) -> None:
        """Set the cutoff, as a frequency normalised to the sample rate."""
        self._g = fasttan(f, approximation)
        self._gi = 1.0 / (1.0 + self._g)

    def process(self, sample: float, mode: FilterMode = FilterMode.LOW_PASS) -> float:
        """Filter one sample; modes other than low and high pass output zero."""
        lp = (self._g * sample + self._state) * self._gi
        self._state = flushed(self._g * (sample - lp) + lp)
        if mode is FilterMode.LOW_PASS:
            return lp
        if mode is FilterMode.HIGH_PASS:
            return sample - lp
        return 0.0

    def process_block(
        self, samples: Iterable[float], mode: FilterMode = FilterMode.LOW_PASS
    ) -> list[float]:
        """Filter a block of samples."""
        return [self.process(sample, mode) for sample in samples]


class ResonatorSVF:
    """A batch of state variable filters run in parallel and summed."""

    def __init__(self, batch_size: int = 1) -> None:
        if batch_size < 1:
            raise ValueError(f"batch size must be positive: {batch_size!r}")
        self.batch_size = batch_size
        self._state_1 = [0.0] * batch_size
        self._state_2 = [0.0] * batch_size

    def reset(self) -> None:
        """Clear the memory of every filter in the batch."""
        self._state_1 = [0.0] * self.batch_size
        self._state_2 = [0.0] * self.batch_size

    def process(
        self,
        mode: FilterMode,
        add: bool,
        f: Sequence[float],
        q: Sequence[float],
        gain: Sequence[float],
        inputs: Iterable[float],
        out: list[float] | None = None,
    ) -> list[float]:
        """Run the batch over ``inputs``.

        Each filter has its own frequency, quality and gain. The summed output
        is written into ``out`` (or added to it when ``add`` is true); ``out``
        is created when not given and is returned.
        """
        if not len(f) == len(q) == len(gain) == self.batch_size:
            raise ValueError(
                f"expected {self.batch_size} frequencies, qualities and gains"
            )
        bands = []
        for frequency, quality, band_gain in zip(f, q, gain):
            g = fasttan(frequency, FrequencyApproximation.EXACT)
            r = 1.0 / quality
            h = 1.0 / (1.0 + r * g + g * g)
            bands.append((g, r + g, h, band_gain))

        samples = list(inputs)
        if out is None:
            out = [0.0] * len(samples)
        elif len(out) < len(samples):
            raise ValueError("output buffer is shorter than the input")

        state_1 = list(self._state_1)
        state_2 = list(self._state_2)
        lowpass = mode is FilterMode.LOW_PASS
        for idx, s_in in enumerate(samples):
            s_out = 0.0
            for k, (g, r_plus_g, h, band_gain) in enumerate(bands):
                hp = (s_in - r_plus_g * state_1[k] - state_2[k]) * h
                bp = g * hp + state_1[k]
                state_1[k] = g * hp + bp
                lp = g * bp + state_2[k]
                state_2[k] = g * bp + lp
                s_out += band_gain * (lp if lowpass else bp)
            if add:
                out[idx] += s_out
            else:
                out[idx] = s_out
        self._state_1 = state_1
        self._state_2 = state_2
        return out


class Resonator:
    """Bank of tuned band-pass modes producing an inharmonic or harmonic spectrum."""

    def __init__(
        self,
        mode: ResonatorProcessingMode = ResonatorProcessingMode.BUDGET,
        cos_freq: float = 0.01,
        samplerate: float = 48000.0,
    ) -> None:
        self.samplerate = samplerate
        self.num_modes = 0
        self.resolution = 0
        self.mode_amplitudes: list[float] = []
        self._mode_filters: list[ResonatorSVF] = []
        self.set_modes(mode, cos_freq)

    def set_modes(self, mode: ResonatorProcessingMode, cos_freq: float) -> None:
        """Choose the number of modes and recompute their amplitudes."""
        self.num_modes = _NUM_MODES.get(mode, 32)
        self.resolution = self.num_modes
        amplitudes = CosineOscillator(cos_freq, CosineOscillatorMode.APPROXIMATE)
        self.mode_amplitudes = [
            amplitudes.next_sample() * 0.125 for _ in range(self.resolution)
        ]
        self._mode_filters = [
            ResonatorSVF(MODE_BATCH_SIZE)
            for _ in range(self.num_modes // MODE_BATCH_SIZE)
        ]

    def process(
        self,
        f0: float,
        structure: float,
        brightness: float,
        damping: float,
        stretch: float,
        loss: float,
        inputs: Iterable[float],
        out: list[float] | None = None,
    ) -> list[float]:
        """Excite the modes with ``inputs`` and add their response to ``out``.

        ``f0`` is in Hz; ``out`` is created zeroed when not given and is returned.
        """
        samples = list(inputs)
        if out is None:
            out = [0.0] * len(samples)

        stiffness = interpolate(LUT_STIFFNESS, structure, 64.0)
        f0 = fasttan(f0 / self.samplerate, FrequencyApproximation.FAST)
        f0 *= nth_harmonic_compensation(3, stiffness)

        stretch += 1.0
        damping = 1.0 - damping

        harmonic = f0
        q_sqrt = semitones_to_ratio(damping * 79.7)
        q = 500.0 * q_sqrt * q_sqrt

        brightness *= 1.0 - structure * 0.3
        brightness *= 1.0 - damping * 0.3
        q_loss = brightness * (2.0 - brightness) * loss + (1.0 - loss)

        mode_f: list[float] = []
        mode_q: list[float] = []
        mode_a: list[float] = []
        filters = iter(self._mode_filters)

        for amplitude in self.mode_amplitudes[: self.resolution]:
            mode_frequency = min(harmonic * stretch, 0.499)
            attenuation = 1.0 - mode_frequency * 2.0
            mode_f.append(mode_frequency)
            mode_q.append(1.0 + mode_frequency * q)
            mode_a.append(amplitude * attenuation)

            if len(mode_f) == MODE_BATCH_SIZE:
                next(filters).process(
                    FilterMode.BAND_PASS, True, mode_f, mode_q, mode_a, samples, out
                )
                mode_f, mode_q, mode_a = [], [], []

            stretch += stiffness
            # Negative stiffness shrinks faster so partials never fold below zero.
            stiffness *= 0.93 if stiffness < 0.0 else 0.98
            harmonic += f0
            q *= q_loss

        return out