"""Modal synthesis voice: a mallet or noise exciter driving a resonator."""

from __future__ import annotations

import random

from analogdsp.lookup_tables import semitones_to_ratio
from analogdsp.resonator import (
    FilterMode,
    Resonator,
    ResonatorProcessingMode,
    ResonatorSVF,
)


class ModalVoice:
    """Click or dust excitation, low-pass filtered, then fed to a modal resonator."""

    def __init__(
        self,
        mode: ResonatorProcessingMode = ResonatorProcessingMode.BUDGET,
        cos_freq: float = 0.01,
        samplerate: float = 48000.0,
        seed: int | None = None,
    ) -> None:
        self._rng = random.Random(seed)
        self._excitation_filter = ResonatorSVF(1)
        self.resonator = Resonator(mode, cos_freq, samplerate)

    def dust(self, frequency: float) -> float:
        """Return random impulses occurring with probability ``frequency`` per sample."""
        u = self._rng.random()
        if u < frequency:
            return u / frequency
        return 0.0

    def render(
        self,
        sustain: bool,
        trigger: bool,
        accent: float,
        f0: float,
        structure: float,
        brightness: float,
        damping: float,
        stretch: float,
        position: float,
        loss: float,
        size: int,
    ) -> list[float]:
        """Render ``size`` samples of the voice and return them."""
        out = [0.0] * size

        # Scale f0 so that inputs from 0.0 to 1.0 make better sense.
        f0 = f0 * 0.05 + 0.00001

        density = brightness * brightness

        brightness += position * accent * (1.0 - brightness)
        damping += position * accent * (1.0 - damping)

        semitone_range = 36.0 if sustain else 60.0
        f = 2.0 * f0
        cutoff = min(
            f
            * semitones_to_ratio(
                (brightness * (2.0 - brightness) - 0.5) * semitone_range
            ),
            0.499,
        )
        q = 0.7 if sustain else 1.5

        if sustain:
            dust_f = 0.00005 + 0.99995 * density * density
            temp = [
                self.dust(dust_f) * (4.0 - dust_f * 3.0) * accent for _ in range(size)
            ]
        else:
            temp = [0.0] * size
            if trigger and size:
                attenuation = 1.0 - damping * 0.5
                amplitude = (0.12 + 0.08 * accent) * attenuation
                temp[0] = amplitude * semitones_to_ratio(cutoff * cutoff * 24.0) / cutoff

        self._excitation_filter.process(
            FilterMode.LOW_PASS, False, [cutoff], [q], [1.0], temp, temp
        )
        return self.resonator.process(
            f0, structure, brightness, damping, stretch, loss, temp, out
        )