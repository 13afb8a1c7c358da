"""Lookup tables for pitch ratios and partial stiffness, with interpolated access."""

from __future__ import annotations

import math
from collections.abc import Sequence

TABLE_SIZE = 256

# Ratio for whole semitones from -128 to +127.
LUT_PITCH_RATIO_HIGH: tuple[float, ...] = tuple(
    2.0 ** ((i - 128) / 12.0) for i in range(TABLE_SIZE)
)

# Ratio for fractions of a semitone, in steps of 1/256 semitone.
LUT_PITCH_RATIO_LOW: tuple[float, ...] = tuple(
    2.0 ** (i / 256.0 / 12.0) for i in range(TABLE_SIZE)
)


def _stiffness(structure: float) -> float:
    """Stiffness of the partials for a structure value in [0, 1]."""
    if structure < 0.25:
        return -(0.25 - structure) * 0.25
    if structure < 0.3:
        return 0.0
    if structure < 0.9:
        g = (structure - 0.3) / 0.6
        return 0.01 * 10.0 ** (g * 2.005) - 0.01
    g = (structure - 0.9) / 0.1
    g *= g
    return 1.5 - math.cos(g * math.pi) / 2.0


def _build_stiffness_table() -> tuple[float, ...]:
    values = [_stiffness(i / TABLE_SIZE) for i in range(TABLE_SIZE + 1)]
    values[-1] = 2.0
    values[-2] = 2.0
    return tuple(values)


# Stiffness of the partials as a function of the resonator's structure parameter.
LUT_STIFFNESS: tuple[float, ...] = _build_stiffness_table()


def interpolate(table: Sequence[float], index: float, size: float) -> float:
    """Linearly interpolate ``table`` at position ``index * size``.

    The integral part of the scaled index is truncated toward zero. Both the
    entry at that position and the one after it must exist in the table.
    """
    scaled = index * size
    integral = int(scaled)
    fractional = scaled - integral
    if integral < 0 or integral + 1 >= len(table):
        raise IndexError(
            f"interpolation position {scaled!r} is outside a table of {len(table)} entries"
        )
    a = table[integral]
    b = table[integral + 1]
    return a + (b - a) * fractional


def semitones_to_ratio(semitones: float) -> float:
    """Return the frequency ratio for an interval given in semitones.

    Accepts intervals from -128 (inclusive) to +128 (exclusive).
    """
    pitch = semitones + 128.0
    if not 0.0 <= pitch < TABLE_SIZE:
        raise ValueError(f"semitones out of range [-128, 128): {semitones!r}")
    integral = int(pitch)
    fractional = pitch - integral
    return LUT_PITCH_RATIO_HIGH[integral] * LUT_PITCH_RATIO_LOW[int(fractional * 256.0)]