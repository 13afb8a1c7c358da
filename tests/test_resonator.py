import math

import pytest
from hypothesis import given
from hypothesis import strategies as st

from analogdsp.resonator import (
    CosineOscillator,
    CosineOscillatorMode,
    FilterMode,
    OnePole,
    Resonator,
    ResonatorProcessingMode,
    ResonatorSVF,
    nth_harmonic_compensation,
)


def test_harmonic_compensation_first_partial_is_unity():
    assert nth_harmonic_compensation(1, 0.3) == 1.0


def test_harmonic_compensation_zero_stiffness_is_unity():
    assert nth_harmonic_compensation(3, 0.0) == 1.0


@given(st.floats(min_value=0.001, max_value=1.0))
def test_harmonic_compensation_positive_stiffness_lowers(stiffness):
    assert nth_harmonic_compensation(3, stiffness) < 1.0


@given(st.floats(min_value=-0.4, max_value=-0.001))
def test_harmonic_compensation_negative_stiffness_raises(stiffness):
    assert nth_harmonic_compensation(3, stiffness) > 1.0


def test_cosine_oscillator_quarter_frequency_sequence():
    osc = CosineOscillator(0.25, CosineOscillatorMode.APPROXIMATE)
    assert osc.value() == pytest.approx(0.5)
    values = [osc.next_sample() for _ in range(5)]
    assert values == pytest.approx([1.0, 0.5, 0.0, 0.5, 1.0], abs=1e-9)


def test_cosine_oscillator_modes_agree_at_quarter():
    a = CosineOscillator(0.25, CosineOscillatorMode.APPROXIMATE)
    b = CosineOscillator(0.25, CosineOscillatorMode.EXACT)
    assert [a.next_sample() for _ in range(8)] == pytest.approx(
        [b.next_sample() for _ in range(8)], abs=1e-9
    )


def test_cosine_oscillator_start_restarts():
    osc = CosineOscillator(0.013)
    first = [osc.next_sample() for _ in range(10)]
    osc.start()
    assert [osc.next_sample() for _ in range(10)] == first


@given(st.floats(min_value=0.001, max_value=0.2))
def test_cosine_oscillator_stays_bounded(freq):
    osc = CosineOscillator(freq)
    for _ in range(200):
        assert -0.2 <= osc.next_sample() <= 1.2


def test_onepole_low_and_high_sum_to_input():
    low, high = OnePole(), OnePole()
    low.set_f(0.05)
    high.set_f(0.05)
    signal = [math.sin(i * 0.3) for i in range(50)]
    lows = low.process_block(signal, FilterMode.LOW_PASS)
    highs = high.process_block(signal, FilterMode.HIGH_PASS)
    for s, lo, hi in zip(signal, lows, highs):
        assert lo + hi == pytest.approx(s)


def test_onepole_lowpass_converges_to_dc():
    f = OnePole()
    out = f.process_block([1.0] * 2000)
    assert out[-1] == pytest.approx(1.0, abs=1e-6)


def test_onepole_highpass_removes_dc():
    f = OnePole()
    out = f.process_block([1.0] * 2000, FilterMode.HIGH_PASS)
    assert out[-1] == pytest.approx(0.0, abs=1e-6)


def test_onepole_band_pass_outputs_zero():
    f = OnePole()
    assert f.process(0.7, FilterMode.BAND_PASS) == 0.0


def test_onepole_reset_restores_response():
    f = OnePole()
    first = f.process_block([1.0, 0.5, -0.3])
    f.reset()
    assert f.process_block([1.0, 0.5, -0.3]) == first


def test_svf_lowpass_passes_dc():
    svf = ResonatorSVF(1)
    out = svf.process(FilterMode.LOW_PASS, False, [0.01], [0.7], [1.0], [1.0] * 5000)
    assert len(out) == 5000
    assert out[-1] == pytest.approx(1.0, abs=1e-3)


def test_svf_bandpass_rejects_dc():
    svf = ResonatorSVF(1)
    out = svf.process(FilterMode.BAND_PASS, False, [0.01], [0.7], [1.0], [1.0] * 5000)
    assert out[-1] == pytest.approx(0.0, abs=1e-3)


def test_svf_add_accumulates():
    signal = [1.0] + [0.0] * 31
    plain = ResonatorSVF(2).process(
        FilterMode.BAND_PASS, False, [0.05, 0.1], [5.0, 5.0], [1.0, 0.5], signal
    )
    base = [1.0] * 32
    added = ResonatorSVF(2).process(
        FilterMode.BAND_PASS, True, [0.05, 0.1], [5.0, 5.0], [1.0, 0.5], signal, base
    )
    assert added is base
    assert added == pytest.approx([p + 1.0 for p in plain])


def test_svf_in_place_matches_separate_output():
    signal = [math.sin(i * 0.2) for i in range(40)]
    separate = ResonatorSVF(1).process(
        FilterMode.LOW_PASS, False, [0.1], [1.5], [1.0], signal
    )
    buffer = list(signal)
    ResonatorSVF(1).process(FilterMode.LOW_PASS, False, [0.1], [1.5], [1.0], buffer, buffer)
    assert buffer == pytest.approx(separate)


def test_svf_state_carries_between_calls_and_reset_clears():
    signal = [1.0] + [0.0] * 19
    svf = ResonatorSVF(1)
    first = svf.process(FilterMode.BAND_PASS, False, [0.05], [10.0], [1.0], signal)
    second = svf.process(FilterMode.BAND_PASS, False, [0.05], [10.0], [1.0], signal)
    assert second != first
    svf.reset()
    third = svf.process(FilterMode.BAND_PASS, False, [0.05], [10.0], [1.0], signal)
    assert third == first


def test_svf_rejects_wrong_batch_length():
    with pytest.raises(ValueError):
        ResonatorSVF(2).process(FilterMode.LOW_PASS, False, [0.1], [1.0], [1.0], [0.0])


def test_svf_rejects_short_output():
    with pytest.raises(ValueError):
        ResonatorSVF(1).process(
            FilterMode.LOW_PASS, False, [0.1], [1.0], [1.0], [0.0] * 4, [0.0] * 2
        )


def test_svf_rejects_zero_batch():
    with pytest.raises(ValueError):
        ResonatorSVF(0)


@pytest.mark.parametrize(
    "mode, count",
    [
        (ResonatorProcessingMode.CHEAP, 16),
        (ResonatorProcessingMode.BUDGET, 32),
        (ResonatorProcessingMode.PRETTY_GOOD, 64),
        (ResonatorProcessingMode.EXPENSIVE, 128),
        (ResonatorProcessingMode.LUXURY, 256),
        (ResonatorProcessingMode.EXTREME, 512),
    ],
)
def test_resonator_mode_counts(mode, count):
    res = Resonator(mode, 0.01, 48000.0)
    assert res.num_modes == count
    assert len(res.mode_amplitudes) == count


def test_set_modes_changes_count():
    res = Resonator(ResonatorProcessingMode.CHEAP, 0.01, 48000.0)
    res.set_modes(ResonatorProcessingMode.EXPENSIVE, 0.02)
    assert res.num_modes == 128
    assert len(res.mode_amplitudes) == 128


def _impulse(n=128):
    return [1.0] + [0.0] * (n - 1)


def test_resonator_silence_in_silence_out():
    res = Resonator(ResonatorProcessingMode.CHEAP, 0.01, 48000.0)
    out = res.process(440.0, 0.25, 0.5, 0.5, 0.0, 0.0, [0.0] * 64)
    assert out == [0.0] * 64


def test_resonator_impulse_response_is_finite_and_nonzero():
    res = Resonator(ResonatorProcessingMode.CHEAP, 0.01, 48000.0)
    out = res.process(440.0, 0.25, 0.5, 0.5, 0.0, 0.0, _impulse())
    assert len(out) == 128
    assert all(math.isfinite(v) for v in out)
    assert any(abs(v) > 1e-9 for v in out)


def test_resonator_is_deterministic():
    a = Resonator(ResonatorProcessingMode.BUDGET, 0.01, 48000.0)
    b = Resonator(ResonatorProcessingMode.BUDGET, 0.01, 48000.0)
    args = (220.0, 0.5, 0.3, 0.7, 0.1, 0.2, _impulse(64))
    assert a.process(*args) == b.process(*args)


def test_resonator_adds_into_output():
    args = (330.0, 0.4, 0.6, 0.4, 0.0, 0.5, _impulse(64))
    fresh = Resonator(ResonatorProcessingMode.CHEAP, 0.01, 48000.0).process(*args)
    base = [2.0] * 64
    added = Resonator(ResonatorProcessingMode.CHEAP, 0.01, 48000.0).process(*args, base)
    assert added is base
    assert added == pytest.approx([v + 2.0 for v in fresh])


def test_resonator_structure_out_of_table_raises():
    res = Resonator(ResonatorProcessingMode.CHEAP, 0.01, 48000.0)
    with pytest.raises(IndexError):
        res.process(440.0, 10.0, 0.5, 0.5, 0.0, 0.0, [0.0] * 4)