import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from analogdsp.sem12 import SEMFilter12


def _run(flt, signal):
    return [flt.process(x) for x in signal]


def test_default_is_lowpass_passing_dc():
    flt = SEMFilter12()
    assert flt.transition == -1.0
    out = _run(flt, [0.5] * 4000)
    assert out[-1] == pytest.approx(0.5, rel=1e-4)


def test_highpass_rejects_dc():
    flt = SEMFilter12()
    flt.transition = 1.0
    out = _run(flt, [1.0] * 4000)
    assert abs(out[-1]) < 1e-4


def test_band_stop_passes_dc():
    flt = SEMFilter12()
    flt.transition = 0.0
    out = _run(flt, [0.7] * 4000)
    assert out[-1] == pytest.approx(0.7, rel=1e-4)


def test_lowpass_attenuates_nyquist():
    flt = SEMFilter12()
    out = _run(flt, [1.0 if i % 2 == 0 else -1.0 for i in range(2000)])
    assert max(abs(y) for y in out[-200:]) < 0.01


def test_transition_mod_is_clamped():
    modded = SEMFilter12()
    modded.transition = 0.0
    modded.transition_mod = 5.0
    reference = SEMFilter12()
    reference.transition = 1.0
    signal = [1.0, 0.5, -0.25] + [0.0] * 100
    assert _run(modded, signal) == pytest.approx(_run(reference, signal))


def test_resonance_mod_is_clamped():
    reference = SEMFilter12()
    reference.resonance = 1.0
    reference.update()
    modded = SEMFilter12()
    modded.resonance_mod = 10.0
    modded.update()
    signal = [1.0] + [0.0] * 300
    assert _run(modded, signal) == pytest.approx(_run(reference, signal))


def test_resonance_takes_effect_on_update():
    flt = SEMFilter12()
    flt.resonance = 1.0
    assert flt.resonance == 1.0
    flt.update()
    resonant = _run(flt, [1.0] + [0.0] * 2000)
    plain = _run(SEMFilter12(), [1.0] + [0.0] * 2000)
    assert max(abs(y) for y in resonant[500:]) > max(abs(y) for y in plain[500:])


def test_reset_restores_initial_response():
    flt = SEMFilter12()
    flt.resonance = 0.6
    flt.update()
    signal = [1.0, -1.0, 0.5] + [0.0] * 50
    first = _run(flt, signal)
    flt.reset()
    assert _run(flt, signal) == pytest.approx(first)


def test_samplerate_change_matches_fresh_filter():
    changed = SEMFilter12(44100.0)
    changed.samplerate = 48000.0
    changed.update()
    fresh = SEMFilter12(48000.0)
    signal = [1.0] + [0.0] * 100
    assert _run(changed, signal) == pytest.approx(_run(fresh, signal))


def test_higher_cutoff_responds_faster():
    slow = SEMFilter12()
    fast = SEMFilter12()
    fast.freq = 5000.0
    assert fast.freq == 5000.0
    assert _run(fast, [1.0] * 10)[-1] > _run(slow, [1.0] * 10)[-1]


@settings(max_examples=50)
@given(
    st.floats(min_value=-1.0, max_value=1.0),
    st.floats(min_value=-2.0, max_value=2.0),
)
def test_output_is_finite_and_zero_for_silence(transition, level):
    flt = SEMFilter12()
    flt.transition = transition
    assert _run(flt, [0.0] * 20) == [0.0] * 20
    out = _run(flt, [level] * 50)
    assert all(abs(y) < 10.0 for y in out)