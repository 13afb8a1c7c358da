# analogdsp

Sample-by-sample models of classic analog sound-processing circuits, written
in plain Python with no dependencies beyond the standard library.

## What is in it

- **Virtual-analog filters**, each keeping its own state and filtering one
  sample per `process(x)` call:
  - `DiodeFilter` (`analogdsp.diode`): four coupled one-pole stages modelling
    a diode ladder, with `freq`, `resonance`, `resonance_mod` and `overdrive`.
  - `Korg35Filter` (`analogdsp.korg35`): a Korg 35 style filter; set
    `is_lowpass` to `False` for the high pass response.
  - `LadderFilter` (`analogdsp.ladder`): a four-pole ladder whose output mix is
    chosen with `filter_type`, one of `LadderFilterType.LP4`, `LP2`, `BP4`,
    `BP2`, `HP4`, `HP2`.
  - `SEMFilter12` (`analogdsp.sem12`): a two-pole state variable filter whose
    `transition` runs from -1 (low pass) through 0 (band stop) to 1 (high pass).
  - `VAOnePoleFilter` (`analogdsp.va_onepole`): the one-pole building block of
    the filters above, with public coefficients.
  - `apply_overdrive` (`analogdsp.diode`): the tanh saturation shared by the
    diode, Korg 35 and ladder filters.
- **Modal voice** (`analogdsp.modal`, `analogdsp.resonator`): `ModalVoice`
  excites a bank of band-pass modes (`Resonator`, built from `ResonatorSVF`
  batches) with a filtered click or continuous random dust. The resonator
  module also has `OnePole`, `CosineOscillator` and
  `nth_harmonic_compensation`.
- **Helpers**: `DcBlocker` (`analogdsp.dcblocker`); `fasttan` with a
  selectable `FrequencyApproximation` (`analogdsp.fastmath`); `constrain`,
  `flushed` and `sign` (`analogdsp.utils`); and the pitch and stiffness tables
  behind `semitones_to_ratio` and `interpolate` (`analogdsp.lookup_tables`).

## Installation

```
pip install analogdsp
```

## Usage

```python
from analogdsp.ladder import LadderFilter, LadderFilterType

ladder = LadderFilter(44100.0)
ladder.resonance = 0.6
ladder.filter_type = LadderFilterType.BP2
ladder.freq = 1200.0          # setting the cutoff recomputes the coefficients
filtered = [ladder.process(x) for x in audio]
```

Resonance, filter type and sample rate changes take effect at the next
coefficient update, which setting `freq` (or calling `update()`) performs.

```python
from analogdsp.sem12 import SEMFilter12

sem = SEMFilter12(48000.0)
sem.transition = 0.0          # band stop
sem.freq = 800.0
notched = [sem.process(x) for x in audio]
```

```python
from analogdsp.dcblocker import DcBlocker

blocker = DcBlocker()
clean = [blocker.process(x) for x in audio]
```

```python
from analogdsp.modal import ModalVoice
from analogdsp.resonator import ResonatorProcessingMode

voice = ModalVoice(ResonatorProcessingMode.BUDGET, 0.01, 48000.0, seed=1)
block = voice.render(
    sustain=False, trigger=True, accent=0.8, f0=0.3, structure=0.4,
    brightness=0.5, damping=0.5, stretch=0.0, position=0.2, loss=0.5,
    size=64,
)
```

`render` returns a list of `size` samples. Passing a `seed` makes the dust
excitation of sustained notes repeatable.

Sample values are plain floats; read them from and write them to whatever
audio I/O you use.

## What it does not do

The package has no audio input or output, no command-line tool and no
vactrol low pass gate model: it provides only the processing classes listed
above.

## Running the tests

```
pip install -e .[test]
pytest
```