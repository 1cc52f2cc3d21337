"""
Unit tests for the delay line and FIR filtering.

Tests cover:
- Delay line ordering, eviction and fill values
- Auxiliary accessors (front, back, out, iteration, reset)
- FIR filter against scipy.signal.lfilter
- Raised-cosine pulse design
- Precondition checks
"""

import pytest
import numpy as np
import numpy.testing as npt
from scipy import signal

from radio_dsp.filters.delay_line import DelayLine
from radio_dsp.filters.fir import FIRFilter, raised_cosine, root_raised_cosine
from radio_dsp.utils.errors import PreconditionError


class TestDelayLine:
    """Test suite for the delay line."""

    @pytest.mark.parametrize("capacity", [1, 2, 5, 16])
    def test_ordering_after_full_fill(self, capacity):
        line = DelayLine(capacity, dtype=float)
        samples = np.arange(1, capacity + 1, dtype=float)

        for s in samples:
            line.push(s)

        for i in range(capacity):
            assert line.at(i) == samples[capacity - 1 - i]

    def test_unwritten_slots_hold_default(self):
        line = DelayLine(4, dtype=complex)
        line.push(1 + 1j)

        assert line[0] == 1 + 1j
        assert line[1] == 0
        assert line[3] == 0

    def test_custom_fill(self):
        line = DelayLine(3, dtype=float, fill=-1.0)
        assert list(line) == [-1.0, -1.0, -1.0]
        assert line.push(5.0) == -1.0

    def test_eviction_sequence(self):
        line = DelayLine(5, dtype=int)
        evicted = [int(line.push(k)) for k in range(1, 10)]
        assert evicted == [0, 0, 0, 0, 0, 1, 2, 3, 4]
        assert [int(v) for v in line] == [9, 8, 7, 6, 5]

    def test_overwrite_after_exactly_capacity_pushes(self):
        line = DelayLine(3, dtype=float)
        line.push(7.0)
        line.push(1.0)
        line.push(2.0)
        assert line.back() == 7.0

        assert line.push(3.0) == 7.0
        assert 7.0 not in list(line)

    def test_front_back_out(self):
        line = DelayLine(3, dtype=float)
        for k in range(1, 5):
            line(float(k))

        assert line.front() == 4.0
        assert line.back() == 2.0
        assert line.out == 1.0

    def test_to_array_newest_first(self):
        line = DelayLine(4, dtype=float)
        for k in range(6):
            line.push(float(k))
        npt.assert_array_equal(line.to_array(), [5.0, 4.0, 3.0, 2.0])

    def test_reset_keeps_capacity(self):
        line = DelayLine(3, dtype=float)
        for k in range(3):
            line.push(float(k + 1))

        line.reset()

        assert len(line) == 3
        assert list(line) == [0.0, 0.0, 0.0]
        assert line.out == 0.0

    def test_zero_capacity_is_transparent(self):
        line = DelayLine(0)
        assert line.push(3 + 0j) == 3 + 0j
        assert line.out == 3 + 0j
        assert len(line) == 0

    def test_object_elements(self):
        line = DelayLine(2, dtype=object, fill=None)
        line.push("a")
        line.push(("b", 1))
        assert line[0] == ("b", 1)
        assert line[1] == "a"

    def test_samples_cast_to_storage_dtype(self):
        line = DelayLine(2, dtype=int)
        line.push(2.7)
        assert line[0] == 2
        assert line.dtype == np.dtype(int)

        kept = DelayLine(2, dtype=object, fill=0)
        kept.push(2.7)
        assert kept[0] == 2.7

    @pytest.mark.parametrize("index", [-1, 4, 10])
    def test_index_out_of_range(self, index):
        line = DelayLine(4)
        with pytest.raises(PreconditionError, match="out of range"):
            line.at(index)

    def test_negative_capacity(self):
        with pytest.raises(PreconditionError):
            DelayLine(-1)


class TestFIRFilter:
    """Test suite for the FIR filter."""

    @pytest.fixture
    def test_signal(self):
        np.random.seed(42)
        return np.random.randn(200) + 1j * np.random.randn(200)

    def test_matches_lfilter(self, test_signal):
        taps = signal.firwin(31, 0.2)
        fir = FIRFilter(taps)

        output = fir.filter(test_signal)

        npt.assert_allclose(output, signal.lfilter(taps, 1.0, test_signal), atol=1e-10)

    def test_streaming_equals_block(self, test_signal):
        taps = [0.25, 0.5, 0.25]
        block = FIRFilter(taps).filter(test_signal)

        streaming = FIRFilter(taps)
        first = streaming.filter(test_signal[:77])
        second = streaming.filter(test_signal[77:])

        npt.assert_allclose(np.concatenate([first, second]), block)

    def test_impulse_response(self):
        taps = np.array([1.0, -2.0, 3.0])
        fir = FIRFilter(taps, dtype=float)
        impulse = np.zeros(5)
        impulse[0] = 1.0

        npt.assert_allclose(fir.filter(impulse), [1.0, -2.0, 3.0, 0.0, 0.0])

    def test_put_advances_history(self):
        fir = FIRFilter([1.0, 1.0], dtype=float)
        fir.put(2.0)
        assert fir(3.0) == pytest.approx(5.0)

    def test_reset(self):
        fir = FIRFilter([1.0, 1.0], dtype=float)
        fir(10.0)
        fir.reset()
        assert fir(1.0) == pytest.approx(1.0)

    def test_empty_is_transparent(self):
        fir = FIRFilter([])
        assert len(fir) == 0
        assert fir(2.5) == 2.5

    def test_coefficients_copy(self):
        fir = FIRFilter([1.0, 2.0])
        coef = fir.coefficients
        coef[0] = 100.0
        assert fir.coefficients[0] == 1.0


class TestPulseShaping:
    """Raised-cosine filter design."""

    @pytest.mark.parametrize("rolloff", [0.0, 0.25, 0.5, 1.0])
    def test_raised_cosine_nyquist(self, rolloff):
        sps, span = 4, 8
        taps = raised_cosine(rolloff, span, sps)
        center = span * sps // 2

        assert len(taps) == span * sps + 1
        assert taps[center] == pytest.approx(1.0)
        symbol_instants = taps[center % sps::sps]
        others = np.delete(symbol_instants, center // sps)
        npt.assert_allclose(others, 0.0, atol=1e-12)
        assert np.all(np.isfinite(taps))

    @pytest.mark.parametrize("rolloff", [0.25, 0.35, 0.5])
    def test_root_raised_cosine_cascade(self, rolloff):
        sps, span = 8, 16
        rrc = root_raised_cosine(rolloff, span, sps)
        cascade = np.convolve(rrc, rrc)
        center = len(cascade) // 2

        assert np.all(np.isfinite(rrc))
        npt.assert_allclose(rrc, rrc[::-1], atol=1e-12)
        # Nyquist property: near-zero ISI at other symbol instants
        cascade = cascade / cascade[center]
        for k in (1, 2, 3):
            assert abs(cascade[center + k * sps]) < 0.02

    def test_root_raised_cosine_center(self):
        sps = 4
        taps = root_raised_cosine(0.5, 8, sps)
        expected = (1.0 + 4 * 0.5 / np.pi - 0.5) / np.sqrt(sps)
        assert taps[len(taps) // 2] == pytest.approx(expected)

    @pytest.mark.parametrize("rolloff,span,sps", [
        (-0.1, 8, 4),
        (1.5, 8, 4),
        (0.5, 7, 4),
        (0.5, 0, 4),
        (0.5, 8, 0),
    ])
    def test_invalid_design(self, rolloff, span, sps):
        with pytest.raises(PreconditionError):
            raised_cosine(rolloff, span, sps)
        with pytest.raises(PreconditionError):
            root_raised_cosine(rolloff, span, sps)
