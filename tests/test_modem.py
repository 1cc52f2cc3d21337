"""
Tests for constellations, modulation and soft demodulation.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from radio_dsp.channel.modem import (
    ModulationMap,
    Modulator,
    Demodulator,
    bits_to_codewords,
    codewords_to_bits,
)
from radio_dsp.utils.errors import DomainError, PreconditionError


class TestModulationMap:
    """Test constellation construction."""

    def test_default_is_bpsk(self):
        mmap = ModulationMap()
        assert len(mmap) == 2
        assert mmap.bps == 1
        assert_allclose(mmap.symbols, [1.0, -1.0])

    @pytest.mark.parametrize("size", [2, 4, 8, 16, 32])
    def test_psk_unit_power(self, size):
        mmap = ModulationMap.psk(size)
        assert mmap.bps == int(np.log2(size))
        assert_allclose(np.abs(mmap.symbols), 1.0)

    @pytest.mark.parametrize("size", [4, 8, 16, 32, 64])
    def test_qam_unit_average_power(self, size):
        mmap = ModulationMap.qam(size)
        assert np.mean(np.abs(mmap.symbols) ** 2) == pytest.approx(1.0)
        assert len(np.unique(np.round(mmap.symbols, 12))) == size

    def test_qpsk_table(self):
        """Codewords 00, 01, 10, 11 map to the four Gray-coded quadrants."""
        expected = np.array([1 + 1j, -1 + 1j, 1 - 1j, -1 - 1j]) / np.sqrt(2)
        assert_allclose(ModulationMap.psk(4).symbols, expected, atol=1e-12)

    def test_qam16_table(self):
        mmap = ModulationMap.qam(16)
        scale = np.sqrt(10.0)
        assert_allclose(mmap[0b0000] * scale, 3 + 3j)
        assert_allclose(mmap[0b0010] * scale, 3 - 3j)
        assert_allclose(mmap[0b0111] * scale, 1 - 1j)
        assert_allclose(mmap[0b1010] * scale, -3 - 3j)
        assert_allclose(mmap[0b1101] * scale, -1 + 1j)

    def test_gray_neighbors_differ_in_one_bit(self):
        """Adjacent 8-PSK points carry codewords at Hamming distance one."""
        mmap = ModulationMap.psk(8)
        order = np.argsort(np.angle(mmap.symbols))
        for a, b in zip(order, np.roll(order, -1)):
            assert bin(int(a) ^ int(b)).count("1") == 1

    def test_custom_map_is_normalized(self):
        mmap = ModulationMap([2.0, -2.0, 2j])
        assert mmap.bps == 2
        assert np.mean(np.abs(mmap.symbols) ** 2) == pytest.approx(1.0)

    def test_symbols_are_read_only(self):
        mmap = ModulationMap.psk(4)
        with pytest.raises(ValueError):
            mmap.symbols[0] = 0.0

    def test_invalid_maps(self):
        with pytest.raises(PreconditionError):
            ModulationMap([1.0])
        with pytest.raises(PreconditionError):
            ModulationMap([0.0, 0.0])
        with pytest.raises(PreconditionError):
            ModulationMap.psk(6)
        with pytest.raises(PreconditionError):
            ModulationMap.qam(1)
        with pytest.raises(PreconditionError):
            ModulationMap.psk(4)[4]


class TestBitPacking:
    """Test MSB-first bit and codeword conversion."""

    def test_msb_first(self):
        assert_array_equal(bits_to_codewords([1, 0, 1, 1, 0, 0], 3), [5, 4])
        assert_array_equal(codewords_to_bits([5, 4], 3), [1, 0, 1, 1, 0, 0])

    def test_nonzero_counts_as_one(self):
        assert_array_equal(bits_to_codewords([2, 0, -1, 7], 2), [2, 3])

    def test_length_must_be_multiple(self):
        with pytest.raises(PreconditionError):
            bits_to_codewords([1, 0, 1], 2)


class TestModulator:
    """Test the modulator."""

    @pytest.fixture
    def modulator(self):
        return Modulator(ModulationMap.qam(16))

    def test_modulate_bits(self, modulator):
        out = modulator.modulate_bits([0, 0, 0, 0, 1, 1, 1, 1])
        assert_allclose(out, [modulator.map[0], modulator.map[15]])
        assert len(modulator) == 2
        assert modulator[1] == modulator.map[15]

    def test_call_is_modulate_bits(self, modulator):
        np.random.seed(42)
        bits = np.random.randint(0, 2, 64)
        assert_array_equal(modulator(bits), Modulator(modulator.map).modulate_bits(bits))

    def test_modulate_codewords(self, modulator):
        out = modulator.modulate_codewords([3, 12])
        assert_allclose(out, modulator.map.symbols[[3, 12]])

    def test_empty_input(self, modulator):
        assert modulator.modulate_bits([]).size == 0

    def test_rejects_bad_input(self, modulator):
        with pytest.raises(PreconditionError):
            modulator.modulate_bits([1, 0, 1])
        with pytest.raises(PreconditionError):
            modulator.modulate_codewords([16])
        with pytest.raises(PreconditionError):
            modulator[0]


class TestDemodulator:
    """Test max-log soft demodulation."""

    @pytest.mark.parametrize("mmap", [
        ModulationMap.psk(2),
        ModulationMap.psk(4),
        ModulationMap.psk(8),
        ModulationMap.qam(16),
        ModulationMap.qam(32),
        ModulationMap.qam(64),
    ])
    def test_noiseless_round_trip(self, mmap):
        np.random.seed(42)
        bits = np.random.randint(0, 2, 60 * mmap.bps)
        tx = Modulator(mmap).modulate_bits(bits)

        llr = Demodulator(mmap).demodulate(tx)

        assert llr.size == bits.size
        assert_array_equal(Demodulator.soft2hard(llr), bits)

    def test_bpsk_llr_value(self):
        """For BPSK the LLR is (|r+1|^2 - |r-1|^2) = 4*Re(r)."""
        demodulator = Demodulator(ModulationMap())
        llr = demodulator([0.3, -0.7 + 0.2j])
        assert_allclose(llr, [1.2, -2.8])
        assert demodulator[1] == pytest.approx(-2.8)

    def test_channel_equalization_and_weighting(self):
        mmap = ModulationMap.psk(4)
        demodulator = Demodulator(mmap)
        tx = Modulator(mmap).modulate_codewords([0, 1, 2, 3])
        h = np.array([2.0, 0.5j, -1.0, 1 + 1j])

        faded = demodulator.demodulate(h * tx, channel=h).copy()
        clean = demodulator.demodulate(tx)

        assert_allclose(faded, clean * np.repeat(np.abs(h) ** 2, 2))

    def test_channel_validation(self):
        demodulator = Demodulator(ModulationMap.psk(4))
        with pytest.raises(PreconditionError):
            demodulator.demodulate([1.0, 1.0], channel=[1.0])
        with pytest.raises(DomainError):
            demodulator.demodulate([1.0], channel=[0.0])

    def test_low_error_rate_in_noise(self):
        np.random.seed(42)
        mmap = ModulationMap.qam(16)
        bits = np.random.randint(0, 2, 4000)
        tx = Modulator(mmap).modulate_bits(bits)
        noise = 0.05 * (np.random.standard_normal(tx.size) + 1j * np.random.standard_normal(tx.size))

        hard = Demodulator.soft2hard(Demodulator(mmap).demodulate(tx + noise))

        assert np.mean(hard != bits) < 1e-3

    def test_soft2hard(self):
        assert Demodulator.soft2hard(0.5) == 0
        assert Demodulator.soft2hard(0.0) == 0
        assert Demodulator.soft2hard(-1e-9) == 1
        assert_array_equal(Demodulator.soft2hard(np.array([1.0, -1.0])), [0, 1])

    def test_empty_input(self):
        assert Demodulator(ModulationMap.psk(8)).demodulate([]).size == 0

    def test_map_can_be_replaced(self):
        demodulator = Demodulator(ModulationMap.psk(4))
        demodulator.map = ModulationMap.psk(8)
        tx = Modulator(demodulator.map).modulate_codewords([5, 2])

        llr = demodulator(tx)

        assert len(demodulator) == 6
        assert_array_equal(Demodulator.soft2hard(llr), [1, 0, 1, 0, 1, 0])
