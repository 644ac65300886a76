"""Tests for multi-octave noise stacks."""

import pytest

from worldgen.noise.octave import (
    LegacyMultiOctaveNoise,
    MultiOctaveNoise,
    SimplexMultiOctaveNoise,
    make_amplitudes,
    wrap,
)
from worldgen.rng import XoroShiro


class TestWrap:
    """Tests for coordinate wrapping."""

    def test_small_values_unchanged(self) -> None:
        assert wrap(1234.5) == 1234.5
        assert wrap(-1234.5) == -1234.5

    def test_large_values_wrapped(self) -> None:
        assert wrap(33554432.0 + 10.0) == 10.0
        assert wrap(-33554432.0 - 10.0) == -10.0


class TestMakeAmplitudes:
    """Tests for octave set conversion."""

    def test_range(self) -> None:
        amplitudes, first = make_amplitudes(range(-15, 1))
        assert first == -15
        assert amplitudes == [1.0] * 16

    def test_sparse(self) -> None:
        amplitudes, first = make_amplitudes({-3, 0, 2})
        assert first == -3
        assert amplitudes == [1.0, 0.0, 0.0, 1.0, 0.0, 1.0]

    def test_empty_raises(self) -> None:
        with pytest.raises(ValueError):
            make_amplitudes([])


class TestMultiOctaveNoise:
    """Tests for the hash-seeded grid stack."""

    def test_layout_and_sample(self) -> None:
        noise = MultiOctaveNoise.create(XoroShiro(0x24B091C), [1.0, 1.0], -4)

        assert len(noise.octaves) == 2
        assert noise.octaves[0].amplitude == pytest.approx(0.6666666666666666)
        assert noise.octaves[0].lacunarity == 0.0625
        assert noise.octaves[1].amplitude == pytest.approx(0.3333333333333333)
        assert noise.octaves[1].lacunarity == 0.125
        assert noise.max_value == pytest.approx(2.0)

        assert noise.sample(-1.0, -2.0, 6.2) == pytest.approx(-0.19834553595254156, abs=1e-10)

    def test_first_octave_shift(self) -> None:
        noise = MultiOctaveNoise.create(XoroShiro(0x24B091C), [1.0, 1.0], -1)
        assert noise.sample(-1.0, -2.0, 6.2) == pytest.approx(0.09292965612437337, abs=1e-10)

    def test_zero_amplitude_skipped(self) -> None:
        noise = MultiOctaveNoise.create(XoroShiro(8), [1.0, 0.0, 1.0], -2)
        assert [o.lacunarity for o in noise.octaves] == [0.25, 1.0]


class TestLegacyMultiOctaveNoise:
    """Tests for the sequentially drawn grid stack."""

    def test_layout_and_sample(self) -> None:
        noise = LegacyMultiOctaveNoise.create(XoroShiro(0x24B091C), [1.0, 1.0], -4)

        assert len(noise.octaves) == 2
        assert noise.octaves[0].amplitude == pytest.approx(0.6666666666666666)
        assert noise.octaves[0].lacunarity == 0.0625
        assert noise.octaves[1].amplitude == pytest.approx(0.3333333333333333)
        assert noise.octaves[1].lacunarity == 0.125

        assert noise.sample(-1.0, -2.0, 6.2) == pytest.approx(-0.35419610119465705, abs=1e-10)

    def test_reference_samples(self) -> None:
        noise = LegacyMultiOctaveNoise.create(XoroShiro(0x24B091C), [1.0, 1.0], -1)
        assert noise.sample(-1.0, -2.0, 6.2) == pytest.approx(-0.12871201910867605, abs=1e-10)

        noise = LegacyMultiOctaveNoise.create(XoroShiro(0x24B091C), [0.5, 0.75], -1)
        assert noise.sample(14.0, -4.8, 11.8) == pytest.approx(0.012496930953711655, abs=1e-10)

        noise = LegacyMultiOctaveNoise.create(XoroShiro(0x24B091C), [0.5, 0.75], -4)
        assert noise.sample(14.0, -4.8, 11.8) == pytest.approx(-0.1546099884442262, abs=1e-10)

        noise = LegacyMultiOctaveNoise.create(XoroShiro(0x24B091C), [0.5, 0.75, 0.9], -7)
        assert noise.sample(5375010.0, 248195.5, -324117.4) == pytest.approx(
            0.03837884770265749, abs=1e-10
        )

    def test_octave_addresses_highest_first(self) -> None:
        noise = LegacyMultiOctaveNoise.from_range(XoroShiro(1), range(-7, 1))
        assert noise.octave(0).lacunarity == 1.0
        assert noise.octave(7).lacunarity == 2.0 ** -7
        assert noise.octave(8) is None

    def test_max_broken_value(self) -> None:
        noise = LegacyMultiOctaveNoise.create(XoroShiro(2), [1.0, 1.0], -1)
        assert noise.max_broken_value(0.0) == pytest.approx(noise.max_value)
        assert noise.max_broken_value(2.0) == pytest.approx(2.0 * noise.max_value)

    def test_invalid_arguments(self) -> None:
        with pytest.raises(ValueError):
            LegacyMultiOctaveNoise.create(XoroShiro(1), [], 0)
        with pytest.raises(ValueError):
            LegacyMultiOctaveNoise.create(XoroShiro(1), [1.0], 1)


class TestSimplexMultiOctaveNoise:
    """Tests for the 2D simplex stack."""

    def test_single_octave(self) -> None:
        noise = SimplexMultiOctaveNoise.create(XoroShiro(0), [1.0], 0)
        assert noise.sample(174.0, 241.0) == pytest.approx(-0.23822674514792452, abs=1e-10)

    def test_three_octaves(self) -> None:
        noise = SimplexMultiOctaveNoise.create(XoroShiro(0), [1.0, 1.0, 1.0], -2)
        assert noise.sample(174.0, 241.0) == pytest.approx(0.4011425454935378, abs=1e-10)

    def test_persistence_and_lacunarity(self) -> None:
        noise = SimplexMultiOctaveNoise.create(XoroShiro(0), [1.0, 1.0, 1.0], -2)
        assert [o.lacunarity for o in noise.octaves] == [1.0, 0.5, 0.25]
        assert [o.amplitude for o in noise.octaves] == pytest.approx([1 / 7, 2 / 7, 4 / 7])
