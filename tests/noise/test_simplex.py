"""Tests for simplex noise."""

import pytest

from worldgen.noise.simplex import SimplexNoise
from worldgen.rng import XoroShiro


class TestSimplexNoise:
    """Tests for 2D and 3D simplex sampling."""

    def test_sample2(self) -> None:
        noise = SimplexNoise(XoroShiro(0xD08416))
        assert noise.table.x_offset == pytest.approx(238.42554434432301, abs=1e-10)
        assert noise.table.y_offset == pytest.approx(87.3961864853153, abs=1e-10)
        assert noise.table.z_offset == pytest.approx(107.66230946779453, abs=1e-10)

        assert noise.sample2(24.11, -5.04) == pytest.approx(0.5984056652708516, abs=1e-10)
        assert noise.sample2(32002.1, 29418.411) == pytest.approx(0.6531136137500556, abs=1e-10)

    def test_sample3(self) -> None:
        noise = SimplexNoise(XoroShiro(0x532786FA))
        assert noise.table.x_offset == pytest.approx(173.80106523756513, abs=1e-10)
        assert noise.table.y_offset == pytest.approx(31.111246980867207, abs=1e-10)
        assert noise.table.z_offset == pytest.approx(12.324905451877527, abs=1e-10)

        assert noise.sample3(325.0, -7.21, -800.04) == pytest.approx(-0.6342398870682866, abs=1e-10)
        assert noise.sample3(6151.0, 6154.2, -4194.5) == pytest.approx(-0.5703277912748015, abs=1e-10)

    def test_origin_is_zero(self) -> None:
        """Offsets are not applied, so the lattice origin samples to zero."""
        noise = SimplexNoise(XoroShiro(42))
        assert noise.sample2(0.0, 0.0) == 0.0
        assert noise.sample3(0.0, 0.0, 0.0) == 0.0
