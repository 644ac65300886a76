"""Tests for block-resolution biome smoothing."""

import pytest

from worldgen.climate import BiomeZoom
from worldgen.climate.zoom import hash_seed
from worldgen.types import BlockPos


def by_quart_x(quart: BlockPos) -> str:
    return "test:east" if quart.x >= 0 else "test:west"


class TestHashSeed:
    """Tests for world seed hashing."""

    def test_deterministic_and_signed_range(self) -> None:
        assert hash_seed(42) == hash_seed(42)
        assert hash_seed(42) != hash_seed(43)
        assert -(2**63) <= hash_seed(-1) < 2**63


class TestBiomeZoom:
    """Tests for quarter selection."""

    @pytest.mark.parametrize("pos", [BlockPos(0, 0, 0), BlockPos(-13, 70, 250), BlockPos(1023, -64, -7)])
    def test_quart_in_neighbourhood(self, pos) -> None:
        zoom = BiomeZoom(42, by_quart_x)
        quart = zoom.quart_for(pos)
        base = BlockPos((pos.x - 2) >> 2, (pos.y - 2) >> 2, (pos.z - 2) >> 2)
        assert quart.x - base.x in (0, 1)
        assert quart.y - base.y in (0, 1)
        assert quart.z - base.z in (0, 1)

    def test_deterministic(self) -> None:
        a = BiomeZoom(7, by_quart_x)
        b = BiomeZoom(7, by_quart_x)
        positions = [BlockPos(x, 64, x * 5) for x in range(-50, 50, 3)]
        assert [a.quart_for(p) for p in positions] == [b.quart_for(p) for p in positions]

    def test_far_from_border_uses_lookup(self) -> None:
        zoom = BiomeZoom(1, by_quart_x)
        assert zoom.biome_at(BlockPos(100, 64, 0)) == "test:east"
        assert zoom.biome_at(BlockPos(-100, 64, 0)) == "test:west"
