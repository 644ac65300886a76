"""Tests for climate sampling and biome lookup."""

from worldgen.climate import BiomeEntry, BiomeIndex, BiomeSource, ClimatePoint, ClimateSampler
from worldgen.climate.point import round_half_away
from worldgen.density import CacheOnce, Constant, EvaluationContext
from worldgen.types import BlockPos


def constant_sampler(*values: float) -> ClimateSampler:
    return ClimateSampler(*(Constant(v) for v in values))


class TestClimatePoint:
    """Tests for quantization."""

    def test_from_floats_rounds(self) -> None:
        point = ClimatePoint.from_floats(0.1234, -0.55, 1.0, 0.0, -0.00004, 0.99996)
        assert point == ClimatePoint(1234, -5500, 10000, 0, 0, 10000)

    def test_halves_round_away_from_zero(self) -> None:
        assert [round_half_away(v) for v in (2.5, -2.5, 0.5, -0.5, 1.4999, -3.5)] == [3, -3, 1, -1, 1, -4]
        # 1/32 scales to exactly 312.5.
        point = ClimatePoint.from_floats(0.03125, -0.03125, 0.0, 0.0, 0.0, 0.0)
        assert point[:2] == (313, -313)

    def test_str(self) -> None:
        assert str(ClimatePoint(1, 2, 3, 4, 5, 6)).startswith("temperature=1, humidity=2")


class TestClimateSampler:
    """Tests for sampling the six subtrees."""

    def test_constant_subtrees(self) -> None:
        sampler = constant_sampler(0.1, 0.2, -0.3, 0.4, 0.0, -1.0)
        assert sampler.sample(BlockPos(5, 5, 5)) == ClimatePoint(1000, 2000, -3000, 4000, 0, -10000)

    def test_quarter_position_scaled_to_blocks(self, counting) -> None:
        x = counting(fx=0.001)
        sampler = ClimateSampler(x, Constant(0.0), Constant(0.0), Constant(0.0), counting(fx=0.0, fy=0.001), Constant(0.0))
        point = sampler.sample(BlockPos(10, 16, 0))
        assert point.temperature == 400
        assert point.depth == 640

    def test_cache_once_does_not_leak_between_queries(self, counting) -> None:
        """Each query sees fresh values even through a per-query cache."""
        sampler = ClimateSampler(CacheOnce(counting(fx=0.001)), *(Constant(0.0) for _ in range(5)))
        ctx = EvaluationContext()
        assert sampler.sample(BlockPos(1, 0, 0), ctx).temperature == 40
        assert sampler.sample(BlockPos(2, 0, 0), ctx).temperature == 80


class TestBiomeSource:
    """Tests for the climate-to-biome pipeline."""

    def test_nearest_biome(self) -> None:
        entries = [
            BiomeEntry("test:cold", ClimatePoint(-10000, 0, 0, 0, 0, 0), ClimatePoint(-1, 0, 0, 0, 0, 0)),
            BiomeEntry("test:warm", ClimatePoint(0, 0, 0, 0, 0, 0), ClimatePoint(10000, 0, 0, 0, 0, 0)),
        ]
        index = BiomeIndex.build(entries)
        assert BiomeSource(constant_sampler(-0.5, 0, 0, 0, 0, 0), index).biome_at(BlockPos(0, 0, 0)) == "test:cold"
        assert BiomeSource(constant_sampler(0.5, 0, 0, 0, 0, 0), index).biome_at(BlockPos(0, 0, 0)) == "test:warm"
