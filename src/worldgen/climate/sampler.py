"""Climate sampling and biome lookup."""

from ..density import DensityFunction, EvaluationContext, Filler
from ..router import NoiseRouter
from ..types import BlockPos
from .index import BiomeIndex
from .point import ClimatePoint


class ClimateSampler:
    """Samples the six climate subtrees at a quarter position."""

    def __init__(
        self,
        temperature: DensityFunction,
        humidity: DensityFunction,
        continentalness: DensityFunction,
        erosion: DensityFunction,
        depth: DensityFunction,
        weirdness: DensityFunction,
    ):
        self.temperature = temperature
        self.humidity = humidity
        self.continentalness = continentalness
        self.erosion = erosion
        self.depth = depth
        self.weirdness = weirdness

    @classmethod
    def from_router(cls, router: NoiseRouter) -> "ClimateSampler":
        return cls(
            router.temperature,
            router.vegetation,
            router.continents,
            router.erosion,
            router.depth,
            router.ridges,
        )

    def sample(self, quart_pos: BlockPos, ctx: EvaluationContext | None = None) -> ClimatePoint:
        """Climate point at ``quart_pos``, a position in quarter-block units.

        Each call uses a fresh context unless one is passed in. Outside a
        chunk fill, per-query caches only pass values through.
        """
        pos = BlockPos.from_quart(*quart_pos)
        if ctx is None:
            ctx = EvaluationContext(filler=Filler.SLICE)
        return ClimatePoint.from_floats(
            ctx.sample(self.temperature, pos),
            ctx.sample(self.humidity, pos),
            ctx.sample(self.continentalness, pos),
            ctx.sample(self.erosion, pos),
            ctx.sample(self.depth, pos),
            ctx.sample(self.weirdness, pos),
        )


class BiomeSource:
    """Biome classification: sampled climate point, then nearest rectangle."""

    def __init__(self, sampler: ClimateSampler, index: BiomeIndex):
        self.sampler = sampler
        self.index = index

    def biome_at(self, quart_pos: BlockPos) -> str:
        return self.index.nearest(self.sampler.sample(quart_pos)).biome
