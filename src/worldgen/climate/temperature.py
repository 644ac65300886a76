"""Height-adjusted biome temperature.

A biome's base temperature drops with altitude above y=80, perturbed by a
fixed simplex noise. Frozen-modified biomes additionally become cold in
noise-selected patches. The three noises use fixed legacy seeds that do not
depend on the world seed.
"""

from enum import Enum

from ..noise import SimplexMultiOctaveNoise
from ..rng import LegacyRandom
from ..types import BlockPos

# Altitude above which temperature starts to fall.
SNOW_LINE_Y = 80
FROZEN_PATCH_TEMPERATURE = 0.2


class TemperatureModifier(str, Enum):
    NONE = "none"
    FROZEN = "frozen"


class TemperatureNoises:
    """The three fixed diagnostic noises, built once per instance."""

    def __init__(self):
        self.temperature = SimplexMultiOctaveNoise.create(LegacyRandom(1234), [1.0], 0)
        self.frozen_temperature = SimplexMultiOctaveNoise.create(
            LegacyRandom(3456), [1.0, 1.0, 1.0], -2
        )
        self.biome_info = SimplexMultiOctaveNoise.create(LegacyRandom(2345), [1.0], 0)

    def modify(self, pos: BlockPos, temperature: float, modifier: TemperatureModifier) -> float:
        if modifier is TemperatureModifier.NONE:
            return temperature
        frozen = self.frozen_temperature.sample(pos.x * 0.05, pos.z * 0.05) * 7.0
        info = self.biome_info.sample(pos.x * 0.2, pos.z * 0.2)
        if frozen + info < 0.3:
            patch = self.biome_info.sample(pos.x * 0.09, pos.z * 0.09)
            if patch < 0.8:
                return FROZEN_PATCH_TEMPERATURE
        return temperature


def height_adjusted_temperature(
    pos: BlockPos,
    base: float,
    modifier: TemperatureModifier,
    noises: TemperatureNoises,
) -> float:
    """Temperature of a biome with base temperature ``base`` at block ``pos``."""
    temperature = noises.modify(pos, base, modifier)
    if pos.y <= SNOW_LINE_Y:
        return temperature
    offset = noises.temperature.sample(pos.x / 8.0, pos.z / 8.0) * 8.0
    return temperature - (offset + pos.y - SNOW_LINE_Y) * 0.05 / 40.0
