"""Climate sampling and nearest-neighbour biome classification."""

from .decimal import CLIMATE_PRECISION, decimal_to_fixed
from .index import BiomeIndex
from .parameters import load_biome_index, parse_biome_parameters
from .point import AXES, BiomeEntry, ClimatePoint
from .sampler import BiomeSource, ClimateSampler
from .temperature import TemperatureModifier, TemperatureNoises, height_adjusted_temperature
from .zoom import BiomeZoom

__all__ = [
    "AXES",
    "BiomeEntry",
    "BiomeIndex",
    "BiomeSource",
    "BiomeZoom",
    "CLIMATE_PRECISION",
    "ClimatePoint",
    "ClimateSampler",
    "TemperatureModifier",
    "TemperatureNoises",
    "decimal_to_fixed",
    "height_adjusted_temperature",
    "load_biome_index",
    "parse_biome_parameters",
]
