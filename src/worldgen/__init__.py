"""Deterministic density-function terrain and climate biome engine."""

from .climate import BiomeIndex, BiomeSource, ClimatePoint, ClimateSampler, decimal_to_fixed
from .config import EngineConfig, find_config, load_config
from .density import DensityFunction, EvaluationContext, NoiseChunk, NoiseHolder, NoiseRegistry
from .engine import TerrainEngine
from .exceptions import (
    CircularReferenceError,
    ConfigurationError,
    DecimalFormatError,
    InvalidSplineError,
    MissingFieldError,
    UnknownTypeError,
    ValueNotFoundError,
    WorldgenError,
)
from .resolver import Resolver
from .rng import LegacyRandom, XoroShiro, create_random
from .router import NoiseRouter, NoiseSettings
from .types import BlockPos

__all__ = [
    # Types
    "BlockPos",
    # RNG
    "XoroShiro",
    "LegacyRandom",
    "create_random",
    # Density
    "DensityFunction",
    "EvaluationContext",
    "NoiseChunk",
    "NoiseHolder",
    "NoiseRegistry",
    # Resolver and router
    "Resolver",
    "NoiseRouter",
    "NoiseSettings",
    # Climate
    "BiomeIndex",
    "BiomeSource",
    "ClimatePoint",
    "ClimateSampler",
    "decimal_to_fixed",
    # Engine and config
    "TerrainEngine",
    "EngineConfig",
    "load_config",
    "find_config",
    # Exceptions
    "WorldgenError",
    "ConfigurationError",
    "MissingFieldError",
    "UnknownTypeError",
    "ValueNotFoundError",
    "CircularReferenceError",
    "DecimalFormatError",
    "InvalidSplineError",
]
