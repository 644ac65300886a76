"""Terrain engine facade.

Wires the pieces together at startup: value sources over the data roots, a
resolver, the noise-settings document and its router, noise binding for the
world seed, and the biome index. After construction the engine is read-only
apart from lazily bound named functions, and may be shared between threads
as long as every thread samples with its own context.
"""

import json
import threading
from pathlib import Path
from typing import Any, Iterable

import numpy as np
import structlog
from numpy.typing import NDArray

from .climate import BiomeIndex, BiomeSource, ClimatePoint, ClimateSampler, load_biome_index
from .config import EngineConfig
from .density import (
    BindNoises,
    Blender,
    DensityFunction,
    EvaluationContext,
    NoiseChunk,
    NoiseRegistry,
    TraceMapper,
    map_graph,
)
from .exceptions import ConfigurationError, WorldgenError
from .resolver import (
    STANDARD,
    CachedValueSource,
    CascadeValueSource,
    FilesystemValueSource,
    Resolver,
    ValueSource,
)
from .rng import create_random
from .router import NoiseRouter, NoiseSettings, load_noise_settings
from .types import BlockPos

logger = structlog.get_logger()


def read_json(path: Path) -> Any:
    try:
        with open(path, "rb") as f:
            return json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Failed to read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Malformed JSON in {path}: {e}") from e


class TerrainEngine:
    """Density and biome queries for one world seed.

    Args:
        source: Where named documents are loaded from.
        settings_document: Parsed noise-settings document.
        seed: World seed.
        biome_index: Index used by :meth:`classify_biome`, if any.
        legacy_random_source: Overrides the settings document when not None.
    """

    def __init__(
        self,
        source: ValueSource,
        settings_document: Any,
        seed: int = 0,
        biome_index: BiomeIndex | None = None,
        legacy_random_source: bool | None = None,
    ):
        self.seed = seed
        self.resolver = Resolver(STANDARD, source)
        settings, router = load_noise_settings(settings_document, self.resolver)
        self.settings: NoiseSettings = settings

        legacy = settings.legacy_random_source
        if legacy_random_source is not None:
            legacy = legacy_random_source
        self.legacy = legacy
        self.registry = NoiseRegistry(create_random(seed, legacy).fork_positional())
        self._binder = BindNoises(self.registry)
        self._bind_memo: dict[DensityFunction, DensityFunction] = {}
        self._named: dict[str, DensityFunction] = {}
        self._lock = threading.Lock()

        self.router: NoiseRouter = router.map(self._binder, self._bind_memo)
        self.climate = ClimateSampler.from_router(self.router)
        self.biome_index = biome_index
        self.biomes = BiomeSource(self.climate, biome_index) if biome_index is not None else None

        logger.info(
            "engine_ready",
            seed=seed,
            legacy_random_source=legacy,
            noises=len(self.registry),
            named_values=len(self.resolver),
            biomes=0 if biome_index is None else len(biome_index),
        )

    @classmethod
    def from_config(cls, config: EngineConfig) -> "TerrainEngine":
        """Build an engine from a loaded config.

        Raises:
            ConfigurationError: If any document is missing or malformed.
        """
        source = CachedValueSource(
            CascadeValueSource([FilesystemValueSource(root) for root in config.data_roots])
        )
        index = None
        if config.biome_parameters is not None:
            index = load_biome_index(config.biome_parameters)
        return cls(
            source,
            read_json(config.noise_settings),
            seed=config.seed,
            biome_index=index,
            legacy_random_source=config.legacy_random_source,
        )

    def new_context(self) -> EvaluationContext:
        """Fresh context for one worker."""
        return EvaluationContext()

    def density(self, name: str) -> DensityFunction:
        """Bound function for a router entry or a named document.

        Raises:
            ConfigurationError: If ``name`` is neither a router entry nor a
                resolvable document.
        """
        if name in NoiseRouter.keys():
            return self.router.get(name)
        with self._lock:
            function = self._named.get(name)
            if function is None:
                function = map_graph(self.resolver.resolve_named(name), self._binder, self._bind_memo)
                self._named[name] = function
        return function

    def sample_density(self, name: str, pos: BlockPos, ctx: EvaluationContext | None = None) -> float:
        if ctx is None:
            ctx = self.new_context()
        return ctx.sample(self.density(name), BlockPos(*pos))

    def fill_density(self, name: str, positions: Iterable[BlockPos]) -> NDArray[np.float64]:
        """Sample ``name`` at every position with one shared context."""
        function = self.density(name)
        ctx = self.new_context()
        return np.array([ctx.sample(function, BlockPos(*p)) for p in positions], dtype=np.float64)

    def trace_density(self, name: str, pos: BlockPos) -> tuple[float, list[tuple[str, float]]]:
        """Sample ``name`` recording every node visited, in evaluation order."""
        traced = self.density(name).map(TraceMapper())
        ctx = self.new_context()
        ctx.trace = []
        value = ctx.sample(traced, BlockPos(*pos))
        return value, ctx.trace

    def chunk_density(
        self, chunk_x: int, chunk_z: int, blender: Blender | None = None
    ) -> NDArray[np.float64]:
        """Interpolated final density of one chunk column, indexed ``[x, y - min_y, z]``."""
        shape = self.settings.noise
        chunk = NoiseChunk(
            self.router.final_density,
            chunk_x,
            chunk_z,
            shape.min_y,
            shape.height,
            self.settings.cell_width,
            self.settings.cell_height,
            blender,
        )
        return chunk.fill()

    def climate_at(self, quart_pos: BlockPos) -> ClimatePoint:
        return self.climate.sample(BlockPos(*quart_pos))

    def classify_biome(self, quart_pos: BlockPos) -> str:
        """Biome at a quarter position.

        Raises:
            WorldgenError: If the engine was built without a biome index.
        """
        if self.biomes is None:
            raise WorldgenError("No biome parameters configured")
        return self.biomes.biome_at(BlockPos(*quart_pos))
