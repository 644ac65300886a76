"""Noise settings documents and the noise router.

A noise-settings document describes one dimension: its vertical extent, cell
size, default block and fluid, and the ``noise_router`` object naming the
density functions the generator reads.
"""

from dataclasses import dataclass, fields
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .density import DensityFunction, Mapper, map_graph
from .exceptions import ConfigurationError, MissingFieldError
from .resolver import Resolver
from .resolver.fields import describe, require


@dataclass(frozen=True, eq=False)
class NoiseRouter:
    """The fifteen named subtrees of a noise-settings document."""

    barrier: DensityFunction
    fluid_level_floodedness: DensityFunction
    fluid_level_spread: DensityFunction
    lava: DensityFunction
    temperature: DensityFunction
    vegetation: DensityFunction
    continents: DensityFunction
    erosion: DensityFunction
    depth: DensityFunction
    ridges: DensityFunction
    initial_density_without_jaggedness: DensityFunction
    final_density: DensityFunction
    vein_toggle: DensityFunction
    vein_ridged: DensityFunction
    vein_gap: DensityFunction

    @classmethod
    def keys(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_json(cls, document: Any, resolver: Resolver) -> "NoiseRouter":
        """Resolve every subtree of a ``noise_router`` object.

        Raises:
            MissingFieldError: If one of the fifteen keys is absent.
        """
        if not isinstance(document, dict):
            raise ConfigurationError(f"Expected Object, but given: {describe(document)}")
        subtrees = {}
        for key in cls.keys():
            if key not in document:
                raise MissingFieldError(f'No "{key}" key')
            subtrees[key] = resolver.resolve(document[key])
        return cls(**subtrees)

    def get(self, key: str) -> DensityFunction:
        if key not in self.keys():
            raise KeyError(f"Unknown router entry: {key}")
        return getattr(self, key)

    def items(self) -> list[tuple[str, DensityFunction]]:
        return [(key, getattr(self, key)) for key in self.keys()]

    def map(
        self, mapper: Mapper, memo: dict[DensityFunction, DensityFunction] | None = None
    ) -> "NoiseRouter":
        """Map every subtree with one shared memo, so shared nodes stay shared."""
        if memo is None:
            memo = {}
        return NoiseRouter(**{key: map_graph(node, mapper, memo) for key, node in self.items()})


class BlockStateRef(BaseModel):
    """Opaque block reference; only the name is kept."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(alias="Name")
    properties: dict[str, str] = Field(default_factory=dict, alias="Properties")


class NoiseShape(BaseModel):
    """Vertical extent and cell size of a dimension."""

    model_config = ConfigDict(frozen=True)

    min_y: int
    height: int = Field(gt=0)
    size_horizontal: int = Field(gt=0)
    size_vertical: int = Field(gt=0)


class NoiseSettings(BaseModel):
    """Scalar part of a noise-settings document."""

    model_config = ConfigDict(frozen=True)

    sea_level: int
    legacy_random_source: bool = False
    default_block: BlockStateRef
    default_fluid: BlockStateRef
    noise: NoiseShape

    @property
    def cell_width(self) -> int:
        return self.noise.size_horizontal << 2

    @property
    def cell_height(self) -> int:
        return self.noise.size_vertical << 2


def load_noise_settings(document: Any, resolver: Resolver) -> tuple[NoiseSettings, NoiseRouter]:
    """Parse a noise-settings document and resolve its router.

    Raises:
        ConfigurationError: If the scalar fields are invalid.
        MissingFieldError: If ``noise_router`` or one of its keys is absent.
    """
    try:
        settings = NoiseSettings.model_validate(document)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid noise settings: {e}") from e
    router = NoiseRouter.from_json(require(document, "noise_router"), resolver)
    return settings, router
