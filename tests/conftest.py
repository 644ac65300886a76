"""Shared test fixtures for worldgen tests."""

from pathlib import Path
from typing import Callable

import pytest

from worldgen.density import DensityFunction, EvaluationContext
from worldgen.types import BlockPos

DATA_DIR = Path(__file__).parent.parent / "data" / "worldgen"


class CountingFunction(DensityFunction):
    """Affine function of the position that counts its evaluations."""

    def __init__(self, fx: float = 1.0, fy: float = 0.0, fz: float = 0.0, bound: float = 1e6):
        self.fx = fx
        self.fy = fy
        self.fz = fz
        self.calls = 0
        self._min = -bound
        self._max = bound

    def sample(self, pos: BlockPos, ctx: EvaluationContext) -> float:
        self.calls += 1
        return self.fx * pos.x + self.fy * pos.y + self.fz * pos.z


@pytest.fixture
def ctx() -> EvaluationContext:
    """Fresh point-sampling context."""
    return EvaluationContext()


@pytest.fixture
def counting() -> Callable[..., CountingFunction]:
    """Factory for counting affine functions."""
    return CountingFunction


@pytest.fixture
def data_dir() -> Path:
    """Root of the bundled demo data pack."""
    return DATA_DIR


@pytest.fixture
def small_values() -> dict:
    """Named documents referenced by ``small_settings``."""
    return {
        "test:noise": {"firstOctave": -5, "amplitudes": [1.0, 1.0]},
        "test:temperature": {
            "type": "minecraft:noise",
            "noise": "test:noise",
            "xz_scale": 0.25,
            "y_scale": 0.0,
        },
    }


@pytest.fixture
def small_settings() -> dict:
    """A 16-block tall noise-settings document with cheap subtrees."""
    router = {
        key: 0.0
        for key in (
            "barrier",
            "fluid_level_floodedness",
            "fluid_level_spread",
            "lava",
            "vegetation",
            "erosion",
            "depth",
            "ridges",
            "initial_density_without_jaggedness",
            "vein_toggle",
            "vein_ridged",
            "vein_gap",
        )
    }
    router["temperature"] = "test:temperature"
    router["continents"] = {
        "type": "minecraft:y_clamped_gradient",
        "from_y": 0,
        "to_y": 16,
        "from_value": -0.5,
        "to_value": 0.5,
    }
    router["final_density"] = {
        "type": "minecraft:interpolated",
        "argument": {
            "type": "minecraft:add",
            "argument1": "test:temperature",
            "argument2": {
                "type": "minecraft:y_clamped_gradient",
                "from_y": 0,
                "to_y": 16,
                "from_value": 1.0,
                "to_value": -1.0,
            },
        },
    }
    return {
        "sea_level": 8,
        "default_block": {"Name": "minecraft:stone"},
        "default_fluid": {"Name": "minecraft:water", "Properties": {"level": "0"}},
        "noise": {"min_y": 0, "height": 16, "size_horizontal": 1, "size_vertical": 2},
        "noise_router": router,
    }
