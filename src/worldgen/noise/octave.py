"""Multi-octave (fractal) noise built from grid and simplex layers.

Each octave scales the input by its lacunarity, wraps the coordinates to keep
them inside a range where doubles stay precise, and scales the output by its
amplitude. Octave amplitudes are the configured amplitude multiplied by a
persistence factor that depends on the number of octaves.
"""

import math
from dataclasses import dataclass
from typing import Generic, Iterable, Sequence, TypeVar

from ..rng import RandomSource
from .grid import SKIP_DRAWS, GridNoise
from .simplex import SimplexNoise

WRAP_RANGE = 33554432.0

N = TypeVar("N", GridNoise, SimplexNoise)


def wrap(value: float) -> float:
    """Wrap a coordinate into ``[-2^24, 2^24)``."""
    return value - math.floor(value / WRAP_RANGE + 0.5) * WRAP_RANGE


def lacunarity(octave: int) -> float:
    return 2.0 ** octave


@dataclass(frozen=True)
class NoiseOctave(Generic[N]):
    """One noise layer with its amplitude and frequency multiplier."""

    noise: N
    amplitude: float
    lacunarity: float

    def sample(self, x: float, y: float, z: float) -> float:
        lac = self.lacunarity
        return self.amplitude * self.noise.sample(wrap(x * lac), wrap(y * lac), wrap(z * lac))

    def sample_legacy(
        self, x: float, y: float, z: float, y_amp: float, y_min: float
    ) -> float:
        lac = self.lacunarity
        return self.amplitude * self.noise.sample(
            wrap(x * lac), wrap(y * lac), wrap(z * lac), y_amp * lac, y_min * lac
        )

    def sample2(self, x: float, z: float) -> float:
        lac = self.lacunarity
        return self.amplitude * self.noise.sample2(wrap(x * lac), wrap(z * lac))


def edge_value(octaves: Iterable[NoiseOctave], multiplier: float) -> float:
    """Sum of ``amplitude * multiplier`` over all octaves."""
    return sum(o.amplitude * multiplier for o in octaves)


def make_amplitudes(octaves: Iterable[int]) -> tuple[list[float], int]:
    """Convert a set of octave indices to a dense amplitude list.

    Args:
        octaves: Octave indices (e.g. ``range(-15, 1)``).

    Returns:
        The 0/1 amplitude list and the first octave.

    Raises:
        ValueError: If no octave is given.
    """
    ordered = sorted(set(octaves))
    if not ordered:
        raise ValueError("At least one octave is required")

    first = ordered[0]
    amplitudes = [0.0] * (ordered[-1] - first + 1)
    for octave in ordered:
        amplitudes[octave - first] = 1.0
    return amplitudes, first


class MultiOctaveNoise:
    """Grid octaves seeded individually through ``by_hash("octave_<n>")``."""

    def __init__(self, octaves: list[NoiseOctave[GridNoise]]):
        self.octaves = octaves
        self.max_value = edge_value(octaves, 2.0)

    @classmethod
    def create(
        cls, rng: RandomSource, amplitudes: Sequence[float], first_octave: int
    ) -> "MultiOctaveNoise":
        positional = rng.fork_positional()
        count = len(amplitudes)
        persistence = 2.0 ** (count - 1) / (2.0 ** count - 1.0)

        octaves = []
        for i, amplitude in enumerate(amplitudes):
            if amplitude != 0.0:
                octave = first_octave + i
                noise = GridNoise(positional.by_hash(f"octave_{octave}"))
                octaves.append(NoiseOctave(noise, persistence * amplitude, lacunarity(octave)))
            persistence /= 2.0

        return cls(octaves)

    def sample(self, x: float, y: float, z: float) -> float:
        return sum(o.sample(x, y, z) for o in self.octaves)


class LegacyMultiOctaveNoise:
    """Grid octaves drawn sequentially from one stream, highest octave first.

    Octaves are addressed from the highest frequency down: ``octave(0)`` is
    the octave with the largest lacunarity. Zero-amplitude octaves are not
    stored.
    """

    def __init__(self, octaves: list[NoiseOctave[GridNoise]]):
        self.octaves = octaves
        self.max_value = edge_value(octaves, 2.0)

    @classmethod
    def create(
        cls, rng: RandomSource, amplitudes: Sequence[float], first_octave: int
    ) -> "LegacyMultiOctaveNoise":
        count = len(amplitudes)
        if count == 0:
            raise ValueError("Number of amplitudes must be greater than zero")
        if first_octave > 0:
            raise ValueError(f"Invalid first octave: {first_octave}")

        top = -first_octave
        persistence = 1.0 / (2.0 ** count - 1.0)
        octaves: list[NoiseOctave[GridNoise]] = []

        noise = GridNoise(rng)
        if top < count and amplitudes[top] != 0.0:
            octaves.append(
                NoiseOctave(noise, persistence * amplitudes[top], lacunarity(first_octave + count - 1))
            )
            first_octave -= 1
            persistence *= 2.0

        for i in reversed(range(top)):
            if i < count and amplitudes[i] != 0.0:
                octaves.append(
                    NoiseOctave(
                        GridNoise(rng),
                        persistence * amplitudes[i],
                        lacunarity(first_octave + count - 1),
                    )
                )
                first_octave -= 1
                persistence *= 2.0
            else:
                rng.skip(SKIP_DRAWS)

        # Built highest-first; stored lowest-first.
        octaves.reverse()
        return cls(octaves)

    @classmethod
    def from_range(cls, rng: RandomSource, octaves: Iterable[int]) -> "LegacyMultiOctaveNoise":
        amplitudes, first = make_amplitudes(octaves)
        return cls.create(rng, amplitudes, first)

    def octave(self, i: int) -> NoiseOctave[GridNoise] | None:
        """Octave ``i`` counted from the highest frequency, if present."""
        index = len(self.octaves) - 1 - i
        if 0 <= index < len(self.octaves):
            return self.octaves[index]
        return None

    def max_broken_value(self, y_multiplier: float) -> float:
        return edge_value(self.octaves, y_multiplier + 2.0)

    def sample(self, x: float, y: float, z: float) -> float:
        return sum(o.sample(x, y, z) for o in self.octaves)

    def sample_legacy(
        self, x: float, y: float, z: float, y_amp: float, y_min: float
    ) -> float:
        return sum(o.sample_legacy(x, y, z, y_amp, y_min) for o in self.octaves)


class SimplexMultiOctaveNoise:
    """Two-dimensional simplex octaves with halving lacunarity."""

    def __init__(self, octaves: list[NoiseOctave[SimplexNoise]]):
        self.octaves = octaves

    @classmethod
    def create(
        cls, rng: RandomSource, amplitudes: Sequence[float], first_octave: int
    ) -> "SimplexMultiOctaveNoise":
        count = len(amplitudes)
        if count == 0:
            raise ValueError("Number of amplitudes must be greater than zero")
        if first_octave > 0:
            raise ValueError(f"Invalid first octave: {first_octave}")

        persistence = 1.0 / (2.0 ** count - 1.0)
        lac = 1.0
        first = SimplexNoise(rng)

        octaves = []
        for i, amplitude in enumerate(amplitudes):
            noise = first if i == 0 else SimplexNoise(rng)
            octaves.append(NoiseOctave(noise, persistence * amplitude, lac))
            persistence *= 2.0
            lac /= 2.0

        return cls(octaves)

    def sample(self, x: float, z: float) -> float:
        return sum(o.sample2(x, z) for o in self.octaves)
