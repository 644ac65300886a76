"""Climate points and parameter rectangles."""

import math
from typing import NamedTuple

# Fixed-point scale of sampled climate values.
CLIMATE_SCALE = 10000

AXES = ("temperature", "humidity", "continentalness", "erosion", "depth", "weirdness")


def round_half_away(value: float) -> int:
    """Nearest integer, with exact halves rounded away from zero."""
    magnitude = abs(value)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return -whole if value < 0 else whole


class ClimatePoint(NamedTuple):
    """Six fixed-point climate coordinates. Compared as plain integers."""

    temperature: int
    humidity: int
    continentalness: int
    erosion: int
    depth: int
    weirdness: int

    @classmethod
    def from_floats(cls, *values: float) -> "ClimatePoint":
        """Quantize sampled values to ``v * 10000``, rounding halves away from zero."""
        return cls(*(round_half_away(v * CLIMATE_SCALE) for v in values))

    def __str__(self) -> str:
        return ", ".join(f"{axis}={value}" for axis, value in zip(AXES, self))


class BiomeEntry(NamedTuple):
    """A biome and the closed climate rectangle it occupies."""

    biome: str
    lower: ClimatePoint
    upper: ClimatePoint

    def distance2(self, point: ClimatePoint) -> int:
        """Squared distance from ``point`` to the nearest point of the rectangle."""
        total = 0
        for value, lo, hi in zip(point, self.lower, self.upper):
            if value < lo:
                total += (lo - value) ** 2
            elif value > hi:
                total += (value - hi) ** 2
        return total
