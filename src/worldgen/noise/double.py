"""Double multi-octave noise: two octave stacks summed at offset frequencies."""

from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..rng import RandomSource
from .octave import LegacyMultiOctaveNoise, MultiOctaveNoise

INPUT_FACTOR = 1.0181268882175227
TARGET_DEVIATION = 0.16666666666666666


def expected_deviation(octave_span: int) -> float:
    return 0.1 * (1.0 + 1.0 / (octave_span + 1))


class NoiseParameters(BaseModel):
    """Octave layout of a named noise definition."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    first_octave: int = Field(alias="firstOctave", description="Lowest octave index")
    amplitudes: tuple[float, ...] = Field(description="Per-octave amplitudes")

    @field_validator("amplitudes")
    @classmethod
    def _non_empty(cls, value: tuple[float, ...]) -> tuple[float, ...]:
        if not value:
            raise ValueError("amplitudes must not be empty")
        if all(amplitude == 0.0 for amplitude in value):
            raise ValueError("At least one amplitude must be non-zero")
        return value


class DoubleMultiOctaveNoise:
    """Sum of two independent octave stacks, normalised to unit deviation.

    The second stack is sampled at the input scaled by a constant just above
    one so lattice artefacts of the two stacks do not line up.
    """

    def __init__(
        self,
        first: MultiOctaveNoise | LegacyMultiOctaveNoise,
        second: MultiOctaveNoise | LegacyMultiOctaveNoise,
        value_factor: float,
    ):
        self.first = first
        self.second = second
        self.value_factor = value_factor
        self.max_value = (first.max_value + second.max_value) * value_factor

    @classmethod
    def create(
        cls,
        rng: RandomSource,
        amplitudes: Sequence[float],
        first_octave: int,
        legacy: bool = False,
    ) -> "DoubleMultiOctaveNoise":
        """Build both stacks from one stream.

        Args:
            rng: Source stream; both stacks draw from it in order.
            amplitudes: Per-octave amplitudes.
            first_octave: Index of the first amplitude.
            legacy: Use sequentially drawn legacy stacks.

        Raises:
            ValueError: If every amplitude is zero.
        """
        stack = LegacyMultiOctaveNoise if legacy else MultiOctaveNoise
        first = stack.create(rng, amplitudes, first_octave)
        second = stack.create(rng, amplitudes, first_octave)

        active = [i for i, amplitude in enumerate(amplitudes) if amplitude != 0.0]
        if not active:
            raise ValueError("At least one amplitude must be non-zero")

        value_factor = TARGET_DEVIATION / expected_deviation(active[-1] - active[0])
        return cls(first, second, value_factor)

    @classmethod
    def from_parameters(
        cls, rng: RandomSource, params: NoiseParameters, legacy: bool = False
    ) -> "DoubleMultiOctaveNoise":
        return cls.create(rng, params.amplitudes, params.first_octave, legacy)

    def sample(self, x: float, y: float, z: float) -> float:
        return (
            self.first.sample(x, y, z)
            + self.second.sample(x * INPUT_FACTOR, y * INPUT_FACTOR, z * INPUT_FACTOR)
        ) * self.value_factor
