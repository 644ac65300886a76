"""Noise primitives: lattice, simplex and multi-octave noise."""

from .double import DoubleMultiOctaveNoise, NoiseParameters
from .grid import GridNoise, PermutationTable
from .octave import (
    LegacyMultiOctaveNoise,
    MultiOctaveNoise,
    NoiseOctave,
    SimplexMultiOctaveNoise,
    make_amplitudes,
    wrap,
)
from .simplex import SimplexNoise

__all__ = [
    "DoubleMultiOctaveNoise",
    "GridNoise",
    "LegacyMultiOctaveNoise",
    "MultiOctaveNoise",
    "NoiseOctave",
    "NoiseParameters",
    "PermutationTable",
    "SimplexMultiOctaveNoise",
    "SimplexNoise",
    "make_amplitudes",
    "wrap",
]
