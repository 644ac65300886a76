"""Biome-parameter documents.

Number literals are read as their source text and converted with
:func:`~worldgen.climate.decimal.decimal_to_fixed`, so ``0.55`` becomes
exactly ``5500``.

Document shape::

    {"biomes": [
        {"biome": "minecraft:plains",
         "parameters": {"temperature": [-0.15, 0.2], "depth": 0, ...}}
    ]}
"""

import json
from pathlib import Path
from typing import Any

import structlog

from ..exceptions import ConfigurationError, DecimalFormatError, MissingFieldError
from .decimal import decimal_to_fixed
from .index import BiomeIndex
from .point import AXES, BiomeEntry, ClimatePoint

logger = structlog.get_logger()


def _axis(value: Any, axis: str) -> tuple[int, int]:
    if isinstance(value, str):
        fixed = decimal_to_fixed(value)
        return fixed, fixed
    if isinstance(value, list) and len(value) == 2 and all(isinstance(v, str) for v in value):
        first, second = decimal_to_fixed(value[0]), decimal_to_fixed(value[1])
        return min(first, second), max(first, second)
    raise ConfigurationError(
        f'Expected a number or a [min, max] pair for "{axis}", but given: {value!r}'
    )


def parse_entry(document: Any) -> BiomeEntry:
    if not isinstance(document, dict):
        raise ConfigurationError(f"Expected Object, but given: {document!r}")
    for key in ("biome", "parameters"):
        if key not in document:
            raise MissingFieldError(f"Map has no field named {key}")
    biome, parameters = document["biome"], document["parameters"]
    if not isinstance(biome, str):
        raise ConfigurationError(f"Expected String biome name, but given: {biome!r}")
    if not isinstance(parameters, dict):
        raise ConfigurationError(f'Expected Object parameters for "{biome}", but given: {parameters!r}')

    lower, upper = [], []
    for axis in AXES:
        if axis not in parameters:
            raise MissingFieldError(f'Map has no field named {axis} (biome "{biome}")')
        try:
            lo, hi = _axis(parameters[axis], axis)
        except DecimalFormatError as e:
            raise DecimalFormatError(f'Invalid "{axis}" for biome "{biome}": {e}') from e
        lower.append(lo)
        upper.append(hi)
    return BiomeEntry(biome, ClimatePoint(*lower), ClimatePoint(*upper))


def parse_biome_parameters(text: str) -> list[BiomeEntry]:
    """Parse a biome-parameter document from its JSON text.

    Raises:
        ConfigurationError: If the text is not valid JSON, the biome list is
            missing or empty, or an entry is malformed.
    """
    try:
        document = json.loads(text, parse_float=str, parse_int=str)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Malformed biome parameters: {e}") from e
    if not isinstance(document, dict) or "biomes" not in document:
        raise MissingFieldError("Map has no field named biomes")
    biomes = document["biomes"]
    if not isinstance(biomes, list) or not biomes:
        raise ConfigurationError("Biome parameter list must be a non-empty array")
    return [parse_entry(entry) for entry in biomes]


def load_biome_index(path: Path | str) -> BiomeIndex:
    """Read a biome-parameter file and build its index."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Failed to read {path}: {e}") from e
    index = BiomeIndex.build(parse_biome_parameters(text))
    logger.info("biome_index_built", path=str(path), entries=len(index), height=index.height)
    return index
