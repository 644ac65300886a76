"""Tests for biome-parameter documents."""

import json

import pytest

from worldgen.climate import ClimatePoint, load_biome_index, parse_biome_parameters
from worldgen.exceptions import ConfigurationError, DecimalFormatError, MissingFieldError

PLAINS = """
{"biomes": [{"biome": "minecraft:plains", "parameters": {
    "temperature": [-0.15, 0.2], "humidity": [-1.0, -0.35],
    "continentalness": [-0.11, 0.03], "erosion": 0.55,
    "depth": 0, "weirdness": [0.4, -0.05], "offset": 0.0}}]}
"""


class TestParseBiomeParameters:
    """Tests for parsing parameter text."""

    def test_exact_fixed_point(self) -> None:
        (entry,) = parse_biome_parameters(PLAINS)
        assert entry.biome == "minecraft:plains"
        assert entry.lower == ClimatePoint(-1500, -10000, -1100, 5500, 0, -500)
        assert entry.upper == ClimatePoint(2000, -3500, 300, 5500, 0, 4000)

    def test_missing_axis(self) -> None:
        text = json.dumps({"biomes": [{"biome": "test:a", "parameters": {"temperature": 0}}]})
        with pytest.raises(MissingFieldError, match="humidity"):
            parse_biome_parameters(text)

    def test_missing_biomes(self) -> None:
        with pytest.raises(MissingFieldError, match="biomes"):
            parse_biome_parameters("{}")

    def test_empty_biomes(self) -> None:
        with pytest.raises(ConfigurationError, match="non-empty"):
            parse_biome_parameters('{"biomes": []}')

    def test_bad_axis_value(self) -> None:
        parameters = {axis: 0 for axis in ("humidity", "continentalness", "erosion", "depth", "weirdness")}
        parameters["temperature"] = [0, 1, 2]
        text = json.dumps({"biomes": [{"biome": "test:a", "parameters": parameters}]})
        with pytest.raises(ConfigurationError, match='"temperature"'):
            parse_biome_parameters(text)

    def test_exponent_literal_rejected(self) -> None:
        parameters = {axis: 0 for axis in ("humidity", "continentalness", "erosion", "depth", "weirdness")}
        text = json.dumps({"biomes": [{"biome": "test:a", "parameters": parameters}]})
        text = text.replace('"humidity": 0', '"humidity": 1e-3')
        text = text.replace('"parameters": {', '"parameters": {"temperature": 0, ')
        with pytest.raises(DecimalFormatError):
            parse_biome_parameters(text)

    def test_bad_literal_names_axis_and_biome(self) -> None:
        parameters = {axis: 0 for axis in ("temperature", "continentalness", "erosion", "depth", "weirdness")}
        parameters["humidity"] = "a20.6"
        text = json.dumps({"biomes": [{"biome": "test:a", "parameters": parameters}]})
        with pytest.raises(DecimalFormatError) as info:
            parse_biome_parameters(text)
        message = str(info.value)
        assert '"humidity"' in message
        assert '"test:a"' in message
        assert '"a20.6"' in message

    def test_malformed_json(self) -> None:
        with pytest.raises(ConfigurationError, match="Malformed"):
            parse_biome_parameters("{")


class TestLoadBiomeIndex:
    """Tests for loading the bundled parameter file."""

    def test_bundled(self, data_dir) -> None:
        index = load_biome_index(data_dir / "biome_parameters" / "overworld.json")
        assert len(index) > 0
        assert "minecraft:plains" in index.biomes()

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(ConfigurationError, match="Failed to read"):
            load_biome_index(tmp_path / "absent.json")
