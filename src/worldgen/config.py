"""Engine configuration loading from TOML files."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field


class EngineConfig(BaseModel):
    """Complete configuration for a terrain engine.

    Relative paths are resolved against the directory of the config file
    by :func:`load_config`.
    """

    seed: int = 0
    legacy_random_source: bool | None = Field(
        default=None, description="Overrides the noise settings document when set"
    )
    data_roots: list[Path] = Field(
        min_length=1, description="Directories searched for named documents, in order"
    )
    noise_settings: Path
    biome_parameters: Path | None = None
    log_level: str = "info"

    def resolve_paths(self, base: Path) -> "EngineConfig":
        """Copy with every relative path made relative to ``base``."""
        return self.model_copy(
            update={
                "data_roots": [base / p for p in self.data_roots],
                "noise_settings": base / self.noise_settings,
                "biome_parameters": (
                    None if self.biome_parameters is None else base / self.biome_parameters
                ),
            }
        )


def load_config(config_path: Path) -> EngineConfig:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed config with paths resolved against the file's directory.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
        pydantic.ValidationError: If a field is missing or has the wrong type.
    """
    config_path = Path(config_path)
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return EngineConfig.model_validate(data).resolve_paths(config_path.parent)


def configs_dir() -> Path:
    return Path(__file__).parent.parent.parent / "configs"


def find_config(name: str) -> Path:
    """Find a config file by name.

    Searches in the following order:
    1. Exact path if name contains path separator or ends in ``.toml``
    2. configs/{name}.toml

    Raises:
        FileNotFoundError: If config file is not found.
    """
    if "/" in name or name.endswith(".toml"):
        path = Path(name)
        if path.exists():
            return path
        raise FileNotFoundError(f"Config file not found: {name}")

    config_path = configs_dir() / f"{name}.toml"
    if config_path.exists():
        return config_path

    raise FileNotFoundError(
        f"Config '{name}' not found in {configs_dir()}. "
        f"Available configs: {list_configs()}"
    )


def list_configs() -> list[str]:
    """List available config names."""
    if not configs_dir().exists():
        return []
    return sorted(p.stem for p in configs_dir().glob("*.toml"))
