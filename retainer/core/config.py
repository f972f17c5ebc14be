"""Typed configuration loading and access.

Dataclasses for the ``retainer.toml`` structure:

    [retention]
    keep = 3

    [data]
    dir = "data"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_int, get_str, get_table

__all__ = [
    "Config",
    "ConfigError",
    "DataConfig",
    "RetentionConfig",
    "load_config",
    "CONFIG_FILE_NAME",
    "DEFAULT_KEEP",
    "DEFAULT_DATA_DIR",
]

CONFIG_FILE_NAME = "retainer.toml"
DEFAULT_KEEP = 1
DEFAULT_DATA_DIR = "data"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class RetentionConfig:
    """How many releases to keep per project/environment pair."""

    keep: int = DEFAULT_KEEP


@dataclass(frozen=True, slots=True)
class DataConfig:
    """Where the JSON data files live (relative to the working directory)."""

    dir: str = DEFAULT_DATA_DIR


@dataclass(frozen=True, slots=True)
class Config:
    retention: RetentionConfig = field(default_factory=RetentionConfig)
    data: DataConfig = field(default_factory=DataConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Raises:
            TypeError: ``retention.keep`` is present but not an integer.
        """
        retention: StrDict = get_table(data, "retention") or {}
        data_table: StrDict = get_table(data, "data") or {}

        # Range checks belong to RetentionOptions; only the type is checked here.
        keep = DEFAULT_KEEP
        if "keep" in retention:
            value = get_int(retention, "keep")
            if value is None:
                raise TypeError(f"retention.keep must be an integer, got {retention['keep']!r}")
            keep = value

        return cls(
            retention=RetentionConfig(keep=keep),
            data=DataConfig(dir=get_str(data_table, "dir") or DEFAULT_DATA_DIR),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to retainer.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result
    try:
        config = Config.from_dict(result.value)
        return Ok(config)
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))
