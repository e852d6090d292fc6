"""Typed configuration loading.

The optional ``config.toml`` in the user config directory tunes the
dispatch pool size and the manifest document format::

    [dispatch]
    workers = 8

    [manifest]
    format = "lines"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_int, get_str, get_table

__all__ = [
    "CONFIG_FILENAME",
    "Config",
    "ConfigError",
    "DispatchConfig",
    "ManifestConfig",
    "ManifestFormat",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "config.toml"


class ManifestFormat(Enum):
    """On-disk encoding of the manifest document."""

    JSON = "json"
    LINES = "lines"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class DispatchConfig:
    """Worker pool settings. ``workers=None`` means host parallelism."""

    workers: int | None = None


@dataclass(frozen=True, slots=True)
class ManifestConfig:
    format: ManifestFormat = ManifestFormat.JSON


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    dispatch: DispatchConfig = field(default_factory=DispatchConfig)
    manifest: ManifestConfig = field(default_factory=ManifestConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a parsed TOML mapping.

        Raises:
            ValueError: on an out-of-range worker count or unknown format.
        """
        dispatch: StrDict = get_table(data, "dispatch") or {}
        manifest: StrDict = get_table(data, "manifest") or {}

        workers = get_int(dispatch, "workers")
        if workers is not None and workers < 1:
            raise ValueError(f"dispatch.workers must be >= 1, got {workers}")

        fmt = get_str(manifest, "format")

        return cls(
            dispatch=DispatchConfig(workers=workers),
            manifest=ManifestConfig(
                format=ManifestFormat(fmt) if fmt else ManifestFormat.JSON,
            ),
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
    """Load and validate ``config.toml``.

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Config:
    """Load config, falling back to defaults when absent or invalid."""
    result = load_config(path)
    if isinstance(result, Ok):
        return result.value
    return Config()
