"""Configuration system for cdcc.

Manages compile settings via cdcc.toml with typed dataclasses and sensible
defaults for all values. Command-line options override these values.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeVar

import tomli_w

if sys.version_info >= (3, 12):
    import tomllib
else:
    import tomli as tomllib

from cdcc.exceptions import ConfigError
from cdcc.types import PreviewOptions

if TYPE_CHECKING:
    from pathlib import Path

_T = TypeVar("_T")

__all__ = [
    "CONFIG_FILE",
    "CdccConfig",
    "InputConfig",
    "OutputConfig",
    "PreviewConfig",
    "ResourcesConfig",
    "default_config",
    "load_config",
    "save_config",
]

logger = logging.getLogger(__name__)

CONFIG_FILE = "cdcc.toml"


@dataclass
class PreviewConfig:
    """[preview] section."""

    size: float = 60.0
    width: int = 640
    height: int = 480
    center: bool = True
    crop: bool = False
    horizontal: bool = True
    scale: float = 1.0
    grid: bool = False

    def to_options(self) -> PreviewOptions:
        return PreviewOptions(
            size=float(self.size),
            width=int(self.width),
            height=int(self.height),
            center=self.center,
            crop=self.crop,
            horizontal=self.horizontal,
            scale=float(self.scale),
            grid=self.grid,
        )


@dataclass
class OutputConfig:
    """[output] section."""

    formats: list[str] = field(default_factory=lambda: ["svg"])
    directory: str = ""
    manifest: str = ""


@dataclass
class InputConfig:
    """[input] section."""

    recursive: bool = False
    pattern: str = "*.xml"


@dataclass
class ResourcesConfig:
    """[resources] section."""

    directory: str = ""
    templates: str = ""


@dataclass
class CdccConfig:
    """Root configuration combining all sections."""

    preview: PreviewConfig = field(default_factory=PreviewConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    input: InputConfig = field(default_factory=InputConfig)
    resources: ResourcesConfig = field(default_factory=ResourcesConfig)


_SECTIONS: dict[str, type] = {
    "preview": PreviewConfig,
    "output": OutputConfig,
    "input": InputConfig,
    "resources": ResourcesConfig,
}


def default_config() -> CdccConfig:
    """Return a config with all default values."""
    return CdccConfig()


def _config_to_dict(config: CdccConfig) -> dict[str, object]:
    """Convert CdccConfig to a nested dict suitable for TOML serialization."""
    return {name: dict(vars(getattr(config, name))) for name in _SECTIONS}


def save_config(config: CdccConfig, path: Path) -> None:
    """Save configuration to a TOML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = _config_to_dict(config)
    try:
        with path.open("wb") as f:
            tomli_w.dump(data, f)
        logger.info("Saved config to %s", path)
    except OSError as e:
        logger.error("Failed to save config to %s: %s", path, e)
        raise ConfigError(f"Failed to save config to {path}: {e}") from e


def _load_section(cls: type[_T], data: object) -> _T:
    """Load a dataclass section from a dict, ignoring unknown keys."""
    if not isinstance(data, dict):
        raise ConfigError(f"Config section for {cls.__name__} must be a table")
    known_fields = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
    unknown = sorted(k for k in data if k not in known_fields)
    if unknown:
        logger.warning("Ignoring unknown config keys for %s: %s", cls.__name__, unknown)
    filtered = {k: v for k, v in data.items() if k in known_fields}
    return cls(**filtered)


def load_config(path: Path) -> CdccConfig:
    """Load configuration from a TOML file.

    Missing sections or keys get default values.
    """
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        raw = path.read_bytes()
        data = tomllib.loads(raw.decode("utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.error("Failed to load config from %s: %s", path, e)
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    config = CdccConfig()
    for name, cls in _SECTIONS.items():
        if name in data:
            setattr(config, name, _load_section(cls, data[name]))

    if isinstance(config.output.formats, str):
        config.output.formats = [config.output.formats]

    logger.info("Loaded config from %s", path)
    return config
