"""Region definitions — loads the region map from gcp.yml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG_PATH = Path("gcp.yml")
DEFAULT_REGION = "me-central2"


class ConfigError(ValueError):
    """Raised when the region file is unusable or lacks the requested region."""


@dataclass
class RegionConfig:
    """Region name -> arbitrary metadata. Only membership is ever checked."""

    regions: dict[str, Any] = field(default_factory=dict)

    def __contains__(self, region: object) -> bool:
        return region in self.regions

    def require(self, region: str) -> None:
        if region not in self.regions:
            raise ConfigError(f"Region '{region}' not found in region config")

    @classmethod
    def from_yaml(cls, yaml_str: str) -> RegionConfig:
        try:
            data = yaml.safe_load(yaml_str)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Cannot parse region config: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Region config must be a mapping with a 'region' key")
        regions = data.get("region") or {}
        if not isinstance(regions, dict):
            raise ConfigError("'region' in region config must be a mapping of region names")
        return cls(regions={str(k): v for k, v in regions.items()})

    @classmethod
    def from_file(cls, path: str | Path) -> RegionConfig:
        p = Path(path)
        try:
            text = p.read_text()
        except OSError as exc:
            raise ConfigError(f"Cannot read {p}: {exc}") from exc
        return cls.from_yaml(text)


def load_region_config(path: str | Path, region: str) -> RegionConfig:
    """Load the region file and check that ``region`` is defined in it."""
    config = RegionConfig.from_file(path)
    config.require(region)
    return config
