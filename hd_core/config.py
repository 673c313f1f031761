from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


class ChartConfig(BaseModel):
    """Configuration for ephemeris-backed chart computation."""

    ephe_path: str = Field(default="", description="Swiss Ephemeris data directory; empty uses the built-in Moshier fallback")
    design_offset_deg: float = Field(default=88.0, description="Solar arc between design and birth instants")
    design_iterations: int = Field(default=5, ge=1)
    design_tolerance_deg: float = Field(default=1e-4, gt=0)
    house_system: str = Field(default="P", min_length=1, max_length=1)
    include_cosmetic_bodies: bool = True

    # Transit charts are computed at Null Island in UTC
    transit_latitude: float = 0.0
    transit_longitude: float = 0.0


def load_config_from_yaml(path: Path) -> ChartConfig:
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return ChartConfig.model_validate(raw)


def load_config(path: Optional[str]) -> ChartConfig:
    if not path:
        return ChartConfig()
    return load_config_from_yaml(Path(path))
