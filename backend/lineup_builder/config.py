"""Lineup builder configuration."""

from __future__ import annotations

import os
import pathlib

from pydantic import BaseModel

_DEFAULT_DATA_DIR = pathlib.Path(__file__).resolve().parent.parent / "data"


class ChemistryThresholds(BaseModel):
    """Closed-interval bands for classifying a pairwise chemistry value."""
    positive_min: int = 100
    negative_max: int = -100

    # Connector opacity used by renderers: min(|value| / scale, cap)
    strength_scale: float = 500.0
    strength_cap: float = 0.8


class BuilderConfig(BaseModel):
    slot_count: int = 9
    thresholds: ChemistryThresholds = ChemistryThresholds()

    archive_key: str = "clb-saved-lineups"
    export_name: str = "Exported Lineup"
    status_message_seconds: float = 4.0

    # Player picker fuzzy search
    fuzzy_threshold: int = 60
    search_limit: int = 10

    data_dir: pathlib.Path = _DEFAULT_DATA_DIR

    @property
    def chemistry_dir(self) -> pathlib.Path:
        return self.data_dir / "chemistry"

    @property
    def archive_path(self) -> pathlib.Path:
        return self.data_dir / "lineups" / "store.json"


def _load_config() -> BuilderConfig:
    env_dir = os.getenv("CLB_DATA_DIR")
    if env_dir:
        return BuilderConfig(data_dir=pathlib.Path(env_dir))
    return BuilderConfig()


# Default builder config singleton
builder_config = _load_config()
