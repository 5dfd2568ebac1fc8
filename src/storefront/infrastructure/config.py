"""Runtime configuration read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    log_level: str = "WARNING"

    @staticmethod
    def from_env() -> Settings:
        data_dir = os.environ.get("STOREFRONT_DATA_DIR")
        return Settings(
            data_dir=Path(data_dir) if data_dir else DEFAULT_DATA_DIR,
            log_level=os.environ.get("STOREFRONT_LOG_LEVEL", "WARNING").upper(),
        )
