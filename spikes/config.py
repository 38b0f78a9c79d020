"""
Central configuration for the spike trajectory recorder.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Settings:
    # Paths
    BASE_DIR: Path = Path(__file__).resolve().parent.parent
    DATA_DIR: Path = field(default=None)
    OUTPUT_DIR: Path = field(default=None)

    # Persistence keys
    TRAJECTORIES_KEY: str = "voley-stats:trajectories"
    STATS_KEY: str = "voley-stats:stats"

    # Export file names: {prefix}-{kind}-{YYYY-MM-DD}.json
    EXPORT_PREFIX: str = "voley-stats"

    # Charts
    CHART_DPI: int = 150

    def __post_init__(self):
        if self.DATA_DIR is None:
            env_dir = os.environ.get("VOLEY_STATS_DATA_DIR")
            self.DATA_DIR = Path(env_dir) if env_dir else self.BASE_DIR / "data"
        if self.OUTPUT_DIR is None:
            self.OUTPUT_DIR = self.BASE_DIR / "output"


settings = Settings()
