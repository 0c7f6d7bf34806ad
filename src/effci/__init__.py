from pathlib import Path

from effci.stats.efficiency import (
    EfficiencyInterval,
    InvalidArgumentError,
    efficiency_ci,
)

_root = Path(__file__).parent.parent.parent
DATA_DIR = _root / "data"
RUN_DIR = _root / "runs"

__all__ = [
    "DATA_DIR",
    "RUN_DIR",
    "EfficiencyInterval",
    "InvalidArgumentError",
    "efficiency_ci",
]
