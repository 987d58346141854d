# mazepath/core/config.py
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from mazepath.core.types import Direction

_FALSEY = ("0", "false", "no", "off")


@dataclass(frozen=True)
class SearchConfig:
    coast: bool = True                      # jump straight corridors as one A* step
    start_facing: Direction = Direction.EAST

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "SearchConfig":
        """Build a config from MAZEPATH_* variables (MAZEPATH_COAST=0 disables coasting)."""
        env = os.environ if env is None else env
        coast = env.get("MAZEPATH_COAST", "1").strip().lower() not in _FALSEY
        return cls(coast=coast)
