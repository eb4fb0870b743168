from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Config:
    supported_team_sizes: Tuple[int, ...] = (5, 6, 8, 11)
    default_top_n: int = 3

    # raw combinations visited before returning best-so-far; 0 disables the ceiling
    max_combinations: int = 50_000
    stop_check_interval: int = 1024
