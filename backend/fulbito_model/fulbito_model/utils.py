import math
from itertools import combinations
from numbers import Real
from typing import Iterator, Optional, Sequence, TypeVar

T = TypeVar("T")


def is_finite_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


def percentage(part: int, whole: int) -> Optional[float]:
    if whole <= 0:
        return None
    return part / whole * 100.0


def format_win_rate(rate: Optional[float]) -> str:
    if rate is None or math.isnan(rate):
        return "N/A"
    return f"{rate:.1f}%"


def pairs(items: Sequence[T]) -> Iterator[tuple[T, T]]:
    return combinations(items, 2)
