# dashagrid/core/digits.py
from __future__ import annotations
from typing import Iterable

__all__ = ["reduce_digits", "digit_sum", "reduce_sum"]


def digit_sum(n: int) -> int:
    return sum(int(ch) for ch in str(abs(int(n))))


def reduce_digits(n: int) -> int:
    """
    Digital root by repeated digit summing.

    0 stays 0; any positive input lands in 1..9 (multiples of 9 give 9).
    """
    n = abs(int(n))
    while n > 9:
        n = digit_sum(n)
    return n


def reduce_sum(values: Iterable[int]) -> int:
    """reduce_digits(sum(values)); every period formula has this shape."""
    return reduce_digits(sum(int(v) for v in values))
