# dashagrid/core/name_number.py
from __future__ import annotations
import re
from typing import Dict, List, Tuple

from dashagrid.core.digits import reduce_digits

__all__ = ["CHALDEAN_VALUES", "split_first_last", "letter_value", "name_breakdown", "name_number"]

# Chaldean table; 9 is never assigned to a letter.
CHALDEAN_VALUES: Dict[str, int] = {
    "A": 1, "I": 1, "J": 1, "Q": 1, "Y": 1,
    "B": 2, "K": 2, "R": 2,
    "C": 3, "G": 3, "L": 3, "S": 3,
    "D": 4, "M": 4, "T": 4,
    "E": 5, "H": 5, "N": 5, "X": 5,
    "U": 6, "V": 6, "W": 6,
    "O": 7, "Z": 7,
    "F": 8, "P": 8,
}

_NON_LETTERS = re.compile(r"[^A-Z]")


def _clean(name: str) -> str:
    return _NON_LETTERS.sub("", (name or "").upper())


def split_first_last(full_name: str) -> Tuple[str, str]:
    """First and last word of a full name; middle names are dropped, a single word is used for both."""
    words = (full_name or "").split()
    if not words:
        return "", ""
    return words[0], words[-1]


def letter_value(letter: str) -> int:
    return CHALDEAN_VALUES.get(letter.upper(), 0)


def name_breakdown(name: str) -> List[Dict[str, object]]:
    return [{"letter": ch, "value": letter_value(ch)} for ch in _clean(name)]


def name_number(first_name: str, last_name: str) -> int:
    return reduce_digits(sum(letter_value(ch) for ch in _clean(first_name + last_name)))
