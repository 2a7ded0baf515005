"""Nearest-the-pin / longest-drive hole lists saved alongside the tee sheet."""

import re
from typing import Iterable, List, Optional


def parse_hole_numbers(text: Optional[str]) -> List[int]:
    """Parse "3, 7 14" into [3, 7, 14]. Invalid entries are dropped; result is sorted and unique."""
    if not text or not text.strip() or text.strip() == "-":
        return []
    numbers = set()
    for token in re.split(r"[,\s]+", text.strip()):
        if token.isdigit() and 1 <= int(token) <= 18:
            numbers.add(int(token))
    return sorted(numbers)


def validate_hole_numbers(holes: Iterable[int]) -> bool:
    return all(isinstance(h, int) and 1 <= h <= 18 for h in holes)


def format_hole_numbers(holes: Optional[Iterable[int]]) -> str:
    """[14, 3, 7] -> "3, 7, 14"; "-" when empty."""
    ordered = sorted(holes or [])
    if not ordered:
        return "-"
    return ", ".join(str(h) for h in ordered)
