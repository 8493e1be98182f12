from __future__ import annotations
from datetime import date


def compute_age(born: date, today: date) -> int:
    """Whole years between `born` and `today`, one less if this year's birthday is still ahead."""
    age = today.year - born.year
    if (today.month, today.day) < (born.month, born.day):
        age -= 1
    return age
