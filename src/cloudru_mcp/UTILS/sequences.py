"""
Sequence helpers.
"""
from typing import List, Sequence, TypeVar

T = TypeVar("T")


def limit(items: Sequence[T], max_records: int) -> List[T]:
    """
    Returns at most ``max_records`` leading items, in their original order.
    """
    if max_records < 0:
        raise ValueError("max_records must not be negative")
    return list(items[:max_records])
