"""
Time-window helpers shared by the live stores.

Sweeping is lazy: stores call these on read and write, there is no
background task. A timestamp exactly `window` old is already outside it.
"""

from typing import Callable, Iterable, List, Tuple, TypeVar

T = TypeVar("T")


def is_within(timestamp_ms: int, now_ms: int, window_seconds: float) -> bool:
    """True when `timestamp_ms` is younger than `window_seconds` at `now_ms`."""
    return now_ms - timestamp_ms < window_seconds * 1000


def count_within(
    items: Iterable[T],
    now_ms: int,
    window_seconds: float,
    timestamp_of: Callable[[T], int],
) -> int:
    return sum(1 for item in items if is_within(timestamp_of(item), now_ms, window_seconds))


def sweep_expired(
    items: Iterable[T],
    now_ms: int,
    ttl_seconds: float,
    timestamp_of: Callable[[T], int],
) -> Tuple[List[T], int]:
    """
    Split out items older than the TTL.

    Returns:
        (survivors in their original order, number of evicted items)
    """
    survivors = []
    evicted = 0
    for item in items:
        if is_within(timestamp_of(item), now_ms, ttl_seconds):
            survivors.append(item)
        else:
            evicted += 1
    return survivors, evicted
