"""Time-seeded, deterministic selection for fallback content."""

import time
from typing import Callable, NamedTuple, Optional, Sequence, TypeVar

T = TypeVar("T")

Clock = Callable[[], int]


def millisecond_clock() -> int:
    """Current wall-clock time in whole milliseconds."""
    return time.time_ns() // 1_000_000


class IndexStreams(NamedTuple):
    a: int
    b: int
    c: int


def derive_streams(seed: int) -> IndexStreams:
    """Split one seed into three index streams.

    The shifted streams draw on different bits of the seed, so picks made
    from stream A and stream B in the same call are not tied to the same
    low-order bits.

    Args:
        seed: Integer seed (typically milliseconds since epoch)

    Returns:
        IndexStreams with the seed itself, seed >> 4 and seed >> 8
    """
    seed = abs(int(seed))
    return IndexStreams(a=seed, b=seed >> 4, c=seed >> 8)


def pick(pool: Sequence[T], stream: int) -> T:
    """Select an element of pool by stream value modulo its length."""
    if not pool:
        raise ValueError("cannot pick from an empty pool")
    return pool[stream % len(pool)]


def seed_from(clock: Optional[Clock] = None) -> int:
    """Read the clock once; defaults to the millisecond wall clock."""
    return int((clock or millisecond_clock)())
