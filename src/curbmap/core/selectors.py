"""Derived values of a partition.

Selectors compute positions along the blockface from a partition without
changing it. ``OffsetSelector`` adds a size-one cache for callers that ask
for the same partition's offsets repeatedly, e.g. once per frame while
drawing tick marks.
"""

from curbmap.domain import Partition, Segment


def unknown_remaining(partition: Partition) -> float:
    """Length of the blockface not yet assigned to a segment."""
    return partition.unknown_remaining


def total_of_segments(partition: Partition) -> float:
    """Sum of all segment lengths."""
    return partition.total_of_segments()


def _cumulative(segments: tuple[Segment, ...], unknown: float) -> tuple[float, ...]:
    ticks = [0.0]
    for segment in segments:
        ticks.append(ticks[-1] + segment.length)

    if unknown > 0:
        ticks.append(ticks[-1] + unknown)

    return tuple(ticks)


def offsets(partition: Partition) -> tuple[float, ...]:
    """Cumulative boundary positions along the blockface.

    For ``n`` segments the first ``n + 1`` values are the prefix sums of the
    segment lengths, starting at 0. When some length is still unknown, one
    more value marks the end of the unassigned tail.

    Args:
        partition: Partition to measure

    Returns:
        Tuple of boundary positions in feet

    Examples:
        Segments of 60 and 40 feet with 140 feet unknown give
        ``(0.0, 60.0, 100.0, 240.0)``.
    """
    return _cumulative(partition.segments, partition.unknown_remaining)


def start_positions(partition: Partition) -> tuple[float, ...]:
    """Offset at which each segment starts."""
    return offsets(partition)[: partition.segment_count]


def visual_percentages(partition: Partition) -> tuple[float, ...]:
    """Share of the blockface covered by each segment, in percent."""
    return tuple(
        segment.length / partition.blockface_length * 100 for segment in partition.segments
    )


class OffsetSelector:
    """``offsets`` with a size-one cache.

    The cache key is the identity of the segments tuple and the unknown
    remaining value. Partitions are immutable, so an unchanged segments
    tuple means unchanged lengths.

    Example:
        select = OffsetSelector()
        ticks = select(partition)
        ticks is select(partition)  # True, served from the cache
    """

    def __init__(self) -> None:
        self._last_segments: tuple[Segment, ...] | None = None
        self._last_unknown: float | None = None
        self._last_result: tuple[float, ...] = ()
        self.hits = 0
        self.misses = 0

    def __call__(self, partition: Partition) -> tuple[float, ...]:
        if (
            partition.segments is self._last_segments
            and partition.unknown_remaining == self._last_unknown
        ):
            self.hits += 1
            return self._last_result

        self.misses += 1
        self._last_segments = partition.segments
        self._last_unknown = partition.unknown_remaining
        self._last_result = _cumulative(partition.segments, partition.unknown_remaining)
        return self._last_result

    def clear(self) -> None:
        """Forget the cached result."""
        self._last_segments = None
        self._last_unknown = None
        self._last_result = ()
