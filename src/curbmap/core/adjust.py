"""Drag and adjustment entry points.

Pointer handling converts gestures into a length delta or a pair of
indices; these functions turn those into reducer actions. All invariant
checks stay in the reducer.
"""

from curbmap.config import PartitionConfig
from curbmap.core.reducer import reduce
from curbmap.domain import Partition, ReplaceSegments, Resize, Segment


def resize_by_delta(
    partition: Partition,
    index: int,
    length_delta: float,
    config: PartitionConfig | None = None,
) -> Partition:
    """Grow or shrink the segment at ``index`` by ``length_delta`` feet.

    Args:
        partition: Current partition
        index: Segment being dragged
        length_delta: Change in length, negative to shrink
        config: Partition settings (defaults if None)

    Returns:
        Resized partition, or ``partition`` if the resize was rejected
    """
    if not partition.has_index(index):
        return partition
    new_length = partition.segments[index].length + length_delta
    return reduce(partition, Resize(index, new_length), config)


def move_segment(
    segments: tuple[Segment, ...], from_index: int, to_index: int
) -> tuple[Segment, ...]:
    """Remove the segment at ``from_index`` and reinsert it at ``to_index``."""
    if not (0 <= from_index < len(segments) and 0 <= to_index < len(segments)):
        return segments
    reordered = list(segments)
    moved = reordered.pop(from_index)
    reordered.insert(to_index, moved)
    return tuple(reordered)


def reorder(
    partition: Partition,
    from_index: int,
    to_index: int,
    config: PartitionConfig | None = None,
) -> Partition:
    """Move a segment to a new position along the blockface.

    Args:
        partition: Current partition
        from_index: Position of the segment being moved
        to_index: Position it ends up at
        config: Partition settings (defaults if None)

    Returns:
        Reordered partition, or ``partition`` for out-of-range indices
    """
    if not (partition.has_index(from_index) and partition.has_index(to_index)):
        return partition
    return reduce(
        partition,
        ReplaceSegments(lambda segments: move_segment(segments, from_index, to_index)),
        config,
    )
