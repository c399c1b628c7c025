"""The segment partition of one blockface.

A partition is an ordered sequence of segments plus the length not yet
assigned to any of them. Order is physical order along the blockface from
its reference end. Partitions are immutable values: every edit returns a
new partition.
"""

from dataclasses import dataclass, field, replace
from typing import Any

from curbmap.domain.segment import Segment

# Tolerance of the length-conservation check and of collection completeness
COMPLETION_EPSILON = 0.01


@dataclass(frozen=True)
class Partition:
    """Curb configuration of a blockface.

    Invariants, after every reducer call:
    - sum of segment lengths + unknown_remaining == blockface_length (within 0.01)
    - every segment length > 0

    Attributes:
        segments: Segments in physical order along the blockface
        unknown_remaining: Length not yet assigned to any segment
        blockface_length: Total length being partitioned, fixed for the partition
        blockface_id: Identifier of the blockface this partition describes
        next_segment_id: Counter for the next segment id, never decremented
    """

    segments: tuple[Segment, ...]
    unknown_remaining: float
    blockface_length: float
    blockface_id: str | None = None
    next_segment_id: int = field(default=1, repr=False)

    @property
    def is_collection_complete(self) -> bool:
        """True once the whole blockface has been assigned to segments."""
        return abs(self.unknown_remaining) < COMPLETION_EPSILON

    @property
    def segment_count(self) -> int:
        """Number of segments."""
        return len(self.segments)

    def total_of_segments(self) -> float:
        """Sum of all segment lengths."""
        return sum(segment.length for segment in self.segments)

    def has_index(self, index: int) -> bool:
        """Check whether ``index`` refers to an existing segment."""
        return isinstance(index, int) and 0 <= index < len(self.segments)

    def evolve(self, **changes: Any) -> "Partition":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation of the partition
        """
        return {
            "segments": [s.to_dict() for s in self.segments],
            "unknown_remaining": self.unknown_remaining,
            "blockface_length": self.blockface_length,
            "blockface_id": self.blockface_id,
            "next_segment_id": self.next_segment_id,
            "is_collection_complete": self.is_collection_complete,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Partition":
        """Deserialize from dictionary.

        ``is_collection_complete`` is derived and ignored on input.

        Args:
            data: Dictionary representation of a partition

        Returns:
            Partition instance
        """
        segments = tuple(Segment.from_dict(s) for s in data["segments"])
        return cls(
            segments=segments,
            unknown_remaining=float(data["unknown_remaining"]),
            blockface_length=float(data["blockface_length"]),
            blockface_id=data.get("blockface_id"),
            next_segment_id=data.get("next_segment_id", len(segments) + 1),
        )
