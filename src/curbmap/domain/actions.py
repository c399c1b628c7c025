"""Action vocabulary accepted by the partition reducer.

Each action is a small immutable value describing one edit. The reducer
interprets them; actions carry no behaviour of their own.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from curbmap.domain.segment import Segment, SegmentType

SegmentsTransform = Callable[[tuple[Segment, ...]], Sequence[Segment]]


@dataclass(frozen=True)
class Initialize:
    """Start a fresh partition for a blockface."""

    total_length: float
    blockface_id: str | None = None


@dataclass(frozen=True)
class SetType:
    """Change the curb use of one segment."""

    index: int
    segment_type: SegmentType | str


@dataclass(frozen=True)
class Resize:
    """Set one segment's length, rebalancing against its follower or unknown space."""

    index: int
    new_length: float


@dataclass(frozen=True)
class AddSegment:
    """Carve a new segment out of unknown space, after ``after_index``.

    A negative ``after_index`` inserts before every existing segment.
    """

    after_index: int


@dataclass(frozen=True)
class AddSegmentLeft:
    """Split a new segment off the segment at ``index`` or its predecessor.

    ``desired_length`` of None uses the configured default split length.
    """

    index: int
    desired_length: float | None = None


@dataclass(frozen=True)
class ReplaceSegments:
    """Replace the segment sequence with a literal sequence or a transform of it.

    The replacement must keep the total segment length unchanged.
    """

    segments: Sequence[Segment] | SegmentsTransform


Action = Initialize | SetType | Resize | AddSegment | AddSegmentLeft | ReplaceSegments
