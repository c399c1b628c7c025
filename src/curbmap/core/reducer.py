"""Pure state transitions for segment partitions.

Every edit takes a partition and an action and returns a partition. An edit
that would break length conservation or leave an empty segment is rejected
and the input partition is returned unchanged, so the reducer never raises
for any action.

Key components:
- initialize: Create the partition of a blockface
- apply_action: Apply an action and report whether it was applied
- reduce: Apply an action, returning only the resulting partition
- set_type, resize, add_segment, add_segment_left, replace_segments:
  One function per edit
- plan_split: Pure split computation behind add_segment_left
- check_invariants: Describe any violated partition invariant
"""

import math
import re
from collections.abc import Sequence
from numbers import Real
from dataclasses import dataclass

from curbmap.config import PartitionConfig
from curbmap.domain import (
    COMPLETION_EPSILON,
    Action,
    AddSegment,
    AddSegmentLeft,
    Initialize,
    Partition,
    ReplaceSegments,
    Resize,
    Segment,
    SegmentType,
    SetType,
)
from curbmap.domain.actions import SegmentsTransform
from curbmap.exceptions import (
    IndexOutOfRangeError,
    InvalidAdjustmentError,
    InvalidArgumentError,
    PartitionError,
)

DEFAULT_PARTITION_CONFIG = PartitionConfig()

INSUFFICIENT_SPACE = "Insufficient space to create new segment"
INVALID_INDEX = "Invalid segment index"

_SEGMENT_ID = re.compile(r"^s(\d+)$")


@dataclass(frozen=True)
class ActionResult:
    """Outcome of applying one action.

    Attributes:
        partition: Resulting partition (the input partition when rejected)
        applied: Whether the action changed the partition
        reason: Why the action was rejected, None when applied
    """

    partition: Partition
    applied: bool
    reason: str | None = None


@dataclass(frozen=True)
class SplitPlan:
    """Result of planning a split.

    Attributes:
        success: Whether a donor segment with enough length was found
        segments: New segment sequence (the input sequence on failure)
        error: Failure description, None on success
    """

    success: bool
    segments: tuple[Segment, ...]
    error: str | None = None


def initialize(
    total_length: float,
    blockface_id: str | None = None,
    config: PartitionConfig | None = None,
) -> Partition:
    """Create an empty partition covering a whole blockface.

    The total length is rounded to the configured precision so that every
    later edit stays on the same grid.

    Args:
        total_length: Blockface length in feet
        blockface_id: Identifier of the blockface
        config: Partition settings (defaults if None)

    Returns:
        Partition with no segments and all length unknown

    Raises:
        InvalidArgumentError: If the length is not a finite positive number
    """
    config = config or DEFAULT_PARTITION_CONFIG
    if not _is_finite_length(total_length):
        raise InvalidArgumentError("total_length", total_length, "must be a finite number")
    if total_length <= 0:
        raise InvalidArgumentError("total_length", total_length, "must be positive")

    rounded = config.round_length(total_length)
    if rounded <= 0:
        raise InvalidArgumentError(
            "total_length", total_length, f"rounds to zero at precision {config.precision}"
        )

    return Partition(
        segments=(),
        unknown_remaining=rounded,
        blockface_length=rounded,
        blockface_id=blockface_id,
    )


def _is_finite_length(value: object) -> bool:
    return isinstance(value, Real) and math.isfinite(value)


def _check_length(value: object) -> None:
    if not _is_finite_length(value):
        raise InvalidAdjustmentError(f"length must be a finite number, got {value!r}")


def _check_index(partition: Partition, index: int) -> None:
    if not partition.has_index(index):
        raise IndexOutOfRangeError(index, partition.segment_count)


def _new_segment(partition: Partition, length: float, config: PartitionConfig) -> Segment:
    return Segment(
        id=f"s{partition.next_segment_id}",
        type=config.default_segment_type,
        length=length,
    )


def _next_id_after(segments: Sequence[Segment], current: int) -> int:
    """Keep the id counter ahead of every generated id in ``segments``."""
    next_id = current
    for segment in segments:
        match = _SEGMENT_ID.match(segment.id)
        if match:
            next_id = max(next_id, int(match.group(1)) + 1)
    return next_id


def _set_type(
    partition: Partition, index: int, segment_type: SegmentType | str
) -> Partition:
    _check_index(partition, index)
    try:
        new_type = SegmentType(segment_type)
    except ValueError:
        raise InvalidAdjustmentError(f"unknown segment type {segment_type!r}") from None

    segments = list(partition.segments)
    segments[index] = segments[index].with_type(new_type)
    return partition.evolve(segments=tuple(segments))


def _resize(
    partition: Partition, index: int, new_length: float, config: PartitionConfig
) -> Partition:
    _check_index(partition, index)
    _check_length(new_length)
    if new_length <= 0:
        raise InvalidAdjustmentError("length must be positive")

    rounded = config.round_length(new_length)
    if rounded <= 0:
        raise InvalidAdjustmentError("length must be positive")

    current = partition.segments[index]
    delta = rounded - current.length
    segments = list(partition.segments)
    segments[index] = current.with_length(rounded)

    # Last segment trades length with the unknown tail
    if index == len(segments) - 1:
        unknown = config.round_length(partition.unknown_remaining - delta)
        if unknown < 0:
            raise InvalidAdjustmentError("insufficient unknown space")
        return partition.evolve(segments=tuple(segments), unknown_remaining=unknown)

    following = segments[index + 1]
    following_length = config.round_length(following.length - delta)
    if following_length <= 0:
        raise InvalidAdjustmentError("insufficient space in next segment")

    segments[index + 1] = following.with_length(following_length)
    return partition.evolve(segments=tuple(segments))


def _add_segment(
    partition: Partition, after_index: int, config: PartitionConfig
) -> Partition:
    if partition.unknown_remaining <= 0:
        raise InvalidAdjustmentError("no unknown space remaining")
    if not isinstance(after_index, int) or after_index >= partition.segment_count:
        raise IndexOutOfRangeError(after_index, partition.segment_count)

    length = config.round_length(min(config.default_seed_length, partition.unknown_remaining))
    unknown = config.round_length(partition.unknown_remaining - length)
    if length <= 0 or unknown < 0:
        raise InvalidAdjustmentError("insufficient unknown space")

    insert_at = 0 if after_index < 0 else after_index + 1
    segments = list(partition.segments)
    segments.insert(insert_at, _new_segment(partition, length, config))

    return partition.evolve(
        segments=tuple(segments),
        unknown_remaining=unknown,
        next_segment_id=partition.next_segment_id + 1,
    )


def plan_split(
    segments: Sequence[Segment],
    index: int,
    new_segment: Segment,
    config: PartitionConfig | None = None,
) -> SplitPlan:
    """Plan inserting ``new_segment`` immediately before ``segments[index]``.

    The new segment's length is taken from the segment at ``index`` when it
    can spare it, otherwise from the segment before it. The donor must keep
    at least ``min_split_remainder`` feet.

    Args:
        segments: Current segment sequence
        index: Position the new segment is inserted before
        new_segment: Segment to insert; its length is the desired length
        config: Partition settings (defaults if None)

    Returns:
        SplitPlan with the new sequence, or the failure reason
    """
    config = config or DEFAULT_PARTITION_CONFIG
    segments = tuple(segments)

    if not isinstance(index, int) or not 0 <= index < len(segments):
        return SplitPlan(success=False, segments=segments, error=INVALID_INDEX)

    desired = new_segment.length
    if desired <= 0:
        return SplitPlan(success=False, segments=segments, error=INSUFFICIENT_SPACE)

    required = desired + config.min_split_remainder
    target = segments[index]

    if target.length >= required:
        donor = target.with_length(config.round_length(target.length - desired))
        result = (*segments[:index], new_segment, donor, *segments[index + 1 :])
        return SplitPlan(success=True, segments=result)

    if index > 0 and segments[index - 1].length >= required:
        previous = segments[index - 1]
        donor = previous.with_length(config.round_length(previous.length - desired))
        result = (*segments[: index - 1], donor, new_segment, *segments[index:])
        return SplitPlan(success=True, segments=result)

    return SplitPlan(success=False, segments=segments, error=INSUFFICIENT_SPACE)


def _add_segment_left(
    partition: Partition,
    index: int,
    desired_length: float | None,
    config: PartitionConfig,
) -> Partition:
    _check_index(partition, index)
    if desired_length is None:
        desired_length = config.default_split_length
    _check_length(desired_length)

    length = config.round_length(desired_length)
    if length <= 0:
        raise InvalidAdjustmentError("length must be positive")

    plan = plan_split(
        partition.segments, index, _new_segment(partition, length, config), config
    )
    if not plan.success:
        raise InvalidAdjustmentError(plan.error or INSUFFICIENT_SPACE)

    return partition.evolve(
        segments=plan.segments,
        next_segment_id=partition.next_segment_id + 1,
    )


def _replace_segments(partition: Partition, action: ReplaceSegments) -> Partition:
    replacement = action.segments
    try:
        if callable(replacement):
            replacement = replacement(partition.segments)
        segments = tuple(replacement)
    except Exception as e:
        raise InvalidAdjustmentError(f"segment replacement failed: {e}") from e

    for segment in segments:
        if not isinstance(segment, Segment):
            raise InvalidAdjustmentError(f"replacement holds a non-segment {segment!r}")

    return partition.evolve(
        segments=segments,
        next_segment_id=_next_id_after(segments, partition.next_segment_id),
    )


def apply_action(
    partition: Partition,
    action: Action,
    config: PartitionConfig | None = None,
) -> ActionResult:
    """Apply an action to a partition.

    Rejected actions return the input partition unchanged together with the
    rejection reason; no exception escapes.

    Args:
        partition: Current partition
        action: Edit to apply
        config: Partition settings (defaults if None)

    Returns:
        ActionResult with the resulting partition
    """
    config = config or DEFAULT_PARTITION_CONFIG

    try:
        if isinstance(action, Initialize):
            new_partition = initialize(action.total_length, action.blockface_id, config)
        elif isinstance(action, SetType):
            new_partition = _set_type(partition, action.index, action.segment_type)
        elif isinstance(action, Resize):
            new_partition = _resize(partition, action.index, action.new_length, config)
        elif isinstance(action, AddSegment):
            new_partition = _add_segment(partition, action.after_index, config)
        elif isinstance(action, AddSegmentLeft):
            new_partition = _add_segment_left(
                partition, action.index, action.desired_length, config
            )
        elif isinstance(action, ReplaceSegments):
            new_partition = _replace_segments(partition, action)
        else:
            return ActionResult(
                partition=partition,
                applied=False,
                reason=f"unsupported action {type(action).__name__}",
            )
    except PartitionError as e:
        return ActionResult(partition=partition, applied=False, reason=str(e))

    return ActionResult(partition=new_partition, applied=True)


def reduce(
    partition: Partition,
    action: Action,
    config: PartitionConfig | None = None,
) -> Partition:
    """Apply an action, returning the resulting partition.

    Args:
        partition: Current partition
        action: Edit to apply
        config: Partition settings (defaults if None)

    Returns:
        New partition, or ``partition`` itself if the action was rejected
    """
    return apply_action(partition, action, config).partition


def set_type(
    partition: Partition,
    index: int,
    segment_type: SegmentType | str,
    config: PartitionConfig | None = None,
) -> Partition:
    """Change the curb use of the segment at ``index``."""
    return reduce(partition, SetType(index, segment_type), config)


def resize(
    partition: Partition,
    index: int,
    new_length: float,
    config: PartitionConfig | None = None,
) -> Partition:
    """Set a segment's length.

    The following segment absorbs the difference; for the last segment the
    unknown remainder does.
    """
    return reduce(partition, Resize(index, new_length), config)


def add_segment(
    partition: Partition,
    after_index: int,
    config: PartitionConfig | None = None,
) -> Partition:
    """Create a default segment from unknown space after ``after_index``."""
    return reduce(partition, AddSegment(after_index), config)


def add_segment_left(
    partition: Partition,
    index: int,
    desired_length: float | None = None,
    config: PartitionConfig | None = None,
) -> Partition:
    """Split a new segment off before the segment at ``index``."""
    return reduce(partition, AddSegmentLeft(index, desired_length), config)


def replace_segments(
    partition: Partition,
    segments: Sequence[Segment] | SegmentsTransform,
    config: PartitionConfig | None = None,
) -> Partition:
    """Replace the segment sequence with a sequence or a transform of it.

    The caller guarantees the total segment length does not change; a pure
    reordering always satisfies this.
    """
    return reduce(partition, ReplaceSegments(segments), config)


def check_invariants(partition: Partition) -> list[str]:
    """Describe every partition invariant that does not hold.

    Args:
        partition: Partition to check

    Returns:
        List of violation descriptions, empty for a valid partition
    """
    violations: list[str] = []

    accounted = partition.total_of_segments() + partition.unknown_remaining
    if abs(accounted - partition.blockface_length) >= COMPLETION_EPSILON:
        violations.append(
            f"segments and unknown space total {accounted:g}, "
            f"blockface is {partition.blockface_length:g}"
        )

    if partition.unknown_remaining < 0:
        violations.append(f"unknown remaining is negative ({partition.unknown_remaining:g})")

    for i, segment in enumerate(partition.segments):
        if segment.length <= 0:
            violations.append(f"segment {i} ({segment.id}) has length {segment.length:g}")

    return violations
