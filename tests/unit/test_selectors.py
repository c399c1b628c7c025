"""Tests for partition selectors."""

import pytest

from curbmap.core.reducer import initialize, resize, set_type
from curbmap.core.selectors import (
    OffsetSelector,
    offsets,
    start_positions,
    total_of_segments,
    unknown_remaining,
    visual_percentages,
)
from curbmap.domain import Partition, Segment, SegmentType


def partition_of(lengths: list[float], unknown: float) -> Partition:
    segments = tuple(
        Segment(f"s{i + 1}", SegmentType.PARKING, length) for i, length in enumerate(lengths)
    )
    return Partition(
        segments=segments,
        unknown_remaining=unknown,
        blockface_length=sum(lengths) + unknown,
        next_segment_id=len(lengths) + 1,
    )


class TestOffsets:
    """Tests for offsets."""

    def test_with_unknown_tail(self) -> None:
        """Test the unknown tail adds one trailing value."""
        assert offsets(partition_of([60, 40], 140)) == (0.0, 60.0, 100.0, 240.0)

    def test_complete_partition(self) -> None:
        """Test a complete partition yields n + 1 values."""
        assert offsets(partition_of([120, 120], 0)) == (0.0, 120.0, 240.0)

    def test_no_segments(self) -> None:
        """Test an empty partition spans only the unknown tail."""
        assert offsets(initialize(240)) == (0.0, 240.0)

    def test_single_segment(self) -> None:
        """Test a lone segment covering the blockface."""
        assert offsets(partition_of([50], 0)) == (0.0, 50.0)

    def test_values_are_non_decreasing(self) -> None:
        """Test offsets never go backwards."""
        ticks = offsets(partition_of([10, 0.5, 30, 2], 7.5))
        assert list(ticks) == sorted(ticks)
        assert ticks[-1] == pytest.approx(50)


class TestDerivedValues:
    """Tests for the simple selectors."""

    def test_unknown_remaining(self) -> None:
        """Test unknown space is read through."""
        assert unknown_remaining(partition_of([60, 40], 140)) == 140

    def test_total_of_segments(self) -> None:
        """Test the segment lengths are summed."""
        assert total_of_segments(partition_of([60, 40], 140)) == 100

    def test_start_positions(self) -> None:
        """Test one start position per segment."""
        assert start_positions(partition_of([60, 40], 140)) == (0.0, 60.0)

    def test_start_positions_empty(self) -> None:
        """Test an empty partition has no start positions."""
        assert start_positions(initialize(240)) == ()

    def test_visual_percentages(self) -> None:
        """Test shares of the blockface in percent."""
        shares = visual_percentages(partition_of([60, 60], 120))
        assert shares == pytest.approx((25.0, 25.0))


class TestOffsetSelector:
    """Tests for the memoized OffsetSelector."""

    def test_same_partition_hits_cache(self) -> None:
        """Test repeated calls return the cached tuple."""
        select = OffsetSelector()
        partition = partition_of([60, 40], 140)
        first = select(partition)
        second = select(partition)
        assert first is second
        assert select.hits == 1
        assert select.misses == 1

    def test_relabel_keeps_lengths(self) -> None:
        """Test a type change recomputes the same offsets."""
        select = OffsetSelector()
        partition = partition_of([60, 40], 140)
        before = select(partition)
        after = select(set_type(partition, 0, SegmentType.LOADING))
        assert after == before

    def test_resize_recomputes(self) -> None:
        """Test a resized partition is not served from the cache."""
        select = OffsetSelector()
        partition = partition_of([60, 40], 140)
        select(partition)
        resized = resize(partition, 1, 50)
        assert select(resized) == (0.0, 60.0, 110.0, 240.0)
        assert select.misses == 2

    def test_matches_uncached_offsets(self) -> None:
        """Test cached and uncached results agree."""
        select = OffsetSelector()
        partition = partition_of([10, 20, 30], 40)
        assert select(partition) == offsets(partition)

    def test_clear(self) -> None:
        """Test clearing forces a recomputation."""
        select = OffsetSelector()
        partition = partition_of([60, 40], 140)
        select(partition)
        select.clear()
        select(partition)
        assert select.misses == 2
        assert select.hits == 0
