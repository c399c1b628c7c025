"""Tests for PartitionStore."""

from unittest.mock import MagicMock

from curbmap.core.reducer import initialize
from curbmap.core.store import PartitionStore
from curbmap.domain import AddSegment, ReplaceSegments, Resize, Segment, SegmentType


class TestPartitionStore:
    """Tests for PartitionStore."""

    def test_initial_partition(self) -> None:
        """Test the store exposes the partition it was given."""
        partition = initialize(240, "bf-1")
        store = PartitionStore(partition)
        assert store.partition is partition

    def test_dispatch_applies_action(self) -> None:
        """Test an applied action replaces the live partition."""
        store = PartitionStore(initialize(240, "bf-1"))
        result = store.dispatch(AddSegment(-1))
        assert result.applied
        assert store.partition is result.partition
        assert store.partition.segment_count == 1

    def test_rejected_action_keeps_partition(self) -> None:
        """Test a rejected action leaves the live partition alone."""
        logger = MagicMock()
        partition = initialize(240, "bf-1")
        store = PartitionStore(partition, logger=logger)
        result = store.dispatch(Resize(0, 10))
        assert not result.applied
        assert store.partition is partition
        logger.debug.assert_called_once()
        assert logger.debug.call_args.kwargs["action"] == "Resize"

    def test_subscribers_notified_when_applied(self) -> None:
        """Test subscribers see every applied action."""
        store = PartitionStore(initialize(240, "bf-1"))
        seen = []
        store.subscribe(lambda partition, action: seen.append((partition, action)))

        action = AddSegment(-1)
        store.dispatch(action)
        store.dispatch(Resize(5, 10))

        assert len(seen) == 1
        assert seen[0] == (store.partition, action)

    def test_unsubscribe(self) -> None:
        """Test an unsubscribed callback is not called again."""
        store = PartitionStore(initialize(240, "bf-1"))
        callback = MagicMock()
        unsubscribe = store.subscribe(callback)
        store.dispatch(AddSegment(-1))
        unsubscribe()
        store.dispatch(AddSegment(0))
        assert callback.call_count == 1

    def test_stores_are_independent(self) -> None:
        """Test two stores do not share state."""
        first = PartitionStore(initialize(240, "bf-1"))
        second = PartitionStore(initialize(100, "bf-2"))
        first.dispatch(AddSegment(-1))
        assert second.partition.segment_count == 0

    def test_bad_replacement_is_logged(self) -> None:
        """Test a replacement that changes the total is reported."""
        logger = MagicMock()
        store = PartitionStore(initialize(240, "bf-1"), logger=logger)
        store.dispatch(AddSegment(-1))
        store.dispatch(ReplaceSegments([Segment("s1", SegmentType.PARKING, 50)]))
        logger.warning.assert_called_once()
        assert logger.warning.call_args.kwargs["violations"]

    def test_valid_replacement_is_not_logged(self) -> None:
        """Test an order-only replacement raises no warning."""
        logger = MagicMock()
        store = PartitionStore(initialize(240, "bf-1"), logger=logger)
        store.dispatch(AddSegment(-1))
        store.dispatch(AddSegment(0))
        store.dispatch(ReplaceSegments(lambda segments: segments[::-1]))
        logger.warning.assert_not_called()
        assert [s.id for s in store.partition.segments] == ["s2", "s1"]
