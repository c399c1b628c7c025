"""Integration test of a full curb survey editing session.

Drives a PartitionStore through the edits a surveyor makes on one
blockface, checks the derived offsets after every edit, and projects the
final partition onto the blockface geometry.
"""

from unittest.mock import MagicMock

import pytest

from curbmap.core import (
    OffsetSelector,
    PartitionStore,
    check_invariants,
    initialize,
    project_partition,
    reorder,
    resize_by_delta,
)
from curbmap.domain import (
    AddSegment,
    AddSegmentLeft,
    Initialize,
    Resize,
    SegmentType,
    SetType,
)
from curbmap.utils import ProjectionLogger

BLOCKFACE_PATH = ((-122.4210, 37.7650), (-122.4210, 37.7655), (-122.4203, 37.7656))


@pytest.fixture
def store() -> PartitionStore:
    """Store holding a fresh 240 ft blockface."""
    return PartitionStore(initialize(240, "bf-mission-12"))


class TestEditingSession:
    """A surveyor records a blockface from one end to the other."""

    def test_survey_to_completion(self, store: PartitionStore) -> None:
        """Test building, adjusting and completing a partition."""
        select = OffsetSelector()
        history = []
        store.subscribe(lambda partition, action: history.append(type(action).__name__))

        store.dispatch(AddSegment(-1))
        store.dispatch(Resize(0, 60))
        assert select(store.partition) == (0.0, 60.0, 240.0)

        store.dispatch(AddSegment(0))
        store.dispatch(SetType(1, SegmentType.CURB_CUT))
        store.dispatch(Resize(1, 12))
        assert select(store.partition) == (0.0, 60.0, 72.0, 240.0)

        store.dispatch(AddSegment(1))
        store.dispatch(SetType(2, SegmentType.LOADING))
        store.dispatch(Resize(2, 168))
        assert store.partition.is_collection_complete
        assert select(store.partition) == (0.0, 60.0, 72.0, 240.0)

        # Bus stop carved out of the loading zone
        store.dispatch(AddSegmentLeft(2, 40))
        store.dispatch(SetType(2, SegmentType.BUS_STOP))
        assert [s.type for s in store.partition.segments] == [
            SegmentType.PARKING,
            SegmentType.CURB_CUT,
            SegmentType.BUS_STOP,
            SegmentType.LOADING,
        ]
        assert [s.length for s in store.partition.segments] == [60, 12, 40, 128]
        assert check_invariants(store.partition) == []
        assert len(history) == 10

    def test_rejected_edits_leave_session_intact(self, store: PartitionStore) -> None:
        """Test invalid edits in the middle of a session change nothing."""
        store.dispatch(AddSegment(-1))
        store.dispatch(Resize(0, 240))
        snapshot = store.partition

        for action in (AddSegment(0), Resize(0, 241), AddSegmentLeft(0, 240), SetType(3, "Taxi")):
            result = store.dispatch(action)
            assert not result.applied
            assert store.partition is snapshot

    def test_drag_and_reorder(self, store: PartitionStore) -> None:
        """Test drag-controller edits keep both invariants."""
        for length in (80, 80, 80):
            index = store.partition.segment_count
            store.dispatch(AddSegment(index - 1))
            store.dispatch(Resize(index, length))

        partition = resize_by_delta(store.partition, 0, 15.25)
        assert [s.length for s in partition.segments] == [95.3, 64.7, 80]

        partition = reorder(partition, 0, 2)
        assert [s.length for s in partition.segments] == [64.7, 80, 95.3]
        assert check_invariants(partition) == []

    def test_restart_on_new_blockface(self, store: PartitionStore) -> None:
        """Test Initialize starts over for the next blockface."""
        store.dispatch(AddSegment(-1))
        store.dispatch(Initialize(310.5, "bf-mission-13"))
        assert store.partition.segments == ()
        assert store.partition.blockface_id == "bf-mission-13"
        assert store.partition.unknown_remaining == 310.5

    def test_project_finished_partition(self, store: PartitionStore) -> None:
        """Test the finished partition projects end to end."""
        for segment_type, length in ((SegmentType.PARKING, 100), (SegmentType.NO_PARKING, 140)):
            index = store.partition.segment_count
            store.dispatch(AddSegment(index - 1))
            store.dispatch(SetType(index, segment_type))
            store.dispatch(Resize(index, length))

        projection_logger = ProjectionLogger(MagicMock())
        features = project_partition(
            store.partition, BLOCKFACE_PATH, projection_logger=projection_logger
        )

        assert [f.type for f in features] == [SegmentType.PARKING, SegmentType.NO_PARKING]
        assert features[0].path[0] == BLOCKFACE_PATH[0]
        assert features[-1].path[-1] == BLOCKFACE_PATH[-1]
        assert features[0].path[-1] == features[1].path[0]
        assert projection_logger.stats.projected_count == 2
        assert projection_logger.stats.errors == []
