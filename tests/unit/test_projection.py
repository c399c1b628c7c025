"""Tests for projecting partitions onto blockface geometry."""

from unittest.mock import MagicMock, patch

import pytest

from curbmap.core import geodesy
from curbmap.core.projection import project_partition, segment_bounds, to_feature_collection
from curbmap.domain import Partition, Segment, SegmentType
from curbmap.exceptions import ProjectionError
from curbmap.utils import ProjectionLogger

STRAIGHT = ((0.0, 0.0), (0.0, 1.0))
ELBOW = ((0.0, 0.0), (0.0, 1.0), (1.0, 1.0))


def partition_of(specs: list[tuple[SegmentType, float]], unknown: float = 0.0) -> Partition:
    segments = tuple(
        Segment(f"s{i + 1}", segment_type, length)
        for i, (segment_type, length) in enumerate(specs)
    )
    return Partition(
        segments=segments,
        unknown_remaining=unknown,
        blockface_length=sum(length for _, length in specs) + unknown,
        blockface_id="bf-1",
        next_segment_id=len(specs) + 1,
    )


@pytest.fixture
def projection_logger() -> ProjectionLogger:
    """Projection logger backed by a mock structlog logger."""
    return ProjectionLogger(MagicMock())


def assert_coord(actual, expected, abs_tol: float = 1e-6) -> None:
    assert actual[0] == pytest.approx(expected[0], abs=abs_tol)
    assert actual[1] == pytest.approx(expected[1], abs=abs_tol)


class TestSegmentBounds:
    """Tests for segment_bounds."""

    def test_proportional_bounds(self) -> None:
        """Test bounds scale segment offsets to the path length."""
        partition = partition_of([(SegmentType.PARKING, 60), (SegmentType.LOADING, 40)], 100)
        bounds = segment_bounds(partition, 2.0)
        assert bounds[0] == pytest.approx((0.0, 0.6))
        assert bounds[1] == pytest.approx((0.6, 1.0))

    def test_empty_partition(self) -> None:
        """Test a partition without segments has no bounds."""
        partition = Partition(segments=(), unknown_remaining=240, blockface_length=240)
        assert segment_bounds(partition, 1.0) == []


class TestProjectPartition:
    """Tests for project_partition."""

    def test_single_segment_spans_path(self, projection_logger) -> None:
        """Test one segment covering the blockface gets the whole path."""
        partition = partition_of([(SegmentType.PARKING, 240)])
        features = project_partition(partition, STRAIGHT, projection_logger=projection_logger)
        assert len(features) == 1
        assert features[0].path == STRAIGHT
        assert features[0].type == SegmentType.PARKING
        assert features[0].color == "#2E7D32"

    def test_two_equal_segments_meet_at_midpoint(self, projection_logger) -> None:
        """Test the shared boundary of two halves is the path midpoint."""
        partition = partition_of([(SegmentType.PARKING, 120), (SegmentType.CURB_CUT, 120)])
        first, second = project_partition(partition, STRAIGHT, projection_logger=projection_logger)

        assert first.path[0] == (0.0, 0.0)
        assert_coord(first.path[-1], (0.0, 0.5))
        assert_coord(second.path[0], (0.0, 0.5))
        assert second.path[-1] == (0.0, 1.0)
        assert first.path[-1] == second.path[0]

    def test_unknown_tail_is_not_projected(self, projection_logger) -> None:
        """Test segments keep their share of the blockface length."""
        partition = partition_of([(SegmentType.PARKING, 25)], 75)
        (feature,) = project_partition(partition, STRAIGHT, projection_logger=projection_logger)
        assert feature.path[0] == (0.0, 0.0)
        assert_coord(feature.path[-1], (0.0, 0.25))

    def test_segment_across_vertex(self, projection_logger) -> None:
        """Test a segment spanning an interior vertex includes it."""
        partition = partition_of(
            [(SegmentType.PARKING, 25), (SegmentType.LOADING, 50), (SegmentType.TAXI, 25)]
        )
        features = project_partition(partition, ELBOW, projection_logger=projection_logger)
        assert len(features) == 3
        assert (0.0, 1.0) in features[1].path
        assert features[0].path[0] == ELBOW[0]
        assert features[-1].path[-1] == ELBOW[-1]

    def test_metadata_copied(self, projection_logger) -> None:
        """Test each feature carries its segment's type, color and length."""
        partition = partition_of([(SegmentType.BUS_STOP, 30), (SegmentType.DISABLED, 20)])
        features = project_partition(partition, STRAIGHT, projection_logger=projection_logger)
        for feature, segment in zip(features, partition.segments):
            assert feature.type == segment.type
            assert feature.color == segment.color
            assert feature.length == segment.length

    @pytest.mark.parametrize("path", [(), ((0.0, 0.0),)])
    def test_short_path_yields_nothing(self, path, projection_logger) -> None:
        """Test a path with fewer than two vertices projects nothing."""
        partition = partition_of([(SegmentType.PARKING, 240)])
        assert project_partition(partition, path, projection_logger=projection_logger) == []
        projection_logger._logger.warning.assert_called_once()

    def test_stats_count_projected_segments(self, projection_logger) -> None:
        """Test the logger counts every projected segment."""
        partition = partition_of([(SegmentType.PARKING, 120), (SegmentType.CURB_CUT, 120)])
        project_partition(partition, STRAIGHT, projection_logger=projection_logger)
        assert projection_logger.stats.projected_count == 2
        assert projection_logger.stats.degraded_count == 0

    def test_failed_segment_degrades(self, projection_logger) -> None:
        """Test one failing segment does not stop the others."""
        partition = partition_of(
            [(SegmentType.PARKING, 80), (SegmentType.LOADING, 80), (SegmentType.TAXI, 80)]
        )
        real_slice = geodesy.slice_between
        calls = []

        def flaky_slice(*args, **kwargs):
            calls.append(args)
            if len(calls) == 2:
                raise ProjectionError("boom")
            return real_slice(*args, **kwargs)

        with patch("curbmap.core.projection.slice_between", side_effect=flaky_slice):
            features = project_partition(partition, STRAIGHT, projection_logger=projection_logger)

        assert [f.type for f in features] == [SegmentType.PARKING, SegmentType.TAXI]
        stats = projection_logger.stats
        assert stats.projected_count == 2
        assert stats.degraded_count == 1
        assert stats.omitted_count == 1
        assert stats.errors == [(1, "boom")]
        projection_logger._logger.error.assert_called_once()

    def test_input_partition_unchanged(self, projection_logger) -> None:
        """Test projection does not modify the partition."""
        partition = partition_of([(SegmentType.PARKING, 120), (SegmentType.CURB_CUT, 120)])
        before = partition.to_dict()
        project_partition(partition, STRAIGHT, projection_logger=projection_logger)
        assert partition.to_dict() == before


class TestFeatureCollection:
    """Tests for to_feature_collection."""

    def test_geojson_shape(self, projection_logger) -> None:
        """Test features become GeoJSON LineStrings with segment properties."""
        partition = partition_of([(SegmentType.PARKING, 120), (SegmentType.CURB_CUT, 120)])
        features = project_partition(partition, STRAIGHT, projection_logger=projection_logger)
        collection = to_feature_collection(features)

        assert collection["type"] == "FeatureCollection"
        assert len(collection["features"]) == 2
        feature = collection["features"][1]
        assert feature["geometry"]["type"] == "LineString"
        assert feature["geometry"]["coordinates"][-1] == [0.0, 1.0]
        assert feature["properties"] == {
            "type": "Curb Cut",
            "color": partition.segments[1].color,
            "length": 120,
        }

    def test_empty(self) -> None:
        """Test no features give an empty collection."""
        assert to_feature_collection([]) == {"type": "FeatureCollection", "features": []}
