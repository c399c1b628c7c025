"""Projection of a partition onto blockface geometry.

Each segment occupies the same proportion of the geographic path that it
occupies of the blockface length. Boundaries are located with great-circle
math and the path between them is cut out as the segment's geometry.

Key functions:
- segment_bounds: Proportional start and end distance of every segment
- project_partition: One SegmentFeature per renderable segment
- to_feature_collection: GeoJSON FeatureCollection of projected segments
"""

from collections.abc import Sequence
from typing import Any

from curbmap.config import GeometryConfig
from curbmap.core.geodesy import (
    DEFAULT_GEOMETRY_CONFIG,
    along_path,
    path_length,
    slice_between,
)
from curbmap.domain import Coordinate, Partition, Segment, SegmentFeature
from curbmap.exceptions import GeometryError
from curbmap.utils import ProjectionLogger


def segment_bounds(partition: Partition, path_length_km: float) -> list[tuple[float, float]]:
    """Map each segment to a distance range along the path.

    Args:
        partition: Partition whose segments are placed
        path_length_km: Geodesic length of the path

    Returns:
        List of (start_km, end_km), one per segment, in segment order
    """
    bounds: list[tuple[float, float]] = []
    offset = 0.0
    for segment in partition.segments:
        start = offset / partition.blockface_length * path_length_km
        end = (offset + segment.length) / partition.blockface_length * path_length_km
        bounds.append((start, end))
        offset += segment.length
    return bounds


def _project_segment(
    path: Sequence[Coordinate],
    segment: Segment,
    start_km: float,
    end_km: float,
    config: GeometryConfig,
) -> SegmentFeature:
    start_point = along_path(path, start_km, config)
    end_point = along_path(path, end_km, config)
    return SegmentFeature(
        path=slice_between(path, start_point, end_point, config),
        type=segment.type,
        color=segment.color,
        length=segment.length,
    )


def _degraded(segment: Segment) -> SegmentFeature:
    return SegmentFeature(path=(), type=segment.type, color=segment.color, length=segment.length)


def project_partition(
    partition: Partition,
    path: Sequence[Coordinate],
    config: GeometryConfig | None = None,
    projection_logger: ProjectionLogger | None = None,
) -> list[SegmentFeature]:
    """Project every segment of a partition onto a geographic path.

    A segment whose boundaries cannot be resolved is degraded to empty
    geometry and reported to ``projection_logger``; the remaining segments
    are still projected. Segments whose geometry has fewer than two
    coordinates are left out of the result.

    Args:
        partition: Partition to project
        path: Blockface vertices as (longitude, latitude) pairs
        config: Geometry settings (defaults if None)
        projection_logger: Diagnostics channel (a default one if None)

    Returns:
        Renderable segment features in segment order
    """
    config = config or DEFAULT_GEOMETRY_CONFIG
    projection_logger = projection_logger or ProjectionLogger()

    if len(path) < 2:
        projection_logger.log_invalid_path(
            partition.blockface_id, f"needs at least 2 vertices, got {len(path)}"
        )
        return []

    total_km = path_length(path, config.earth_radius_km)
    projection_logger.log_projection_start(
        partition.blockface_id, partition.segment_count, total_km
    )

    features: list[SegmentFeature] = []
    bounds = segment_bounds(partition, total_km)

    for index, (segment, (start_km, end_km)) in enumerate(zip(partition.segments, bounds)):
        try:
            feature = _project_segment(path, segment, start_km, end_km, config)
        except (GeometryError, ArithmeticError, ValueError) as e:
            projection_logger.log_segment_failed(
                index, segment.type.value, e, start_km, end_km
            )
            feature = _degraded(segment)
        else:
            projection_logger.log_segment_projected(
                index, segment.type.value, len(feature.path)
            )

        if feature.is_renderable():
            features.append(feature)
        else:
            projection_logger.log_segment_omitted(index, len(feature.path))

    return features


def to_feature_collection(features: Sequence[SegmentFeature]) -> dict[str, Any]:
    """Wrap projected segments in a GeoJSON FeatureCollection."""
    return {
        "type": "FeatureCollection",
        "features": [feature.to_geojson() for feature in features],
    }
