"""Blockface geometry types.

This module defines the geographic side of the model:
- Coordinate: A (longitude, latitude) pair in WGS84 degrees
- Blockface: One side of a street block and the path it follows
- SegmentFeature: A segment projected onto the blockface path
"""

from dataclasses import dataclass
from typing import Any

from curbmap.domain.segment import SegmentType

Coordinate = tuple[float, float]


@dataclass(frozen=True)
class Blockface:
    """One side of a street block.

    Attributes:
        id: Identifier of the blockface feature
        path: Vertices of the curb line as (longitude, latitude) pairs
        street_name: Street the blockface belongs to, if known
        cnn_id: Centerline network number, if known
    """

    id: str
    path: tuple[Coordinate, ...]
    street_name: str | None = None
    cnn_id: str | None = None

    @property
    def vertex_count(self) -> int:
        """Number of vertices in the path."""
        return len(self.path)


@dataclass(frozen=True)
class SegmentFeature:
    """A segment's piece of geography.

    An empty path marks a segment whose projection failed; its metadata is
    kept so the failure can still be attributed.

    Attributes:
        path: Coordinates of the sub-path covered by the segment
        type: Curb-use category of the segment
        color: Display color of the category
        length: Segment length in feet
    """

    path: tuple[Coordinate, ...]
    type: SegmentType
    color: str
    length: float

    def is_renderable(self) -> bool:
        """A sub-path needs at least two coordinates to be drawn."""
        return len(self.path) >= 2

    def to_geojson(self) -> dict[str, Any]:
        """Convert to a GeoJSON LineString feature.

        Returns:
            GeoJSON Feature dictionary
        """
        return {
            "type": "Feature",
            "geometry": {
                "type": "LineString",
                "coordinates": [[lon, lat] for lon, lat in self.path],
            },
            "properties": {
                "type": self.type.value,
                "color": self.color,
                "length": self.length,
            },
        }
