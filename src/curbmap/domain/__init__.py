"""Domain models for curbmap.

This module contains the core domain models representing curb segments,
the partition of a blockface into segments, the actions that edit a
partition, and blockface geometry. All models are:

- Immutable (frozen dataclasses, tuples instead of lists)
- Serializable to plain dictionaries or GeoJSON
- Independent of any UI or map-rendering layer

Key classes:
- SegmentType: Curb-use category enumeration
- Segment: A labeled length interval
- Partition: Ordered segments plus unassigned length
- Blockface: Street side geometry
- SegmentFeature: A segment projected onto geography
"""

from curbmap.domain.actions import (
    Action,
    AddSegment,
    AddSegmentLeft,
    Initialize,
    ReplaceSegments,
    Resize,
    SetType,
)
from curbmap.domain.blockface import Blockface, Coordinate, SegmentFeature
from curbmap.domain.partition import COMPLETION_EPSILON, Partition
from curbmap.domain.segment import SEGMENT_COLORS, Segment, SegmentType, segment_color

__all__: list[str] = [
    # Enums and tables
    "SegmentType",
    "SEGMENT_COLORS",
    "COMPLETION_EPSILON",
    "segment_color",
    # Core types
    "Segment",
    "Partition",
    "Coordinate",
    "Blockface",
    "SegmentFeature",
    # Actions
    "Action",
    "Initialize",
    "SetType",
    "Resize",
    "AddSegment",
    "AddSegmentLeft",
    "ReplaceSegments",
]
