"""Curb segment types.

This module defines the labeled length interval a blockface is divided into:
- SegmentType: Closed enumeration of curb-use categories
- SEGMENT_COLORS: Static display color of each category
- Segment: One contiguous labeled sub-interval of a blockface
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class SegmentType(str, Enum):
    """Curb-use category of a segment."""

    PARKING = "Parking"
    CURB_CUT = "Curb Cut"
    LOADING = "Loading"
    NO_PARKING = "No Parking"
    BUS_STOP = "Bus Stop"
    TAXI = "Taxi"
    DISABLED = "Disabled"


SEGMENT_COLORS: dict[SegmentType, str] = {
    SegmentType.PARKING: "#2E7D32",
    SegmentType.CURB_CUT: "#9E9E9E",
    SegmentType.LOADING: "#F9A825",
    SegmentType.NO_PARKING: "#C62828",
    SegmentType.BUS_STOP: "#1565C0",
    SegmentType.TAXI: "#FBC02D",
    SegmentType.DISABLED: "#6A1B9A",
}

FALLBACK_COLOR = "#999999"


def segment_color(segment_type: SegmentType) -> str:
    """Look up the display color of a curb-use category."""
    return SEGMENT_COLORS.get(segment_type, FALLBACK_COLOR)


@dataclass(frozen=True, slots=True)
class Segment:
    """A contiguous labeled sub-interval of a blockface.

    Immutable; edits produce new segments.

    Attributes:
        id: Stable identifier assigned at creation
        type: Curb-use category
        length: Length in feet, already rounded to the partition precision
    """

    id: str
    type: SegmentType
    length: float

    @property
    def color(self) -> str:
        """Display color of this segment's category."""
        return segment_color(self.type)

    def with_length(self, length: float) -> "Segment":
        """Return a copy of this segment with a different length."""
        return Segment(id=self.id, type=self.type, length=length)

    def with_type(self, segment_type: SegmentType) -> "Segment":
        """Return a copy of this segment with a different category."""
        return Segment(id=self.id, type=segment_type, length=self.length)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with id, type, and length fields
        """
        return {
            "id": self.id,
            "type": self.type.value,
            "length": self.length,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Segment":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with id, type, and length fields

        Returns:
            Segment instance
        """
        return cls(
            id=data["id"],
            type=SegmentType(data["type"]),
            length=float(data["length"]),
        )
