"""Writer for projected segment geometry.

This module saves projection output as a GeoJSON FeatureCollection and
derives default output paths.
"""

import json
from collections.abc import Sequence
from pathlib import Path

from curbmap.core.projection import to_feature_collection
from curbmap.domain import SegmentFeature
from curbmap.exceptions import OutputWriteError


class FeatureCollectionWriter:
    """Saves segment features as GeoJSON.

    Example:
        writer = FeatureCollectionWriter(features)
        writer.save(Path("blockface-segments.geojson"))
    """

    def __init__(self, features: Sequence[SegmentFeature]) -> None:
        """Initialize the writer.

        Args:
            features: Projected segments to write
        """
        self._features = list(features)

    def save(self, output_path: Path) -> None:
        """Write the features to ``output_path``.

        Raises:
            OutputWriteError: If the file cannot be written
        """
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(
                json.dumps(to_feature_collection(self._features), indent=2) + "\n",
                encoding="utf-8",
            )
        except OSError as e:
            raise OutputWriteError(str(output_path), str(e)) from e

    @staticmethod
    def get_segments_path(blockface_path: Path) -> Path:
        """Generate the default output path for a blockface file.

        Example:
            blockface.geojson -> blockface-segments.geojson
        """
        return blockface_path.with_name(f"{blockface_path.stem}-segments.geojson")


def write_feature_collection(features: Sequence[SegmentFeature], output_path: Path) -> None:
    """Write projected segments as a GeoJSON FeatureCollection."""
    FeatureCollectionWriter(features).save(output_path)
