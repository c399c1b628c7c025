"""GeoJSON I/O layer for curbmap.

This module reads blockface geometry and writes projected segments. It
keeps GeoJSON details out of the domain models.

Key classes:
- BlockfaceReader: Load a blockface LineString
- FeatureCollectionWriter: Save projected segments
"""

from curbmap.io.reader import BlockfaceReader, read_blockface
from curbmap.io.writer import FeatureCollectionWriter, write_feature_collection

__all__ = [
    "BlockfaceReader",
    "FeatureCollectionWriter",
    "read_blockface",
    "write_feature_collection",
]
