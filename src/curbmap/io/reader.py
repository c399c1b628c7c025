"""Blockface reader for GeoJSON line geometry.

This module provides the BlockfaceReader class for loading a blockface's
curb line from a GeoJSON file into the Blockface domain model.
"""

import json
import math
from pathlib import Path
from typing import Any

from curbmap.domain import Blockface, Coordinate
from curbmap.exceptions import BlockfaceFormatError, BlockfaceLoadError


class BlockfaceReader:
    """Loads a blockface from a GeoJSON file.

    Accepts a LineString geometry, a Feature holding one, or a
    FeatureCollection (the first LineString feature is used). Elevation
    components are dropped.

    Example:
        reader = BlockfaceReader(Path("blockface.geojson"))
        blockface = reader.load()
        print(blockface.vertex_count)
    """

    def __init__(self, path: Path) -> None:
        """Initialize the blockface reader.

        Args:
            path: Path to the GeoJSON file
        """
        self._path = path

    def load(self) -> Blockface:
        """Load and parse the file.

        Returns:
            Parsed Blockface

        Raises:
            BlockfaceLoadError: If the file is missing or is not JSON
            BlockfaceFormatError: If the JSON holds no usable LineString
        """
        if not self._path.exists():
            raise BlockfaceLoadError(str(self._path), "file not found")

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise BlockfaceLoadError(str(self._path), str(e)) from e

        return self._parse(data)

    def _parse(self, data: Any) -> Blockface:
        if not isinstance(data, dict):
            raise BlockfaceFormatError(str(self._path), "top-level value is not an object")

        kind = data.get("type")
        if kind == "FeatureCollection":
            for feature in data.get("features") or []:
                geometry = (feature or {}).get("geometry") or {}
                if geometry.get("type") == "LineString":
                    return self._from_feature(feature)
            raise BlockfaceFormatError(str(self._path), "no LineString feature found")
        if kind == "Feature":
            return self._from_feature(data)
        if kind == "LineString":
            return self._from_feature({"type": "Feature", "geometry": data, "properties": {}})

        raise BlockfaceFormatError(str(self._path), f"unsupported GeoJSON type {kind!r}")

    def _from_feature(self, feature: dict[str, Any]) -> Blockface:
        geometry = feature.get("geometry") or {}
        if geometry.get("type") != "LineString":
            raise BlockfaceFormatError(
                str(self._path), f"expected LineString geometry, got {geometry.get('type')!r}"
            )

        path = tuple(self._coordinate(c) for c in geometry.get("coordinates") or [])
        if len(path) < 2:
            raise BlockfaceFormatError(
                str(self._path), f"line needs at least 2 vertices, got {len(path)}"
            )

        properties = feature.get("properties") or {}
        blockface_id = feature.get("id") or properties.get("id") or self._path.stem
        street_name = properties.get("street_name") or properties.get("streetName")
        cnn_id = properties.get("cnn") or properties.get("cnnId")

        return Blockface(
            id=str(blockface_id),
            path=path,
            street_name=street_name,
            cnn_id=str(cnn_id) if cnn_id is not None else None,
        )

    def _coordinate(self, value: Any) -> Coordinate:
        try:
            lon, lat = float(value[0]), float(value[1])
        except (TypeError, ValueError, IndexError) as e:
            raise BlockfaceFormatError(str(self._path), f"bad coordinate {value!r}") from e

        if not (math.isfinite(lon) and math.isfinite(lat)):
            raise BlockfaceFormatError(str(self._path), f"non-finite coordinate {value!r}")
        if not (-180.0 <= lon <= 180.0 and -90.0 <= lat <= 90.0):
            raise BlockfaceFormatError(str(self._path), f"coordinate out of range {value!r}")
        return (lon, lat)


def read_blockface(path: Path) -> Blockface:
    """Load a blockface from a GeoJSON file."""
    return BlockfaceReader(path).load()
