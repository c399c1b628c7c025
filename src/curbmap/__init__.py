"""Curbmap - Partition blockfaces into curb segments and map them.

Curbmap keeps an ordered partition of a blockface's curb length into labeled
segments (parking, loading, curb cut, ...) that always accounts exactly for
the blockface's total length, and projects that partition onto the street's
real-world geometry so each segment can be drawn on a map.

Example:
    $ curbmap project blockface.geojson -s Parking:40 -s Loading:20

This will create blockface-segments.geojson with one LineString per segment.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
