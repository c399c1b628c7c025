"""Command-line interface for curbmap.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Blockface inspection (vertex count, geodesic length)
- Partition building from segment specifications
- Projection of the partition to GeoJSON
"""

from curbmap.cli.app import cli, main

__all__ = ["cli", "main"]
