"""Utility functions for curbmap.

This module provides utility functions including:

- Logging setup and configuration
- Projection diagnostics and statistics
"""

from curbmap.utils.logging import (
    ProjectionLogger,
    ProjectionStats,
    configure_logging,
)

__all__ = [
    "ProjectionLogger",
    "ProjectionStats",
    "configure_logging",
]
