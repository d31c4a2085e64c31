"""Utility functions for seamcraft.

This module provides utility functions including:

- Logging setup and configuration
- Offset computation statistics
"""

from seamcraft.utils.logging import (
    OffsetLogger,
    OffsetStats,
    configure_logging,
)

__all__ = [
    "OffsetLogger",
    "OffsetStats",
    "configure_logging",
]
