"""Utility functions for cidcodec."""

from cidcodec.utils.logging import (
    setup_logging,
)

__all__ = [
    "setup_logging",
]
