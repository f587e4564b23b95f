"""Utility functions and helpers."""

from zcash_collector.utils.logging import setup_logging
from zcash_collector.utils.time import format_block_time

__all__ = [
    "setup_logging",
    "format_block_time",
]
