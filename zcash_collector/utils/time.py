"""Time utility functions for blockchain data."""

from datetime import datetime, timezone


def format_block_time(block_time: int) -> datetime:
    """
    Convert a block's unix timestamp to a UTC datetime.

    Raises:
        OverflowError, ValueError, OSError: timestamp outside the platform range
    """
    return datetime.fromtimestamp(block_time, tz=timezone.utc)
