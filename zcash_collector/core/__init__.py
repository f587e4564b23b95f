"""Core zcash block processing components."""

from zcash_collector.core.block_processor import BlockProcessor

__all__ = [
    "BlockProcessor",
]
