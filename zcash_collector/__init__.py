"""
Zcash Chain Data Model

Typed records for zcashd RPC payloads (`getblockchaininfo`, verbose blocks),
shielding classification of transactions and per-block metrics.
"""

__version__ = "1.0.0"
__author__ = "Zcash Data Engineering Team"
__description__ = "Chain data model and shielding classification for zcashd RPC payloads"

from zcash_collector.core.block_processor import BlockProcessor
from zcash_collector.models.blockchain import Block, BlockMetric, GetBlockchainInfo, Transaction
from zcash_collector.models.config import CollectorConfig
from zcash_collector.models.errors import BlockWriteError, DecodeError

__all__ = [
    "BlockProcessor",
    "Block",
    "BlockMetric",
    "GetBlockchainInfo",
    "Transaction",
    "CollectorConfig",
    "BlockWriteError",
    "DecodeError",
]
