"""Data models and configuration."""

from zcash_collector.models.config import CollectorConfig
from zcash_collector.models.errors import ChainDataError, DecodeError, BlockWriteError
from zcash_collector.models.blockchain import (
    Block,
    BlockMetric,
    GetBlockchainInfo,
    ShieldingType,
    SoftFork,
    Transaction,
    ValuePool,
    VInTX,
    VJoinSplitTX,
    VOutTX,
    decode,
)

__all__ = [
    "CollectorConfig",
    "ChainDataError",
    "DecodeError",
    "BlockWriteError",
    "Block",
    "BlockMetric",
    "GetBlockchainInfo",
    "ShieldingType",
    "SoftFork",
    "Transaction",
    "ValuePool",
    "VInTX",
    "VJoinSplitTX",
    "VOutTX",
    "decode",
]
