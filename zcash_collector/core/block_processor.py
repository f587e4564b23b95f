"""Block loading, metric derivation and export."""

from pathlib import Path
from typing import Optional, Union
import structlog

from zcash_collector.models.blockchain import Block, BlockMetric, GetBlockchainInfo, decode
from zcash_collector.models.config import CollectorConfig
from zcash_collector.models.errors import ChainDataError

logger = structlog.get_logger(__name__)

PathLike = Union[str, Path]


class BlockProcessor:
    """Turns block payloads saved from zcashd into metrics and export files."""

    def __init__(self, config: CollectorConfig):
        self.config = config
        self.output_dir = Path(config.output_dir)
        self.logger = logger.bind(component="block_processor")

    def load_block(self, path: PathLike) -> Block:
        """
        Read and decode a `getblock <hash> 2` payload.

        Raises:
            OSError: file cannot be read
            DecodeError: payload is not a valid block
        """
        return self._load(Block, path)

    def load_blockchain_info(self, path: PathLike) -> GetBlockchainInfo:
        """Read and decode a `getblockchaininfo` payload."""
        return self._load(GetBlockchainInfo, path)

    def _load(self, model_cls, path: PathLike):
        raw = Path(path).read_bytes()
        try:
            record = decode(model_cls, raw)
        except ChainDataError as e:
            self.logger.error("Failed to decode payload",
                              path=str(path),
                              record=model_cls.__name__,
                              error=str(e))
            raise

        self.logger.debug("Payload decoded", path=str(path), record=model_cls.__name__)
        return record

    def process_block(self, block: Block) -> BlockMetric:
        """Derive the per-block metric and log a summary of it."""
        metric = block.metric()
        shielded_data, no_shielded_data = block.transaction_types()

        self.logger.info("Block processed",
                         height=block.height,
                         hash=block.hash,
                         tx_count=metric.number_of_transactions,
                         transparent=metric.number_of_transparent,
                         shielded=metric.number_of_shielded,
                         mixed=metric.number_of_mixed,
                         with_shielded_data=shielded_data,
                         without_shielded_data=no_shielded_data,
                         sapling_pool=metric.sapling_value_pool,
                         sprout_pool=metric.sprout_value_pool)
        return metric

    def block_path(self, block: Block) -> Path:
        """Default export location for a block."""
        return self.output_dir / f"block_{block.height}.json"

    def metric_path(self, metric: BlockMetric) -> Path:
        """Default export location for a block metric."""
        return self.output_dir / f"metric_{metric.height}.json"

    def export_block(self, block: Block, path: Optional[PathLike] = None) -> Path:
        """
        Write a block to disk.

        Raises:
            BlockWriteError: serialization or filesystem failure
        """
        target = Path(path) if path is not None else self.block_path(block)
        try:
            block.write_to_file(target, indent=self.config.json_indent)
        except ChainDataError as e:
            self.logger.error("Block export failed",
                              height=block.height,
                              path=str(target),
                              error=str(e))
            raise

        self.logger.info("Block exported", height=block.height, path=str(target))
        return target

    def export_metric(self, metric: BlockMetric, path: Optional[PathLike] = None) -> Path:
        """Write a block metric to disk."""
        target = Path(path) if path is not None else self.metric_path(metric)
        try:
            metric.write_to_file(target, indent=self.config.json_indent)
        except ChainDataError as e:
            self.logger.error("Metric export failed",
                              height=metric.height,
                              path=str(target),
                              error=str(e))
            raise

        self.logger.info("Metric exported", height=metric.height, path=str(target))
        return target
