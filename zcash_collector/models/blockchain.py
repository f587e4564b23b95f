"""Zcash blockchain data models.

Typed views over the JSON payloads returned by zcashd's RPC interface
(`getblockchaininfo` and `getblock <hash> 2`), plus the shielding
classification derived from them.
"""

import json
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Tuple, Type, TypeVar, Union

import structlog
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, model_validator

from zcash_collector.models.errors import BlockWriteError, DecodeError

logger = structlog.get_logger(__name__)

SAPLING_POOL_ID = "sapling"
SPROUT_POOL_ID = "sprout"

BLOCK_FILE_MODE = 0o644
DEFAULT_JSON_INDENT = 4

RecordT = TypeVar("RecordT", bound="RPCRecord")


class ShieldingType(str, Enum):
    """Shielding classification of a single transaction."""
    TRANSPARENT = "transparent"
    SHIELDED = "shielded"
    MIXED = "mixed"
    UNKNOWN = "unknown"


class RPCRecord(BaseModel):
    """Immutable record decoded from a zcashd RPC payload."""

    model_config = ConfigDict(
        frozen=True,
        strict=True,
        allow_inf_nan=False,
        populate_by_name=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # null leaves the field at its zero value
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @classmethod
    def from_json(cls: Type[RecordT], raw: Union[bytes, str]) -> RecordT:
        """Decode a raw JSON payload."""
        return decode(cls, raw)

    @classmethod
    def from_rpc(cls: Type[RecordT], data: Dict[str, Any]) -> RecordT:
        """Decode an already-parsed RPC `result` object."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise DecodeError(f"Invalid {cls.__name__} payload: {e}") from e

    def to_json(self, indent: int = DEFAULT_JSON_INDENT) -> str:
        """Serialize using the RPC key names, in declared field order."""
        return json.dumps(self.model_dump(by_alias=True), indent=indent, allow_nan=False)

    def write_to_file(self, path: Union[str, Path], indent: int = DEFAULT_JSON_INDENT) -> None:
        """
        Write the record to `path` as indented JSON.

        The payload is fully serialized before the file is opened, so a
        serialization failure leaves any existing file untouched. The file is
        created or truncated and its mode set to 0644.

        Raises:
            BlockWriteError: serialization or filesystem failure
        """
        try:
            payload = self.to_json(indent)
        except (TypeError, ValueError) as e:
            raise BlockWriteError(f"Cannot serialize {type(self).__name__}: {e}") from e

        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, BLOCK_FILE_MODE)
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.chmod(path, BLOCK_FILE_MODE)
        except OSError as e:
            raise BlockWriteError(e.errno, e.strerror, str(path)) from e

        logger.debug("Record written", record=type(self).__name__, path=str(path), bytes=len(payload))


def decode(model_cls: Type[RecordT], raw: Union[bytes, str]) -> RecordT:
    """
    Decode raw JSON bytes into `model_cls`.

    Raises:
        DecodeError: payload is not valid JSON or does not match the shape
    """
    try:
        return model_cls.model_validate_json(raw)
    except ValidationError as e:
        raise DecodeError(f"Invalid {model_cls.__name__} payload: {e}") from e


class BlockMetric(RPCRecord):
    """Summary statistics for one block."""
    height: int = 0
    number_of_transactions: int = 0
    sapling_value_pool: float = 0.0
    sprout_value_pool: float = 0.0
    size: int = 0
    time: int = 0
    number_of_transparent: int = Field(default=0, alias="number_of_transparent_transactions")
    number_of_shielded: int = Field(default=0, alias="number_of_shielded_transactions")
    number_of_mixed: int = Field(default=0, alias="number_of_mixed_transactions")


class SoftFork(RPCRecord):
    """Consensus rule activation descriptor."""
    id: str = ""
    version: int = 0


class GetBlockchainInfo(RPCRecord):
    """
    zcashd `getblockchaininfo` result.

    https://zcash-rpc.github.io/getblockchaininfo.html
    """
    chain: str = ""
    blocks: int = Field(default=0, ge=0)
    headers: int = Field(default=0, ge=0)
    best_block_hash: str = Field(default="", alias="bestblockhash")
    difficulty: float = 0.0
    verification_progress: float = Field(default=0.0, alias="verificationprogress")
    size_on_disk: float = 0.0
    soft_forks: List[SoftFork] = Field(default_factory=list, alias="softforks")


class ValuePool(RPCRecord):
    """Chain-wide running total of one shielded pool."""
    id: str = ""
    monitored: bool = False
    chain_value: float = Field(default=0.0, alias="chainValue")
    chain_value_zat: float = Field(default=0.0, alias="chainValueZat")
    value_delta: float = Field(default=0.0, alias="valueDelta")
    value_delta_zat: float = Field(default=0.0, alias="valueDeltaZat")


class ScriptSig(RPCRecord):
    """Input script; contents are not modelled."""


class ScriptPubKey(RPCRecord):
    type: str = ""
    addresses: List[str] = Field(default_factory=list)


class VInTX(RPCRecord):
    """Transparent input."""
    txid: str = ""
    vout: int = 0
    script_sig: ScriptSig = Field(default_factory=ScriptSig, alias="scriptSig")
    sequence: int = Field(
        default=0,
        validation_alias=AliasChoices("sequence", "sequemce"),
        serialization_alias="sequence",
    )


class VOutTX(RPCRecord):
    """Transparent output."""
    value: float = 0.0
    n: int = 0
    script_pub_key: ScriptPubKey = Field(default_factory=ScriptPubKey, alias="scriptPubKey")


class VJoinSplitTX(RPCRecord):
    """Sprout join-split description."""
    vpub_old: float = 0.0
    vpub_new: float = 0.0


class Transaction(RPCRecord):
    """A transaction as listed in a verbose block."""
    hex: str = ""
    txid: str = ""
    version: int = 0
    locktime: int = 0
    expiry_height: int = Field(
        default=0,
        validation_alias=AliasChoices("expiryheight", "expirtheight"),
        serialization_alias="expiryheight",
    )
    vin: List[VInTX] = Field(default_factory=list)
    vout: List[VOutTX] = Field(default_factory=list)
    vjoinsplit: List[VJoinSplitTX] = Field(default_factory=list)
    value_balance: float = Field(default=0.0, alias="valueBalance")
    # Sapling descriptions are opaque; only their presence is used
    v_shielded_spend: List[Dict[str, Any]] = Field(default_factory=list, alias="vShieldedSpend")
    v_shielded_output: List[Dict[str, Any]] = Field(default_factory=list, alias="vShieldedOutput")

    def transparent_in_and_out(self) -> bool:
        """True if there are transparent inputs and outputs."""
        return len(self.vin) > 0 and len(self.vout) > 0

    def is_transparent(self) -> bool:
        """True if the transaction touches no shielded pool."""
        # vShieldedOutput is not checked
        return (
            self.transparent_in_and_out()
            and len(self.vjoinsplit) == 0
            and self.value_balance == 0
            and len(self.v_shielded_spend) == 0
        )

    def contains_sprout(self) -> bool:
        return len(self.vjoinsplit) > 0

    def contains_sapling(self) -> bool:
        """
        True if the transaction carries sapling data: a non-zero value
        balance and at least one shielded spend or output.
        """
        return self.value_balance != 0 and (
            len(self.v_shielded_spend) > 0 or len(self.v_shielded_output) > 0
        )

    def is_shielded(self) -> bool:
        """True if the transaction has no transparent input/output pair."""
        return not self.transparent_in_and_out() and (
            self.contains_sprout() or self.contains_sapling()
        )

    def is_mixed(self) -> bool:
        """True if transparent data and shielded data are both present."""
        transparent_in_or_out = len(self.vin) > 0 or len(self.vout) > 0
        return transparent_in_or_out and (self.contains_sprout() or self.contains_sapling())

    def shielding_type(self) -> ShieldingType:
        """First matching label of is_transparent, is_shielded, is_mixed."""
        if self.is_transparent():
            return ShieldingType.TRANSPARENT
        if self.is_shielded():
            return ShieldingType.SHIELDED
        if self.is_mixed():
            return ShieldingType.MIXED
        return ShieldingType.UNKNOWN


class Block(RPCRecord):
    """
    A block returned by `getblock <hash> 2`.

    `previous_block_hash` and `next_block_hash` are plain lookup keys; the
    referenced blocks are not held here.
    """
    hash: str = ""
    confirmations: int = 0
    size: int = 0
    height: int = 0
    version: int = 0
    tx: List[Transaction] = Field(default_factory=list)
    time: int = 0
    difficulty: float = 0.0
    previous_block_hash: str = Field(default="", alias="previousblockhash")
    next_block_hash: str = Field(default="", alias="nextblockhash")
    value_pools: List[ValuePool] = Field(default_factory=list, alias="valuePools")

    def transaction_types(self) -> Tuple[int, int]:
        """
        Count transactions by shielded data presence.

        The first counter is incremented for transactions carrying join-splits,
        shielded spends or shielded outputs, the second for all others. The
        two always sum to the number of transactions.
        """
        t_txs, s_txs = 0, 0
        for tx in self.tx:
            if tx.vjoinsplit or tx.v_shielded_output or tx.v_shielded_spend:
                t_txs += 1
            else:
                s_txs += 1
        return t_txs, s_txs

    def _pool_value(self, pool_id: str) -> float:
        for pool in self.value_pools:
            if pool.id == pool_id:
                return pool.chain_value
        return 0.0

    def sapling_value_pool(self) -> float:
        return self._pool_value(SAPLING_POOL_ID)

    def sprout_value_pool(self) -> float:
        return self._pool_value(SPROUT_POOL_ID)

    def number_of_transactions(self) -> int:
        return len(self.tx)

    def metric(self) -> BlockMetric:
        """Summarize this block as a BlockMetric."""
        return BlockMetric(
            height=self.height,
            number_of_transactions=self.number_of_transactions(),
            sapling_value_pool=self.sapling_value_pool(),
            sprout_value_pool=self.sprout_value_pool(),
            size=self.size,
            time=self.time,
            number_of_transparent=sum(1 for tx in self.tx if tx.is_transparent()),
            number_of_shielded=sum(1 for tx in self.tx if tx.is_shielded()),
            number_of_mixed=sum(1 for tx in self.tx if tx.is_mixed()),
        )
