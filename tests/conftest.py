"""Pytest configuration and fixtures for zcash collector tests."""

import json
import pytest
from typing import Dict, Any

from zcash_collector.models.blockchain import Block, Transaction
from zcash_collector.models.config import CollectorConfig


# ============================================================================
# SAMPLE DATA FIXTURES
# ============================================================================

@pytest.fixture
def coinbase_tx_data() -> Dict[str, Any]:
    """Coinbase transaction: transparent input and output only."""
    return {
        "hex": "0400008085202f89010000",
        "txid": "c1a3f4e0b2d7c6a5f4e3d2c1b0a99887766554433221100ffeeddccbbaa99887",
        "version": 4,
        "locktime": 0,
        "expiryheight": 419300,
        "vin": [
            {"coinbase": "03009c0600", "sequence": 4294967295}
        ],
        "vout": [
            {
                "value": 10.0,
                "valueZat": 1000000000,
                "n": 0,
                "scriptPubKey": {
                    "asm": "OP_DUP OP_HASH160 aa OP_EQUALVERIFY OP_CHECKSIG",
                    "hex": "76a914aa88ac",
                    "reqSigs": 1,
                    "type": "pubkeyhash",
                    "addresses": ["t1Hsc1LR8yKnbbe3twRp88p6vFfC5t7DLbs"]
                }
            }
        ],
        "vjoinsplit": [],
        "valueBalance": 0.0,
        "vShieldedSpend": [],
        "vShieldedOutput": []
    }


@pytest.fixture
def sprout_tx_data() -> Dict[str, Any]:
    """Fully shielded sprout transaction."""
    return {
        "txid": "5b1e0f1f7e8d9c0b1a2f3e4d5c6b7a8f9e0d1c2b3a4f5e6d7c8b9a0f1e2d3c4b",
        "version": 2,
        "locktime": 0,
        "vin": [],
        "vout": [],
        "vjoinsplit": [
            {"vpub_old": 1.0, "vpub_new": 0.0, "anchor": "ab", "nullifiers": ["01", "02"]}
        ]
    }


@pytest.fixture
def sapling_mixed_tx_data() -> Dict[str, Any]:
    """Transparent input and output with a sapling spend."""
    return {
        "txid": "9e8d7c6b5a4f3e2d1c0b9a8f7e6d5c4b3a2f1e0d9c8b7a6f5e4d3c2b1a0f9e8d",
        "version": 4,
        "locktime": 0,
        "expiryheight": 419250,
        "vin": [
            {"txid": "aa" * 32, "vout": 1, "scriptSig": {"asm": "", "hex": ""}, "sequence": 4294967294}
        ],
        "vout": [
            {"value": 2.4999, "n": 0, "scriptPubKey": {"type": "pubkeyhash", "addresses": ["t1abc"]}}
        ],
        "vjoinsplit": [],
        "valueBalance": 2.5,
        "vShieldedSpend": [
            {"cv": "11", "anchor": "22", "nullifier": "33", "rk": "44", "proof": "55", "spendAuthSig": "66"}
        ],
        "vShieldedOutput": []
    }


@pytest.fixture
def shielded_output_only_tx_data() -> Dict[str, Any]:
    """Transparent in/out plus a sapling output with a zero value balance."""
    return {
        "txid": "0f" * 32,
        "version": 4,
        "vin": [{"txid": "bb" * 32, "vout": 0, "sequence": 4294967295}],
        "vout": [{"value": 0.5, "n": 0, "scriptPubKey": {"type": "pubkeyhash", "addresses": ["t1def"]}}],
        "vjoinsplit": [],
        "valueBalance": 0,
        "vShieldedSpend": [],
        "vShieldedOutput": [{"cv": "77", "cmu": "88", "ephemeralKey": "99"}]
    }


@pytest.fixture
def value_pools_data():
    """Value pools in the order zcashd reports them."""
    return [
        {
            "id": "sprout",
            "monitored": True,
            "chainValue": 6.0,
            "chainValueZat": 600000000,
            "valueDelta": 0.0,
            "valueDeltaZat": 0
        },
        {
            "id": "sapling",
            "monitored": True,
            "chainValue": 123.45,
            "chainValueZat": 12345000000,
            "valueDelta": -2.5,
            "valueDeltaZat": -250000000
        }
    ]


@pytest.fixture
def block_data(coinbase_tx_data, sprout_tx_data, sapling_mixed_tx_data,
               shielded_output_only_tx_data, value_pools_data) -> Dict[str, Any]:
    """`getblock <hash> 2` result with one transaction of each kind."""
    return {
        "hash": "0000000001a2b3c4d5e6f708192a3b4c5d6e7f8091a2b3c4d5e6f708192a3b4c",
        "confirmations": 1520,
        "size": 9862,
        "height": 419200,
        "version": 4,
        "merkleroot": "ff" * 32,
        "finalsaplingroot": "ee" * 32,
        "tx": [
            coinbase_tx_data,
            sprout_tx_data,
            sapling_mixed_tx_data,
            shielded_output_only_tx_data,
        ],
        "time": 1540779438,
        "nonce": "00" * 32,
        "difficulty": 2456478.125,
        "previousblockhash": "0000000002b3c4d5e6f708192a3b4c5d6e7f8091a2b3c4d5e6f708192a3b4c5d",
        "nextblockhash": "0000000003c4d5e6f708192a3b4c5d6e7f8091a2b3c4d5e6f708192a3b4c5d6e",
        "valuePools": value_pools_data
    }


@pytest.fixture
def blockchain_info_data() -> Dict[str, Any]:
    """`getblockchaininfo` result."""
    return {
        "chain": "main",
        "blocks": 419200,
        "headers": 419210,
        "bestblockhash": "0000000001a2b3c4d5e6f708192a3b4c5d6e7f8091a2b3c4d5e6f708192a3b4c",
        "difficulty": 2456478.125,
        "verificationprogress": 0.9999871,
        "chainwork": "000000000000000000000000000000000000000000000000000b3a2f1e0d9c8b",
        "pruned": False,
        "size_on_disk": 24578112512,
        "commitments": 1234567,
        "softforks": [
            {"id": "bip34", "version": 2, "enforce": {"status": True}},
            {"id": "bip66", "version": 3},
            {"id": "bip65", "version": 4}
        ]
    }


@pytest.fixture
def block(block_data) -> Block:
    """Decoded sample block."""
    return Block.from_json(json.dumps(block_data))


@pytest.fixture
def sample_transactions(block) -> Dict[str, Transaction]:
    """Decoded sample transactions keyed by kind."""
    coinbase, sprout, mixed, output_only = block.tx
    return {
        "coinbase": coinbase,
        "sprout": sprout,
        "mixed": mixed,
        "output_only": output_only,
    }


# ============================================================================
# FILE FIXTURES
# ============================================================================

@pytest.fixture
def block_file(tmp_path, block_data):
    """Block payload saved to disk."""
    path = tmp_path / "block.json"
    path.write_text(json.dumps(block_data))
    return path


@pytest.fixture
def blockchain_info_file(tmp_path, blockchain_info_data):
    """getblockchaininfo payload saved to disk."""
    path = tmp_path / "info.json"
    path.write_text(json.dumps(blockchain_info_data))
    return path


@pytest.fixture
def config(tmp_path) -> CollectorConfig:
    """Collector configuration writing into a temporary directory."""
    output_dir = tmp_path / "out"
    output_dir.mkdir()
    return CollectorConfig(output_dir=str(output_dir), log_file=None)
