"""
Justitia Identity Derivation

Transaction and block identifiers are digests of a canonical JSON encoding:
fields in declared order, compact separators, bytes as 0x-prefixed hex.
"""

import json
from dataclasses import fields
from typing import Any, Dict, Optional

from ..types import Block, BlockHeader, Transaction, ZERO_HASH
from .hashing import ContentHasher, Digest

# dataclass field -> JSON key, in canonical order
TX_FIELD_KEYS: Dict[str, str] = {
    "account_nonce": "nonce",
    "price": "gasPrice",
    "gas_limit": "gas",
    "recipient": "to",
    "from_": "from",
    "amount": "value",
    "payload": "input",
    "v": "v",
    "r": "r",
    "s": "s",
}

HEADER_FIELD_KEYS: Dict[str, str] = {
    "chain_id": "chainId",
    "prev_block_hash": "prevHash",
    "state_root": "stateRoot",
    "tx_root": "txRoot",
    "receipts_root": "receiptsRoot",
    "height": "height",
    "timestamp": "timestamp",
    "mix_digest": "mixHash",
    "coinbase": "coinbase",
    "sig_data": "sigData",
}

_default_hasher = ContentHasher()


def _encode_value(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, (list, tuple)):
        return [_encode_value(v) for v in value]
    return value


def _encode(obj: Any, keys: Dict[str, str]) -> bytes:
    body = {keys[f.name]: _encode_value(getattr(obj, f.name)) for f in fields(obj)}
    return json.dumps(body, separators=(",", ":"), ensure_ascii=True).encode("utf-8")


def encode_transaction(tx: Transaction) -> bytes:
    """Canonical encoding of a transaction's fields."""
    return _encode(tx.data, TX_FIELD_KEYS)


def encode_header(header: BlockHeader) -> bytes:
    """Canonical encoding of a block header."""
    return _encode(header, HEADER_FIELD_KEYS)


def transaction_identifier(tx: Transaction, hasher: Optional[ContentHasher] = None) -> Digest:
    """Digest of the transaction's canonical encoding."""
    return (hasher or _default_hasher).digest(encode_transaction(tx))


def block_identifier(block: Block, hasher: Optional[ContentHasher] = None) -> Digest:
    """
    Header identifier of ``block``.

    A non-zero ``block.header_hash`` is returned unchanged without looking at
    the header. A zero value means "not yet computed" and the header is
    digested; the result is not written back.
    """
    if block.header_hash and block.header_hash != ZERO_HASH:
        return bytes(block.header_hash)
    return (hasher or _default_hasher).digest(encode_header(block.header))
