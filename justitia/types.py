"""
Justitia Core Types

Ledger entities hashed by the identity layer, node/message enums and the
transaction constructor.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional

from .constants import ADDRESS_LENGTH, HASH_LENGTH
from .logger import get_logger

logger = get_logger(__name__)

NodeAddress = str

# A zero digest doubles as "not yet computed" for memoized identifiers
ZERO_HASH = bytes(HASH_LENGTH)


class NodeType(IntEnum):
    UNKNOWN = 0      # Unknown node type
    CONSENSUS = 1    # Consensus function node
    FULL = 2         # Full node
    LIGHT = 3        # Light node with simply function
    MAX = 4          # Boundary of node type


class MsgType(IntEnum):
    NULL = 0
    BLOCK_COMMIT_SUCCESS = 1
    BLOCK_COMMIT_FAILED = 2
    BLOCK_VERIFY_FAILED = 3
    NODE_SERVICE_STOPPED = 4
    ROUND_RUN_FAILED = 5
    TO_CONSENSUS_FAILED = 6
    CHANGE_MASTER = 7


@dataclass
class TxData:
    """Fields of a transaction, in canonical encoding order."""
    account_nonce: int = 0
    price: int = 0
    gas_limit: int = 0
    recipient: Optional[bytes] = None
    from_: Optional[bytes] = None
    amount: int = 0
    payload: Optional[bytes] = None
    v: int = 0
    r: int = 0
    s: int = 0


@dataclass
class Transaction:
    data: TxData = field(default_factory=TxData)


@dataclass
class BlockHeader:
    """Block header, in canonical encoding order."""
    chain_id: int = 0
    prev_block_hash: bytes = ZERO_HASH
    state_root: bytes = ZERO_HASH
    tx_root: bytes = ZERO_HASH
    receipts_root: bytes = ZERO_HASH
    height: int = 0
    timestamp: int = 0
    mix_digest: bytes = ZERO_HASH
    coinbase: Optional[bytes] = None
    sig_data: List[bytes] = field(default_factory=list)


@dataclass
class Block:
    """
    A block. `header_hash` caches the header identifier; once non-zero it is
    authoritative and never recomputed.
    """
    header: BlockHeader = field(default_factory=BlockHeader)
    transactions: List[Transaction] = field(default_factory=list)
    header_hash: bytes = ZERO_HASH


def copy_bytes(b: Optional[bytes]) -> Optional[bytes]:
    """Return a copy of ``b``; a nil/empty source is logged and yields None."""
    if not b:
        logger.error("src byte is nil, please confirm.")
        return None
    return bytes(b)


def _new_transaction(
    nonce: int,
    to: Optional[bytes],
    amount: Optional[int],
    gas_limit: int,
    gas_price: Optional[int],
    data: Optional[bytes],
    from_: Optional[bytes],
) -> Transaction:
    """
    Build a transaction. The payload is copied; a missing amount or gas price
    becomes 0 and the signature values start at 0.
    """
    if data:
        data = copy_bytes(data)
    tx_data = TxData(
        account_nonce=nonce,
        recipient=to,
        from_=from_,
        payload=data,
        amount=amount if amount is not None else 0,
        gas_limit=gas_limit,
        price=gas_price if gas_price is not None else 0,
    )
    return Transaction(data=tx_data)


def new_transaction(
    nonce: int,
    to: bytes,
    amount: Optional[int],
    gas_limit: int,
    gas_price: Optional[int],
    data: Optional[bytes],
    from_: bytes,
) -> Transaction:
    """Build a transaction between two known accounts."""
    for name, address in (("to", to), ("from_", from_)):
        if not isinstance(address, (bytes, bytearray)) or len(address) != ADDRESS_LENGTH:
            raise ValueError(f"{name} must be a {ADDRESS_LENGTH}-byte address, got {address!r}")
    return _new_transaction(nonce, bytes(to), amount, gas_limit, gas_price, data, bytes(from_))
