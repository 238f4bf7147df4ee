"""
Justitia Crypto Module

Deterministic content-addressing primitives:
- Hash algorithm selection and registry
- Content digests truncated to the protocol hash length
- Transaction and block identifiers
"""

from .hashing import (
    ContentHasher,
    Digest,
    HashAlgorithmSelector,
    available_algorithms,
    new_hash_by_alg_name,
    sum_bytes,
)
from .identity import (
    block_identifier,
    encode_header,
    encode_transaction,
    transaction_identifier,
)

__all__ = [
    # Hashing
    "ContentHasher",
    "Digest",
    "HashAlgorithmSelector",
    "available_algorithms",
    "new_hash_by_alg_name",
    "sum_bytes",
    # Identity
    "block_identifier",
    "encode_header",
    "encode_transaction",
    "transaction_identifier",
]
