"""
Justitia Crypto Hashing Module

Content hashing used to derive identifiers throughout the node:
- HashAlgorithmSelector: resolves the configured algorithm name (SHA256 when unset)
- new_hash_by_alg_name: registry of hash implementations by name
- ContentHasher: digest of arbitrary bytes, truncated to HASH_LENGTH
"""

import hashlib
from typing import Any, Callable, Dict, Mapping, Optional, Union

import blake3
from Crypto.Hash import keccak as _keccak

from ..constants import DEFAULT_HASH_ALGORITHM, HASH_ALG_NAME, HASH_LENGTH
from ..exceptions import DigestLengthError, UnknownHashAlgorithmError
from ..logger import get_logger

logger = get_logger(__name__)

Digest = bytes


def _normalize(name: str) -> str:
    return name.strip().upper().replace("-", "_")


_HASH_FACTORIES: Dict[str, Callable[[], Any]] = {
    "SHA256": hashlib.sha256,
    "SHA512": hashlib.sha512,
    "SHA3_256": hashlib.sha3_256,
    "SHA3_512": hashlib.sha3_512,
    "KECCAK256": lambda: _keccak.new(digest_bits=256),
    "KECCAK512": lambda: _keccak.new(digest_bits=512),
    "BLAKE3": blake3.blake3,
}


def available_algorithms() -> list:
    """Names accepted by new_hash_by_alg_name."""
    return sorted(_HASH_FACTORIES)


def new_hash_by_alg_name(name: str):
    """
    Create a fresh hash object for the named algorithm.

    Names are case-insensitive and '-' is equivalent to '_' (SHA3-256 == sha3_256).

    Raises:
        UnknownHashAlgorithmError: no implementation registered under ``name``
    """
    factory = _HASH_FACTORIES.get(_normalize(name))
    if factory is None:
        raise UnknownHashAlgorithmError(
            f"Unknown hash algorithm {name!r}; expected one of {', '.join(available_algorithms())}"
        )
    return factory()


class HashAlgorithmSelector:
    """
    Picks the hash algorithm from the process-wide settings.

    The settings mapping is injected at construction; the algorithm name
    lives under ``HashAlgName`` and defaults to SHA256 when absent.
    """

    def __init__(self, global_config: Optional[Mapping[str, Any]] = None):
        self._global_config = dict(global_config) if global_config else {}

    def select_algorithm(self) -> str:
        value = self._global_config.get(HASH_ALG_NAME)
        if value is None:
            return DEFAULT_HASH_ALGORITHM
        if not isinstance(value, str):
            raise UnknownHashAlgorithmError(
                f"{HASH_ALG_NAME} must be a string, got {type(value).__name__}"
            )
        return value

    def new_hash(self):
        return new_hash_by_alg_name(self.select_algorithm())


class ContentHasher:
    """Fixed-length digest of arbitrary bytes under the selected algorithm."""

    def __init__(self, selector: Optional[HashAlgorithmSelector] = None):
        self.selector = selector if selector is not None else HashAlgorithmSelector()

    @property
    def algorithm(self) -> str:
        return self.selector.select_algorithm()

    def digest(self, data: Optional[Union[bytes, bytearray, memoryview]]) -> Optional[Digest]:
        """
        Hash ``data`` and return the first HASH_LENGTH bytes.

        Empty or None input is treated as a caller mistake: it is logged and
        no digest is produced.

        Raises:
            DigestLengthError: algorithm output shorter than HASH_LENGTH
        """
        if not data:
            logger.error("Refusing to hash empty content, please confirm.")
            return None

        hasher = self.selector.new_hash()
        hasher.update(bytes(data))
        output = hasher.digest()
        if len(output) < HASH_LENGTH:
            raise DigestLengthError(
                f"{self.algorithm} produces {len(output)} bytes, need at least {HASH_LENGTH}"
            )
        return output[:HASH_LENGTH]


def sum_bytes(
    data: Optional[Union[bytes, bytearray, memoryview]],
    global_config: Optional[Mapping[str, Any]] = None,
) -> Optional[Digest]:
    """Returns the first HASH_LENGTH bytes of the hash of ``data``."""
    return ContentHasher(HashAlgorithmSelector(global_config)).digest(data)
