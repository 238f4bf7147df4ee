"""
Justitia Crypto Test Suite

Covers:
- Hash algorithm selection (default, injected setting, registry)
- Content digests (determinism, truncation, empty input)
- Transaction and block identifiers, including header-hash memoization

Run with:
    pytest tests/test_crypto.py -v
"""

import dataclasses
import hashlib
import logging
from unittest.mock import patch

import blake3
import pytest
from Crypto.Hash import keccak

from justitia.constants import DEFAULT_HASH_ALGORITHM, HASH_ALG_NAME, HASH_LENGTH
from justitia.crypto import (
    ContentHasher,
    HashAlgorithmSelector,
    available_algorithms,
    block_identifier,
    encode_header,
    encode_transaction,
    new_hash_by_alg_name,
    sum_bytes,
    transaction_identifier,
)
from justitia.crypto import hashing
from justitia.exceptions import DigestLengthError, UnknownHashAlgorithmError
from justitia.types import Block, BlockHeader, ZERO_HASH, new_transaction


def _hasher(name=None):
    return ContentHasher(HashAlgorithmSelector({HASH_ALG_NAME: name} if name else None))


@pytest.fixture
def tx():
    return new_transaction(
        nonce=1,
        to=bytes.fromhex("11" * 20),
        amount=1000,
        gas_limit=21000,
        gas_price=5,
        data=b"transfer",
        from_=bytes.fromhex("22" * 20),
    )


@pytest.fixture
def header():
    return BlockHeader(
        chain_id=1,
        prev_block_hash=bytes.fromhex("ab" * 32),
        height=10,
        timestamp=1_700_000_000,
        coinbase=bytes.fromhex("33" * 20),
    )


# ============================================================================
# Hash algorithm selection
# ============================================================================


class TestHashAlgorithmSelector:

    def test_default_when_unset(self):
        assert HashAlgorithmSelector().select_algorithm() == DEFAULT_HASH_ALGORITHM == "SHA256"

    def test_default_when_key_absent(self):
        assert HashAlgorithmSelector({"other": "x"}).select_algorithm() == "SHA256"

    def test_configured_name(self):
        assert HashAlgorithmSelector({HASH_ALG_NAME: "SHA3_256"}).select_algorithm() == "SHA3_256"

    def test_non_string_name_rejected(self):
        with pytest.raises(UnknownHashAlgorithmError):
            HashAlgorithmSelector({HASH_ALG_NAME: 256}).select_algorithm()

    def test_setting_copied_at_construction(self):
        settings = {HASH_ALG_NAME: "SHA512"}
        selector = HashAlgorithmSelector(settings)
        settings[HASH_ALG_NAME] = "BLAKE3"
        assert selector.select_algorithm() == "SHA512"


class TestHashRegistry:

    def test_available(self):
        assert "SHA256" in available_algorithms()
        assert "KECCAK256" in available_algorithms()
        assert "BLAKE3" in available_algorithms()

    @pytest.mark.parametrize("name", ["sha3-256", "Sha3_256", " SHA3-256 "])
    def test_name_normalization(self, name):
        h = new_hash_by_alg_name(name)
        h.update(b"x")
        assert h.digest() == hashlib.sha3_256(b"x").digest()

    def test_unknown_algorithm(self):
        with pytest.raises(UnknownHashAlgorithmError, match="MD5"):
            new_hash_by_alg_name("MD5")

    def test_fresh_object_per_call(self):
        a = new_hash_by_alg_name("SHA256")
        a.update(b"dirty")
        b = new_hash_by_alg_name("SHA256")
        b.update(b"x")
        assert b.digest() == hashlib.sha256(b"x").digest()


# ============================================================================
# Content hasher
# ============================================================================


class TestContentHasher:

    def test_default_is_sha256(self):
        assert _hasher().digest(b"justitia") == hashlib.sha256(b"justitia").digest()

    def test_deterministic(self):
        hasher = _hasher()
        assert hasher.digest(b"block") == hasher.digest(b"block")

    def test_different_inputs(self):
        hasher = _hasher()
        assert hasher.digest(b"a") != hasher.digest(b"b")

    @pytest.mark.parametrize("size", [1, 31, 32, 33, 4096])
    def test_fixed_length(self, size):
        assert len(_hasher().digest(b"\x01" * size)) == HASH_LENGTH

    def test_long_output_truncated(self):
        data = b"justitia"
        assert _hasher("SHA512").digest(data) == hashlib.sha512(data).digest()[:HASH_LENGTH]

    def test_keccak(self):
        expected = keccak.new(digest_bits=256, data=b"justitia").digest()
        assert _hasher("KECCAK256").digest(b"justitia") == expected

    def test_blake3(self):
        assert _hasher("BLAKE3").digest(b"justitia") == blake3.blake3(b"justitia").digest()

    def test_short_output_is_error(self):
        short = {"BLAKE2S_128": lambda: hashlib.blake2s(digest_size=16)}
        with patch.dict(hashing._HASH_FACTORIES, short):
            with pytest.raises(DigestLengthError):
                _hasher("BLAKE2S_128").digest(b"justitia")

    def test_unknown_configured_algorithm(self):
        with pytest.raises(UnknownHashAlgorithmError):
            _hasher("NOPE").digest(b"justitia")

    def test_algorithm_changes_digest(self):
        assert _hasher("SHA256").digest(b"x") != _hasher("SHA3_256").digest(b"x")

    @pytest.mark.parametrize("empty", [b"", None, bytearray()])
    def test_empty_input_is_noop(self, empty, caplog):
        with caplog.at_level(logging.ERROR):
            assert _hasher().digest(empty) is None
        assert "empty content" in caplog.text

    def test_accepts_bytearray(self):
        assert _hasher().digest(bytearray(b"abc")) == _hasher().digest(b"abc")

    def test_sum_bytes(self):
        assert sum_bytes(b"abc") == hashlib.sha256(b"abc").digest()
        assert sum_bytes(b"abc", {HASH_ALG_NAME: "SHA3_256"}) == hashlib.sha3_256(b"abc").digest()


# ============================================================================
# Identity derivation
# ============================================================================


class TestTransactionIdentifier:

    def test_length(self, tx):
        assert len(transaction_identifier(tx)) == HASH_LENGTH

    def test_identical_transactions(self, tx):
        twin = dataclasses.replace(tx, data=dataclasses.replace(tx.data))
        assert twin is not tx
        assert transaction_identifier(twin) == transaction_identifier(tx)

    @pytest.mark.parametrize("field, value", [
        ("account_nonce", 2),
        ("price", 6),
        ("gas_limit", 21001),
        ("recipient", bytes.fromhex("44" * 20)),
        ("from_", None),
        ("amount", 1001),
        ("payload", b"transfes"),
        ("v", 27),
        ("r", 1),
        ("s", 1),
    ])
    def test_any_field_changes_identifier(self, tx, field, value):
        changed = dataclasses.replace(tx, data=dataclasses.replace(tx.data, **{field: value}))
        assert transaction_identifier(changed) != transaction_identifier(tx)

    def test_digest_of_canonical_encoding(self, tx):
        assert transaction_identifier(tx) == hashlib.sha256(encode_transaction(tx)).digest()

    def test_canonical_encoding_field_order(self, tx):
        encoded = encode_transaction(tx).decode()
        assert encoded.startswith('{"nonce":1,"gasPrice":5,"gas":21000,"to":"0x1111')
        assert encoded.endswith('"input":"0x7472616e73666572","v":0,"r":0,"s":0}')

    def test_uses_given_hasher(self, tx):
        assert transaction_identifier(tx, _hasher("KECCAK256")) == \
            _hasher("KECCAK256").digest(encode_transaction(tx))


class TestBlockIdentifier:

    def test_computed_from_header(self, header):
        block = Block(header=header)
        assert block_identifier(block) == hashlib.sha256(encode_header(header)).digest()

    def test_not_written_back(self, header):
        block = Block(header=header)
        block_identifier(block)
        assert block.header_hash == ZERO_HASH

    def test_header_changes_identifier(self, header):
        block = Block(header=header)
        before = block_identifier(block)
        block.header.height += 1
        assert block_identifier(block) != before

    def test_cached_identifier_returned(self, header):
        cached = bytes.fromhex("cd" * 32)
        block = Block(header=header, header_hash=cached)
        assert block_identifier(block) == cached

    def test_cached_identifier_survives_header_mutation(self, header):
        block = Block(header=header)
        block.header_hash = block_identifier(block)
        cached = block.header_hash

        block.header.timestamp += 60
        block.header.state_root = bytes.fromhex("ef" * 32)

        assert block_identifier(block) == cached
        assert block_identifier(block) != hashlib.sha256(encode_header(block.header)).digest()

    def test_cached_identifier_ignores_algorithm(self, header):
        cached = bytes.fromhex("01" * 32)
        block = Block(header=header, header_hash=cached)
        assert block_identifier(block, _hasher("BLAKE3")) == cached

    def test_zero_identifier_recomputed(self, header):
        block = Block(header=header, header_hash=bytes(HASH_LENGTH))
        assert block_identifier(block) != ZERO_HASH

    def test_transactions_not_part_of_header_hash(self, header, tx):
        assert block_identifier(Block(header=header)) == \
            block_identifier(Block(header=header, transactions=[tx]))

    def test_sig_data_encoded(self, header):
        signed = dataclasses.replace(header, sig_data=[b"\x01\x02"])
        assert b'"sigData":["0x0102"]' in encode_header(signed)
        assert block_identifier(Block(header=signed)) != block_identifier(Block(header=header))
