"""
Tests for the text command dispatch layer.
"""

import io
from concurrent.futures import ThreadPoolExecutor

import pytest

from rcli.config import TextConfig
from rcli.crypto import (
    DecryptionFailed,
    InvalidKeyLength,
    UnsupportedAlgorithm,
    process_text_decrypt,
    process_text_encrypt,
    process_text_key_generate,
    process_text_sign,
    process_text_verify,
)
from rcli.crypto.signer import SignMethod


class TestSignVerify:
    """Test sign/verify routing for both methods."""

    def test_blake3_sign_verify(self, blake3_key):
        signature = process_text_sign(io.BytesIO(b"hello"), blake3_key, SignMethod.BLAKE3)

        assert process_text_verify(io.BytesIO(b"hello"), blake3_key, signature, "blake3") is True

    def test_blake3_other_message(self, blake3_key):
        signature = process_text_sign(io.BytesIO(b"hello"), blake3_key, "blake3")

        assert process_text_verify(io.BytesIO(b"hello!"), blake3_key, signature, "blake3") is False

    def test_ed25519_sign_verify(self, ed25519_keys):
        sk, pk = ed25519_keys
        signature = process_text_sign(io.BytesIO(b"hello"), sk, "ed25519")

        assert process_text_verify(io.BytesIO(b"hello"), pk, signature, "ed25519") is True

    def test_ed25519_tampered_message(self, ed25519_keys):
        sk, pk = ed25519_keys
        signature = process_text_sign(io.BytesIO(b"hello"), sk, "ed25519")

        assert process_text_verify(io.BytesIO(b"jello"), pk, signature, "ed25519") is False

    def test_unknown_method(self, blake3_key):
        with pytest.raises(UnsupportedAlgorithm):
            process_text_sign(io.BytesIO(b"hello"), blake3_key, "sha256")

    def test_strict_config(self, blake3_key):
        config = TextConfig(strict_key_length=True)

        with pytest.raises(InvalidKeyLength):
            process_text_sign(io.BytesIO(b"hello"), blake3_key + b"\n", "blake3", config)
        assert process_text_sign(io.BytesIO(b"hello"), blake3_key, "blake3", config)

    def test_generated_keys_round_trip(self):
        """Keys from the generator work with the matching sign/verify methods."""
        blake3_files = process_text_key_generate("blake3")
        signature = process_text_sign(io.BytesIO(b"msg"), blake3_files["blake3.txt"], "blake3")
        assert process_text_verify(io.BytesIO(b"msg"), blake3_files["blake3.txt"], signature, "blake3")

        ed_files = process_text_key_generate("ed25519")
        signature = process_text_sign(io.BytesIO(b"msg"), ed_files["ed25519.sk"], "ed25519")
        assert process_text_verify(io.BytesIO(b"msg"), ed_files["ed25519.pk"], signature, "ed25519")

    def test_concurrent_calls(self, blake3_key):
        """Independent calls share no state."""
        messages = [f"message {i}".encode() for i in range(32)]

        def sign_and_verify(message):
            signature = process_text_sign(io.BytesIO(message), blake3_key, "blake3")
            return process_text_verify(io.BytesIO(message), blake3_key, signature, "blake3")

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(sign_and_verify, messages))

        assert all(results)


class TestEncryptDecrypt:
    """Test encrypt/decrypt routing."""

    KEY = b"01234567890123456789012345678901"

    def test_round_trip(self):
        envelope = process_text_encrypt(io.BytesIO(b"hello, world"), self.KEY)

        assert process_text_decrypt(io.BytesIO(envelope), self.KEY) == b"hello, world"

    def test_half_key_rejected(self):
        with pytest.raises(InvalidKeyLength):
            process_text_encrypt(io.BytesIO(b"hello, world"), self.KEY[:16])

    def test_wrong_key(self):
        envelope = process_text_encrypt(io.BytesIO(b"hello, world"), self.KEY)

        with pytest.raises(DecryptionFailed):
            process_text_decrypt(io.BytesIO(envelope), self.KEY[::-1])
