"""
ChaCha20-Poly1305 Text Encryption

Key:    256-bit (32 bytes), exact length required
Nonce:  96-bit (12 bytes), freshly drawn for every encryption
Tag:    128-bit (16 bytes), Poly1305

Envelope format: nonce(12) || ciphertext || tag(16)

The envelope is unversioned; the nonce length is fixed by the algorithm.
The whole message is sealed as a single AEAD operation with no associated
data, so message size is bounded by available memory.
"""

import random
import secrets
from typing import BinaryIO, Optional, Union
import structlog

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import ChaCha20Poly1305

from .errors import DecryptionFailed, InvalidMessageLength
from .material import KeyMaterial
from .streams import read_all

logger = structlog.get_logger()


class ChaCha20Poly1305Cipher:
    """ChaCha20-Poly1305 authenticated encryption over whole messages."""

    KEY_SIZE = 32
    NONCE_SIZE = 12
    TAG_SIZE = 16

    def __init__(self, rng: Optional[random.Random] = None):
        """
        Args:
            rng: Source of nonce bytes; defaults to the OS CSPRNG.
                 Only substitute a seeded generator in tests.
        """
        self._rng = rng or secrets.SystemRandom()

    def _aead(self, key: Union[KeyMaterial, bytes, bytearray]) -> ChaCha20Poly1305:
        return ChaCha20Poly1305(KeyMaterial.of(key).exact(self.KEY_SIZE))

    def encrypt(self, reader: BinaryIO, key: Union[KeyMaterial, bytes, bytearray]) -> bytes:
        """Seal the full stream and return nonce || ciphertext || tag."""
        aead = self._aead(key)
        plaintext = read_all(reader)

        nonce = self._rng.randbytes(self.NONCE_SIZE)
        sealed = aead.encrypt(nonce, plaintext, None)

        logger.debug("text_encrypted", size=len(plaintext))
        return nonce + sealed

    def decrypt(self, reader: BinaryIO, key: Union[KeyMaterial, bytes, bytearray]) -> bytes:
        """Open an envelope produced by encrypt(); fails closed on any tampering."""
        aead = self._aead(key)
        envelope = read_all(reader)

        if len(envelope) <= self.NONCE_SIZE:
            raise InvalidMessageLength(self.NONCE_SIZE, len(envelope))

        nonce = envelope[:self.NONCE_SIZE]
        sealed = envelope[self.NONCE_SIZE:]

        try:
            plaintext = aead.decrypt(nonce, sealed, None)
        except InvalidTag as e:
            logger.warning("text_decryption_failed", size=len(envelope))
            raise DecryptionFailed("Decryption failed: message is corrupt or the key is wrong") from e

        logger.debug("text_decrypted", size=len(plaintext))
        return plaintext
