"""
Text Signing Implementation

Supports:
- BLAKE3 keyed hash - Symmetric message authentication (shared 32-byte key)
- Ed25519 - Detached public-key signatures (32-byte seed / 32-byte public key)

Signers and verifiers read their input stream to the end before computing;
there is no incremental mode.
"""

import hashlib
import hmac
from abc import ABC, abstractmethod
from enum import Enum
from typing import BinaryIO, Optional, Union
import structlog

import blake3
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519

from .errors import InvalidKeyMaterial, InvalidSignatureEncoding, UnsupportedAlgorithm
from .material import KEY_SIZE, KeyMaterial
from .streams import read_all

logger = structlog.get_logger()

BLAKE3_SIGNATURE_SIZE = 32
ED25519_SIGNATURE_SIZE = 64

KeyLike = Union[KeyMaterial, bytes, bytearray]


class SignMethod(Enum):
    """Supported text signing methods."""
    BLAKE3 = "blake3"
    ED25519 = "ed25519"

    @classmethod
    def parse(cls, tag: Union["SignMethod", str]) -> "SignMethod":
        """Resolve a method tag; matching is exact and case-sensitive."""
        if isinstance(tag, cls):
            return tag
        for method in cls:
            if method.value == tag:
                return method
        raise UnsupportedAlgorithm(tag)

    def __str__(self) -> str:
        return self.value


# Field prime of Curve25519
_P = 2 ** 255 - 19

# y-coordinates (sign bit cleared) of the points of order 1, 2, 4 and 8,
# including the non-canonical encodings p and p + 1
_SMALL_ORDER_ENCODINGS = frozenset(bytes.fromhex(h) for h in (
    "00" * 32,
    "01" + "00" * 31,
    "26e8958fc2b227b045c3f489f2ef98f0d5dfac05d3c63339b13802886d53fc05",
    "c7176a703d4dd84fba3c0b760d10670f2a2053fa2c39ccc64ec7fd7792ac037a",
    "ec" + "ff" * 30 + "7f",
    "ed" + "ff" * 30 + "7f",
    "ee" + "ff" * 30 + "7f",
))


def is_weak_point(encoding: bytes) -> bool:
    """
    True for Ed25519 point encodings that strict verification refuses:
    small-order points (either sign) and non-canonical y >= p.
    """
    cleared = bytes(encoding[:31]) + bytes([encoding[31] & 0x7F])
    if cleared in _SMALL_ORDER_ENCODINGS:
        return True
    return int.from_bytes(cleared, "little") >= _P


def _key_id(public_bytes: bytes) -> str:
    return hashlib.sha256(public_bytes).hexdigest()[:16]


class TextSigner(ABC):
    """Abstract base class for message signers."""

    @property
    @abstractmethod
    def method(self) -> SignMethod:
        """Get the signing method."""
        pass

    @property
    @abstractmethod
    def key_id(self) -> str:
        """Get a non-secret identifier for the key."""
        pass

    @abstractmethod
    def sign(self, reader: BinaryIO) -> bytes:
        """Sign everything readable from `reader` and return the raw signature."""
        pass


class TextVerifier(ABC):
    """Abstract base class for detached-signature verifiers."""

    @property
    @abstractmethod
    def method(self) -> SignMethod:
        pass

    @property
    @abstractmethod
    def key_id(self) -> str:
        pass

    @abstractmethod
    def verify(self, reader: BinaryIO, signature: bytes) -> bool:
        """
        Check `signature` against everything readable from `reader`.

        Returns False on mismatch. Raises InvalidSignatureEncoding only when
        the signature is structurally unusable.
        """
        pass


class Blake3Keyed(TextSigner, TextVerifier):
    """BLAKE3 keyed-hash signer/verifier; the same key signs and verifies."""

    def __init__(self, key: KeyLike, strict: bool = False):
        self._key = KeyMaterial.of(key).leading(KEY_SIZE, strict=strict)
        # Identify the key by a hash of a hash so the log never sees the secret
        self._key_id = _key_id(hashlib.sha256(self._key).digest())

    @property
    def method(self) -> SignMethod:
        return SignMethod.BLAKE3

    @property
    def key_id(self) -> str:
        return self._key_id

    def _digest(self, data: bytes) -> bytes:
        return blake3.blake3(data, key=self._key).digest()

    def sign(self, reader: BinaryIO) -> bytes:
        data = read_all(reader)
        signature = self._digest(data)
        logger.debug("text_signed", method=self.method.value, key_id=self._key_id, size=len(data))
        return signature

    def verify(self, reader: BinaryIO, signature: bytes) -> bool:
        if len(signature) < BLAKE3_SIGNATURE_SIZE:
            raise InvalidSignatureEncoding(BLAKE3_SIGNATURE_SIZE, len(signature))

        data = read_all(reader)
        valid = hmac.compare_digest(self._digest(data), bytes(signature))
        logger.debug("text_verified", method=self.method.value, key_id=self._key_id, valid=valid)
        return valid


class Ed25519Signer(TextSigner):
    """Ed25519 signer built from a 32-byte private seed."""

    def __init__(self, private_key_bytes: Optional[KeyLike] = None, strict: bool = False):
        if private_key_bytes is not None:
            seed = KeyMaterial.of(private_key_bytes).leading(KEY_SIZE, strict=strict)
            self._private_key = ed25519.Ed25519PrivateKey.from_private_bytes(seed)
        else:
            self._private_key = ed25519.Ed25519PrivateKey.generate()

        self._public_key = self._private_key.public_key()
        self._key_id = _key_id(self.get_public_key())

    @property
    def method(self) -> SignMethod:
        return SignMethod.ED25519

    @property
    def key_id(self) -> str:
        return self._key_id

    def sign(self, reader: BinaryIO) -> bytes:
        data = read_all(reader)
        signature = self._private_key.sign(data)
        logger.debug("text_signed", method=self.method.value, key_id=self._key_id, size=len(data))
        return signature

    def verifier(self) -> "Ed25519Verifier":
        """Get the verifier paired with this signing key."""
        return Ed25519Verifier(self.get_public_key())

    def get_public_key(self) -> bytes:
        return self._public_key.public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )

    def get_private_key(self) -> bytes:
        return self._private_key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )


class Ed25519Verifier(TextVerifier):
    """Ed25519 verifier built from a 32-byte public key."""

    def __init__(self, public_key_bytes: KeyLike, strict: bool = False):
        raw = KeyMaterial.of(public_key_bytes).leading(KEY_SIZE, strict=strict)
        if is_weak_point(raw):
            raise InvalidKeyMaterial("Invalid Ed25519 public key: small-order or non-canonical point")
        try:
            self._public_key = ed25519.Ed25519PublicKey.from_public_bytes(raw)
        except ValueError as e:
            raise InvalidKeyMaterial(f"Invalid Ed25519 public key: {e}") from e
        self._key_id = _key_id(raw)

    @property
    def method(self) -> SignMethod:
        return SignMethod.ED25519

    @property
    def key_id(self) -> str:
        return self._key_id

    def verify(self, reader: BinaryIO, signature: bytes) -> bool:
        if len(signature) < ED25519_SIGNATURE_SIZE:
            raise InvalidSignatureEncoding(ED25519_SIGNATURE_SIZE, len(signature))

        data = read_all(reader)
        signature = bytes(signature[:ED25519_SIGNATURE_SIZE])
        if is_weak_point(signature[:32]):
            valid = False
        else:
            try:
                self._public_key.verify(signature, data)
                valid = True
            except InvalidSignature:
                valid = False
        logger.debug("text_verified", method=self.method.value, key_id=self._key_id, valid=valid)
        return valid


def get_signer(
    method: Union[SignMethod, str],
    key: KeyLike,
    strict: bool = False,
) -> TextSigner:
    """
    Factory function to get a signer instance.

    Args:
        method: Which method to use (enum member or exact tag)
        key: Blake3 shared key or Ed25519 private seed
        strict: Reject keys that are not exactly 32 bytes

    Returns:
        TextSigner instance
    """
    method = SignMethod.parse(method)

    if method == SignMethod.BLAKE3:
        return Blake3Keyed(key, strict=strict)

    elif method == SignMethod.ED25519:
        return Ed25519Signer(key, strict=strict)

    else:
        raise UnsupportedAlgorithm(method)


def get_verifier(
    method: Union[SignMethod, str],
    key: KeyLike,
    strict: bool = False,
) -> TextVerifier:
    """
    Factory function to get a verifier instance.

    For Blake3 the key is the shared session key; for Ed25519 it is the
    public key.
    """
    method = SignMethod.parse(method)

    if method == SignMethod.BLAKE3:
        return Blake3Keyed(key, strict=strict)

    elif method == SignMethod.ED25519:
        return Ed25519Verifier(key, strict=strict)

    else:
        raise UnsupportedAlgorithm(method)
