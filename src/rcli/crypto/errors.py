"""
Text Cryptography Errors

Every failure raised by the engine derives from TextCryptoError so the
command layer can report it uniformly. A signature that does not verify
is NOT an error: verifiers return False for that case.
"""

from typing import Optional


class TextCryptoError(Exception):
    """Base class for all text cryptography failures."""
    pass


class InvalidKeyLength(TextCryptoError):
    """Raised when key material does not have the length an algorithm requires."""

    def __init__(self, required: int, actual: int, message: Optional[str] = None):
        self.required = required
        self.actual = actual
        super().__init__(message or f"Invalid key length: expected {required} bytes, got {actual}")


class InvalidKeyMaterial(TextCryptoError):
    """Raised when key bytes have the right size but cannot be used (bad hex, bad point)."""
    pass


class InvalidSignatureEncoding(TextCryptoError):
    """Raised when a signature buffer is too short for the algorithm's signature."""

    def __init__(self, required: int, actual: int):
        self.required = required
        self.actual = actual
        super().__init__(f"Invalid signature: expected at least {required} bytes, got {actual}")


class InvalidMessageLength(TextCryptoError):
    """Raised when an encrypted envelope is too short to hold a nonce and a body."""

    def __init__(self, required: int, actual: int):
        self.required = required
        self.actual = actual
        super().__init__(f"Invalid message: expected more than {required} bytes, got {actual}")


class DecryptionFailed(TextCryptoError):
    """Raised when AEAD authentication fails (wrong key, tampered or truncated data)."""
    pass


class UnsupportedAlgorithm(TextCryptoError):
    """Raised when a method tag does not name a known algorithm."""

    def __init__(self, tag: object):
        self.tag = tag
        super().__init__(f"Unsupported algorithm: {tag!r}")
