"""
Text Cryptography for rcli

Supports:
- BLAKE3 keyed hash - Symmetric signatures with a shared 32-byte key
- Ed25519 - Detached public-key signatures
- ChaCha20-Poly1305 - Authenticated encryption (nonce || ciphertext || tag)
"""

from .errors import (
    TextCryptoError,
    InvalidKeyLength,
    InvalidKeyMaterial,
    InvalidSignatureEncoding,
    InvalidMessageLength,
    DecryptionFailed,
    UnsupportedAlgorithm,
)
from .material import KEY_SIZE, KeyMaterial
from .signer import (
    SignMethod,
    TextSigner,
    TextVerifier,
    Blake3Keyed,
    Ed25519Signer,
    Ed25519Verifier,
    get_signer,
    get_verifier,
)
from .cipher import ChaCha20Poly1305Cipher
from .keys import KeyArtifacts, KeyGenerator
from .dispatch import (
    process_text_sign,
    process_text_verify,
    process_text_encrypt,
    process_text_decrypt,
    process_text_key_generate,
)

__all__ = [
    "TextCryptoError",
    "InvalidKeyLength",
    "InvalidKeyMaterial",
    "InvalidSignatureEncoding",
    "InvalidMessageLength",
    "DecryptionFailed",
    "UnsupportedAlgorithm",
    "KEY_SIZE",
    "KeyMaterial",
    "SignMethod",
    "TextSigner",
    "TextVerifier",
    "Blake3Keyed",
    "Ed25519Signer",
    "Ed25519Verifier",
    "get_signer",
    "get_verifier",
    "ChaCha20Poly1305Cipher",
    "KeyArtifacts",
    "KeyGenerator",
    "process_text_sign",
    "process_text_verify",
    "process_text_encrypt",
    "process_text_decrypt",
    "process_text_key_generate",
]
