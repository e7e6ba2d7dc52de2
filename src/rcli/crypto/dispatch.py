"""
Text Command Dispatch

Maps a method tag and an operation (sign / verify / encrypt / decrypt /
generate) onto a freshly built component. Nothing is cached between
calls, so concurrent calls with independent streams and keys are safe.
"""

import random
from typing import BinaryIO, Optional, Union
import structlog

from ..config import TextConfig
from .cipher import ChaCha20Poly1305Cipher
from .keys import KeyArtifacts, KeyGenerator
from .material import KeyMaterial
from .signer import SignMethod, get_signer, get_verifier

logger = structlog.get_logger()

KeyInput = Union[KeyMaterial, bytes, bytearray]
MethodInput = Union[SignMethod, str]


def process_text_sign(
    reader: BinaryIO,
    key: KeyInput,
    method: MethodInput,
    config: Optional[TextConfig] = None,
) -> bytes:
    """Sign a message with a session key (blake3) or private key (ed25519)."""
    config = config or TextConfig()
    signer = get_signer(method, key, strict=config.strict_key_length)
    signature = signer.sign(reader)
    logger.info("text_sign", method=signer.method.value, key_id=signer.key_id)
    return signature


def process_text_verify(
    reader: BinaryIO,
    key: KeyInput,
    signature: bytes,
    method: MethodInput,
    config: Optional[TextConfig] = None,
) -> bool:
    """Verify a signature with a session key (blake3) or public key (ed25519)."""
    config = config or TextConfig()
    verifier = get_verifier(method, key, strict=config.strict_key_length)
    valid = verifier.verify(reader, signature)
    logger.info("text_verify", method=verifier.method.value, key_id=verifier.key_id, valid=valid)
    return valid


def process_text_encrypt(
    reader: BinaryIO,
    key: KeyInput,
    rng: Optional[random.Random] = None,
) -> bytes:
    return ChaCha20Poly1305Cipher(rng).encrypt(reader, key)


def process_text_decrypt(reader: BinaryIO, key: KeyInput) -> bytes:
    return ChaCha20Poly1305Cipher().decrypt(reader, key)


def process_text_key_generate(
    method: MethodInput,
    rng: Optional[random.Random] = None,
) -> KeyArtifacts:
    return KeyGenerator(rng).generate(method)
