"""
Pytest Configuration and Fixtures
"""

import os
import random
import sys
import pytest
import structlog

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), 'src'))

from rcli.crypto.signer import Ed25519Signer  # noqa: E402

# Keep the developer's environment out of config-sensitive tests
for _name in ("RCLI_STRICT_KEYS", "RCLI_KEY_DIR", "RCLI_LOG_LEVEL"):
    os.environ.pop(_name, None)


@pytest.fixture(autouse=True)
def reset_structlog():
    """The CLI binds structlog to the current stderr; undo that after each test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def blake3_key():
    """A 32-character shared key, as `text generate` writes it."""
    return b"kT7#pQ2&vW9!mN4$xR6*bH3%cJ8#dF5a"


@pytest.fixture
def zero_key():
    return bytes(32)


@pytest.fixture
def ed25519_keys():
    """(signing key, verifying key) as raw 32-byte values."""
    signer = Ed25519Signer()
    return signer.get_private_key(), signer.get_public_key()


@pytest.fixture
def seeded_rng():
    return random.Random(1234)


@pytest.fixture
def key_file(tmp_path):
    """Write bytes to a key file and return its path."""
    def _write(content: bytes, name: str = "key.bin") -> str:
        path = tmp_path / name
        path.write_bytes(content)
        return str(path)
    return _write
