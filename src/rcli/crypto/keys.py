"""
Key Generation for rcli text signing

Produces the key files each signing method expects:
- blake3:  blake3.txt                  (32-character shared key, UTF-8)
- ed25519: ed25519.sk + ed25519.pk     (32-byte raw seed, 32-byte raw public key)

Generation only draws from the supplied random source; it never reads
existing key material. Writing the files is left to the caller.
"""

import random
import secrets
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple, Union
import structlog

from ..genpass import generate_password
from .errors import UnsupportedAlgorithm
from .material import KEY_SIZE
from .signer import Ed25519Signer, SignMethod

logger = structlog.get_logger()

BLAKE3_KEY_FILE = "blake3.txt"
ED25519_SECRET_FILE = "ed25519.sk"
ED25519_PUBLIC_FILE = "ed25519.pk"


@dataclass(frozen=True)
class KeyArtifacts:
    """An ordered, complete set of generated key files."""
    method: SignMethod
    files: Dict[str, bytes] = field(default_factory=dict, repr=False)

    def __getitem__(self, name: str) -> bytes:
        return self.files[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.files)

    def __len__(self) -> int:
        return len(self.files)

    def names(self) -> List[str]:
        return list(self.files)

    def items(self) -> List[Tuple[str, bytes]]:
        return list(self.files.items())


class KeyGenerator:
    """
    Generates fresh key material per signing method.

    The random source is injectable so tests can be deterministic; in
    normal use it is the OS CSPRNG.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or secrets.SystemRandom()

    def generate(self, method: Union[SignMethod, str]) -> KeyArtifacts:
        """Generate the full artifact set for `method`."""
        method = SignMethod.parse(method)

        if method == SignMethod.BLAKE3:
            files = self._generate_blake3()
        elif method == SignMethod.ED25519:
            files = self._generate_ed25519()
        else:
            raise UnsupportedAlgorithm(method)

        artifacts = KeyArtifacts(method=method, files=files)
        logger.info("key_generated", method=method.value, files=artifacts.names())
        return artifacts

    def _generate_blake3(self) -> Dict[str, bytes]:
        key = generate_password(
            KEY_SIZE,
            number=True,
            symbol=True,
            uppercase=True,
            lowercase=True,
            rng=self._rng,
        )
        return {BLAKE3_KEY_FILE: key.encode("utf-8")}

    def _generate_ed25519(self) -> Dict[str, bytes]:
        signer = Ed25519Signer(self._rng.randbytes(KEY_SIZE))
        # Both halves are built before either is handed out
        secret_key = signer.get_private_key()
        public_key = signer.get_public_key()
        return {
            ED25519_SECRET_FILE: secret_key,
            ED25519_PUBLIC_FILE: public_key,
        }
