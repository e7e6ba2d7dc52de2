"""
Key Material Adapter

Normalizes caller-supplied key bytes (file contents, decoded hex) into the
fixed-length keys the algorithms need.

Signing keys follow the first-32-bytes convention: shorter input is
rejected, longer input is truncated with a warning. Strict mode rejects
anything that is not exactly the required length.
"""

from dataclasses import dataclass, field
from typing import Union
import structlog

from .errors import InvalidKeyLength, InvalidKeyMaterial

logger = structlog.get_logger()

KEY_SIZE = 32


@dataclass(frozen=True)
class KeyMaterial:
    """Raw key bytes as supplied by the caller."""
    raw: bytes = field(repr=False)

    @classmethod
    def of(cls, value: Union["KeyMaterial", bytes, bytearray, memoryview]) -> "KeyMaterial":
        if isinstance(value, KeyMaterial):
            return value
        return cls(bytes(value))

    @classmethod
    def from_hex(cls, text: Union[str, bytes]) -> "KeyMaterial":
        """Decode a hex-encoded key, ignoring surrounding whitespace."""
        if isinstance(text, bytes):
            text = text.decode("ascii", errors="replace")
        try:
            return cls(bytes.fromhex(text.strip()))
        except ValueError as e:
            raise InvalidKeyMaterial(f"Key is not valid hex: {e}") from e

    def __len__(self) -> int:
        return len(self.raw)

    def exact(self, size: int = KEY_SIZE) -> bytes:
        """Return the key only if it is exactly `size` bytes long."""
        if len(self.raw) != size:
            raise InvalidKeyLength(size, len(self.raw))
        return self.raw

    def leading(self, size: int = KEY_SIZE, strict: bool = False) -> bytes:
        """
        Return the first `size` bytes of the key.

        Raises InvalidKeyLength if fewer than `size` bytes are available,
        or if `strict` is set and the key is not exactly `size` bytes.
        """
        if strict:
            return self.exact(size)
        if len(self.raw) < size:
            raise InvalidKeyLength(size, len(self.raw))
        if len(self.raw) > size:
            logger.warning("key_material_truncated", required=size, actual=len(self.raw))
        return self.raw[:size]
