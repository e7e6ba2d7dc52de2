"""
Stream helpers shared by the signers and the cipher.

Every operation buffers its whole input; there is no incremental mode.
"""

from typing import BinaryIO


def read_all(reader: BinaryIO) -> bytes:
    """Drain a binary stream to end-of-stream."""
    data = reader.read()
    if data is None:
        return b""
    return bytes(data)
