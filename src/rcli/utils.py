"""
I/O helpers for the command layer.
"""

import base64
import binascii
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, List, Union
import structlog

from .crypto.keys import KeyArtifacts

logger = structlog.get_logger()


@contextmanager
def open_reader(infile: str) -> Iterator[BinaryIO]:
    """Open `infile` for binary reading; "-" means stdin (left open)."""
    if infile == "-":
        yield sys.stdin.buffer
        return
    with open(infile, "rb") as f:
        yield f


def read_content(infile: str) -> bytes:
    with open_reader(infile) as reader:
        return reader.read()


def b64_encode(data: bytes) -> str:
    """URL-safe base64 without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64_decode(text: Union[str, bytes]) -> bytes:
    """
    Decode URL-safe base64, with or without padding.

    Surrounding whitespace is ignored; any other character outside the
    URL-safe alphabet raises binascii.Error.
    """
    if isinstance(text, bytes):
        text = text.decode("ascii")
    text = text.strip()
    if "+" in text or "/" in text:
        raise binascii.Error("Non URL-safe base64 character found")
    return base64.b64decode(text + "=" * (-len(text) % 4), altchars=b"-_", validate=True)


def write_artifacts(artifacts: KeyArtifacts, output_dir: Union[str, Path]) -> List[Path]:
    """
    Write every artifact into `output_dir`.

    Refuses to overwrite existing files, and removes anything it wrote if a
    later write fails, so the directory ends up with all files or none.
    """
    output_dir = Path(output_dir)
    targets = [(output_dir / name, content) for name, content in artifacts.items()]

    existing = [str(path) for path, _ in targets if path.exists()]
    if existing:
        raise FileExistsError(f"Refusing to overwrite existing key files: {', '.join(existing)}")

    written: List[Path] = []
    try:
        for path, content in targets:
            path.write_bytes(content)
            written.append(path)
    except OSError:
        for path in written:
            path.unlink(missing_ok=True)
        raise

    logger.info("key_files_written", directory=str(output_dir), files=artifacts.names())
    return written
