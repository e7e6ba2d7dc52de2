"""
rcli Configuration

Settings come from the environment:
- RCLI_STRICT_KEYS: reject signing keys that are not exactly 32 bytes
  instead of using their first 32 bytes (default: off)
- RCLI_KEY_DIR:     default output directory for `text generate` (default: .)
- RCLI_LOG_LEVEL:   structlog level for the CLI (default: warning)
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional
import structlog

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in _TRUTHY


@dataclass
class TextConfig:
    """Configuration for the text cryptography commands."""
    strict_key_length: bool = False  # Exact 32-byte signing keys only
    key_dir: str = "."  # Where generated key files are written
    log_level: str = "warning"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TextConfig":
        env = os.environ if environ is None else environ
        return cls(
            strict_key_length=_env_flag(env.get("RCLI_STRICT_KEYS")),
            key_dir=env.get("RCLI_KEY_DIR") or ".",
            log_level=(env.get("RCLI_LOG_LEVEL") or "warning").strip().lower(),
        )


def configure_logging(level: str = "warning") -> None:
    """
    Route structlog output to stderr, filtered at `level`.

    stdout is reserved for command results (signatures, ciphertext).
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.WARNING

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
