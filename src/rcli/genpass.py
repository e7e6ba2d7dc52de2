"""
Password Generation

Random passwords drawn from unambiguous character sets (no I, O, l, o, 0).
Every enabled character class is guaranteed to appear as long as the
requested length allows it.
"""

import random
import secrets
from typing import List, Optional

UPPERCASE = "ABCDEFGHJKLMNPQRSTUVWXYZ"
LOWERCASE = "abcdefghijkmnpqrstuvwxyz"
NUMBERS = "123456789"
SYMBOLS = "!#$%&*"


def generate_password(
    length: int = 16,
    number: bool = True,
    symbol: bool = True,
    uppercase: bool = True,
    lowercase: bool = True,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Generate a random password.

    One character from each enabled class is placed first, the remainder
    is drawn from the union of enabled classes, and the result is shuffled.

    Raises:
        ValueError: if length < 1 or no character class is enabled
    """
    if length < 1:
        raise ValueError(f"Password length must be positive, got {length}")

    rng = rng or secrets.SystemRandom()

    classes = [
        charset for enabled, charset in (
            (number, NUMBERS),
            (symbol, SYMBOLS),
            (uppercase, UPPERCASE),
            (lowercase, LOWERCASE),
        )
        if enabled
    ]
    if not classes:
        raise ValueError("At least one character class must be enabled")

    alphabet = "".join(classes)
    password: List[str] = [rng.choice(charset) for charset in classes]

    if length < len(password):
        rng.shuffle(password)
        return "".join(password[:length])

    password.extend(rng.choice(alphabet) for _ in range(length - len(password)))
    rng.shuffle(password)

    return "".join(password)
