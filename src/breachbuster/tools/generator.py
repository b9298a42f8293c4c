"""
Random password generator.

Copyright (c) 2025 BreachBuster Security.
All rights reserved.
"""

import secrets
import string
from enum import Enum
from random import Random
from typing import Iterable

from breachbuster.exceptions import NoCharacterClassSelectedError, ValidationError

MIN_LENGTH = 8
MAX_LENGTH = 64
DEFAULT_LENGTH = 16

SYMBOLS = "!@#$%^&*()_+-=[]{}|;:,.<>?"
AMBIGUOUS_CHARACTERS = frozenset("0O1lI|")


class CharacterClass(str, Enum):
    """Character classes a password may draw from."""

    UPPERCASE = "uppercase"
    LOWERCASE = "lowercase"
    DIGITS = "digits"
    SYMBOLS = "symbols"


CHARSETS = {
    CharacterClass.UPPERCASE: string.ascii_uppercase,
    CharacterClass.LOWERCASE: string.ascii_lowercase,
    CharacterClass.DIGITS: string.digits,
    CharacterClass.SYMBOLS: SYMBOLS,
}


def build_charsets(
    classes: Iterable[CharacterClass],
    exclude_ambiguous: bool = False,
) -> dict[CharacterClass, str]:
    """Get the alphabet of each enabled class, in a stable order."""
    enabled = set(classes)
    charsets = {}
    for cls in CharacterClass:
        if cls not in enabled:
            continue
        chars = CHARSETS[cls]
        if exclude_ambiguous:
            chars = "".join(c for c in chars if c not in AMBIGUOUS_CHARACTERS)
        charsets[cls] = chars
    return charsets


def generate_password(
    length: int = DEFAULT_LENGTH,
    classes: Iterable[CharacterClass] | None = None,
    exclude_ambiguous: bool = False,
    rng: Random | None = None,
) -> str:
    """Generate a random password.

    One character is drawn from every enabled class, the rest are drawn
    from the union of enabled classes, then the whole sequence is
    shuffled so the required characters have no fixed position.

    Args:
        length: Password length, 8 to 64
        classes: Enabled character classes (all when None)
        exclude_ambiguous: Leave out 0, O, 1, l, I and |
        rng: Random source (cryptographically strong by default)

    Raises:
        NoCharacterClassSelectedError: no class enabled
        ValidationError: length out of range
    """
    if classes is None:
        classes = list(CharacterClass)

    charsets = build_charsets(classes, exclude_ambiguous)
    if not charsets:
        raise NoCharacterClassSelectedError()

    if isinstance(length, bool) or not isinstance(length, int):
        raise ValidationError(["Length must be an integer"])
    if not MIN_LENGTH <= length <= MAX_LENGTH:
        raise ValidationError([f"Length must be between {MIN_LENGTH} and {MAX_LENGTH}"])

    rng = rng or secrets.SystemRandom()

    chars = [rng.choice(charset) for charset in charsets.values()]

    pool = "".join(charsets.values())
    chars.extend(rng.choice(pool) for _ in range(length - len(chars)))

    # Fisher-Yates
    rng.shuffle(chars)
    return "".join(chars)
