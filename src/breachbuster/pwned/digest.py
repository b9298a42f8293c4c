"""
K-anonymity helpers for Pwned Passwords range queries.

The password is hashed with SHA-1 (the corpus is keyed by it), the hex
digest is split into a 5 character public prefix and a 35 character
private suffix, and the suffix is matched locally against the records
the corpus returns for the prefix.

Copyright (c) 2025 BreachBuster Security.
All rights reserved.
"""

import hashlib
import logging
import re
import string

from breachbuster.exceptions import EmptyInputError, ValidationError
from breachbuster.pwned.models import (
    HASH_LENGTH,
    PREFIX_LENGTH,
    BreachVerdict,
    PasswordDigest,
    RangeEntry,
    RangeQueryResult,
)

logger = logging.getLogger(__name__)

SUFFIX_LENGTH = HASH_LENGTH - PREFIX_LENGTH
HEX_DIGITS = frozenset(string.hexdigits)

# JSON allows unpaired surrogate escapes, UTF-8 cannot encode them
LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def _is_hex(value: str) -> bool:
    return bool(value) and all(c in HEX_DIGITS for c in value)


def prepare_query(password: str) -> PasswordDigest:
    """Hash a password and split it for a range query.

    Args:
        password: Password to check (NOT stored or logged)

    Returns:
        PasswordDigest with an upper-case prefix and lower-case suffix

    Raises:
        EmptyInputError: password is empty or whitespace only
    """
    if not password or not password.strip():
        raise EmptyInputError()

    encoded = LONE_SURROGATE.sub("\ufffd", password).encode("utf-8")
    full_hash = hashlib.sha1(encoded).hexdigest().upper()  # noqa: S324
    return PasswordDigest(
        full_hash=full_hash,
        prefix=full_hash[:PREFIX_LENGTH],
        suffix=full_hash[PREFIX_LENGTH:].lower(),
    )


def digest_from_hash(sha1_hash: str) -> PasswordDigest:
    """Build a digest from a pre-computed SHA-1 hex string.

    Raises:
        ValidationError: not exactly 40 hex characters
    """
    sha1_hash = (sha1_hash or "").strip()
    if len(sha1_hash) != HASH_LENGTH or not _is_hex(sha1_hash):
        raise ValidationError([f"SHA-1 hash must be exactly {HASH_LENGTH} hex characters"])

    full_hash = sha1_hash.upper()
    return PasswordDigest(
        full_hash=full_hash,
        prefix=full_hash[:PREFIX_LENGTH],
        suffix=full_hash[PREFIX_LENGTH:].lower(),
    )


def validate_prefix(prefix: str) -> list[str]:
    """Check a hash prefix. Returns list of errors."""
    if not isinstance(prefix, str):
        return ["Hash prefix must be a string"]

    errors = []
    if len(prefix) != PREFIX_LENGTH:
        errors.append(f"Hash prefix must be exactly {PREFIX_LENGTH} characters")
    if prefix and not _is_hex(prefix):
        errors.append("Hash prefix must contain only hexadecimal characters")
    return errors


def normalize_prefix(prefix: str) -> str:
    """Validate a prefix and upper-case it to match corpus convention.

    Raises:
        ValidationError: prefix is not exactly 5 hex characters
    """
    errors = validate_prefix(prefix)
    if errors:
        raise ValidationError(errors)
    return prefix.upper()


def parse_range_body(prefix: str, body: str) -> RangeQueryResult:
    """Parse a corpus range response into entries.

    The body holds one ``SUFFIX:COUNT`` record per line. Lines without a
    colon, with a non-numeric count or with a suffix that is not 35 hex
    characters are dropped; one bad record never fails the batch.
    """
    result = RangeQueryResult(prefix=prefix)
    dropped = 0

    for line in body.splitlines():
        line = line.strip()
        if not line:
            continue

        suffix, sep, count = line.partition(":")
        suffix = suffix.strip()
        count = count.strip()

        if not sep or len(suffix) != SUFFIX_LENGTH or not _is_hex(suffix):
            dropped += 1
            continue
        if not (count.isascii() and count.isdigit()):
            dropped += 1
            continue

        result.entries.append(RangeEntry(suffix=suffix.lower(), count=int(count)))

    if dropped:
        logger.debug(f"Dropped {dropped} malformed record(s) for prefix {prefix}")

    return result


def match_suffix(result: RangeQueryResult, suffix: str) -> BreachVerdict:
    """Match a private suffix against range entries in local memory.

    Comparison is case-insensitive. A matched entry with a count of zero
    is a padding record and reads as clean.
    """
    suffix = suffix.lower()

    for entry in result.entries:
        if entry.suffix.lower() == suffix:
            if entry.count == 0:
                break
            return BreachVerdict.breached(entry.count, hash_prefix=result.prefix)

    return BreachVerdict.clean(hash_prefix=result.prefix)
