"""
Pwned Passwords breach detection.

Checks passwords against the Have I Been Pwned corpus with k-anonymity
range queries: only the first 5 characters of the SHA-1 hash leave the
process that computed it.

Copyright (c) 2025 BreachBuster Security.
All rights reserved.
"""

from breachbuster.pwned.models import (
    BreachVerdict,
    ErrorKind,
    PasswordDigest,
    RangeEntry,
    RangeQueryResult,
    RiskLevel,
    VerdictStatus,
)
from breachbuster.pwned.digest import (
    digest_from_hash,
    match_suffix,
    parse_range_body,
    prepare_query,
)
from breachbuster.pwned.client import HashRangeClient, PwnedPasswordsClient

__all__ = [
    "BreachVerdict",
    "ErrorKind",
    "HashRangeClient",
    "PasswordDigest",
    "PwnedPasswordsClient",
    "RangeEntry",
    "RangeQueryResult",
    "RiskLevel",
    "VerdictStatus",
    "digest_from_hash",
    "match_suffix",
    "parse_range_body",
    "prepare_query",
]
