"""
Data models for Pwned Passwords range queries.

Every object here is transient and scoped to a single check. None of
them carries the plaintext password.

Copyright (c) 2025 BreachBuster Security.
All rights reserved.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

PREFIX_LENGTH = 5
HASH_LENGTH = 40


class RiskLevel(str, Enum):
    """Risk level based on password exposure."""

    SAFE = "safe"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @classmethod
    def from_count(cls, occurrences: int) -> "RiskLevel":
        if occurrences == 0:
            return cls.SAFE
        elif occurrences < 10:
            return cls.LOW
        elif occurrences < 100:
            return cls.MEDIUM
        elif occurrences < 10000:
            return cls.HIGH
        else:
            return cls.CRITICAL


class VerdictStatus(str, Enum):
    """Outcome of a breach check."""

    BREACHED = "breached"
    CLEAN = "clean"
    ERROR = "error"


class ErrorKind(str, Enum):
    """Why a check could not be completed."""

    CORPUS_UNAVAILABLE = "corpus_unavailable"
    TRANSPORT = "transport"
    MALFORMED_RESPONSE = "malformed_response"


@dataclass(frozen=True)
class PasswordDigest:
    """SHA-1 digest of a candidate password split for a range query.

    ``prefix`` is public and safe to transmit. ``suffix`` is private and
    only ever compared in local memory.
    """

    full_hash: str
    prefix: str
    suffix: str

    def __repr__(self) -> str:
        # Keep the suffix out of tracebacks and log records
        return f"PasswordDigest(prefix={self.prefix!r})"


@dataclass(frozen=True)
class RangeEntry:
    """One ``SUFFIX:COUNT`` record from a corpus range response."""

    suffix: str
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"suffix": self.suffix, "count": self.count}


@dataclass
class RangeQueryResult:
    """All corpus suffixes sharing one prefix."""

    prefix: str
    entries: list[RangeEntry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "prefix": self.prefix,
            "entry_count": len(self.entries),
            "entries": [e.to_dict() for e in self.entries],
        }


@dataclass(frozen=True)
class BreachVerdict:
    """Result of checking a password against the breach corpus.

    ``is_breached`` and ``exposure_count`` are None when the check could
    not be completed, so a failed scan can never read as clean.
    """

    is_breached: bool | None
    exposure_count: int | None
    error_kind: ErrorKind | None = None
    hash_prefix: str = ""  # Only first 5 chars of SHA-1
    checked_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def breached(cls, count: int, hash_prefix: str = "") -> "BreachVerdict":
        return cls(is_breached=True, exposure_count=count, hash_prefix=hash_prefix)

    @classmethod
    def clean(cls, hash_prefix: str = "") -> "BreachVerdict":
        return cls(is_breached=False, exposure_count=0, hash_prefix=hash_prefix)

    @classmethod
    def failed(cls, kind: ErrorKind, hash_prefix: str = "") -> "BreachVerdict":
        return cls(is_breached=None, exposure_count=None, error_kind=kind, hash_prefix=hash_prefix)

    @property
    def status(self) -> VerdictStatus:
        if self.error_kind is not None:
            return VerdictStatus.ERROR
        return VerdictStatus.BREACHED if self.is_breached else VerdictStatus.CLEAN

    @property
    def risk_level(self) -> RiskLevel | None:
        """Determine risk level based on occurrences."""
        if self.status is VerdictStatus.ERROR:
            return None
        return RiskLevel.from_count(self.exposure_count)

    @property
    def message(self) -> str:
        """Get human-readable result description."""
        if self.status is VerdictStatus.ERROR:
            return "Scan failed. The password could not be checked, please try again."
        if self.is_breached:
            return f"This password has been found in {self.exposure_count:,} data breaches."
        return "This password has not been found in any known data breaches."

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        risk = self.risk_level
        return {
            "status": self.status.value,
            "is_breached": self.is_breached,
            "count": self.exposure_count,
            "risk_level": risk.value if risk else None,
            "message": self.message,
            "error": self.error_kind.value if self.error_kind else None,
            "hash_prefix": self.hash_prefix,
            "checked_at": self.checked_at.isoformat(),
        }
