"""
Request validation for the Lookup Service.

Payloads are parsed once at the boundary into a tagged result. Handlers
only ever see the validated value.

Copyright (c) 2025 BreachBuster Security.
All rights reserved.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from breachbuster.pwned.digest import validate_prefix

T = TypeVar("T")


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    """Either a validated value or a list of error messages."""

    value: T | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @classmethod
    def success(cls, value: T) -> "ValidationResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, *errors: str) -> "ValidationResult[T]":
        return cls(errors=list(errors))


def validate_password_request(data: Any) -> ValidationResult[str]:
    """Validate ``{"password": "<non-empty string>"}``."""
    if not isinstance(data, dict):
        return ValidationResult.failure("Request body must be a JSON object")

    password = data.get("password")
    if password is None:
        return ValidationResult.failure("Password is required")
    if not isinstance(password, str):
        return ValidationResult.failure("Password must be a string")
    if not password.strip():
        return ValidationResult.failure("Password is required")

    return ValidationResult.success(password)


def validate_range_request(data: Any) -> ValidationResult[str]:
    """Validate ``{"hashPrefix": "<5 hex chars>"}`` and upper-case it."""
    if not isinstance(data, dict):
        return ValidationResult.failure("Request body must be a JSON object")

    prefix = data.get("hashPrefix")
    if prefix is None:
        return ValidationResult.failure("Hash prefix is required")

    errors = validate_prefix(prefix)
    if errors:
        return ValidationResult.failure(*errors)

    return ValidationResult.success(prefix.upper())
