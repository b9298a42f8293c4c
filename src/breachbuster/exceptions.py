"""
Exception hierarchy for BreachBuster.

All errors inherit from BreachBusterError so callers can catch the
full hierarchy with a single except clause.

    BreachBusterError
    ├── EmptyInputError
    ├── ValidationError
    │   └── NoCharacterClassSelectedError
    ├── QueryTransportError
    └── CorpusUnavailableError

Copyright (c) 2025 BreachBuster Security.
All rights reserved.
"""


class BreachBusterError(Exception):
    """Base exception for all BreachBuster errors."""

    default_code = ""

    def __init__(self, message: str = "", *, code: str = "", detail: str = ""):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} | {self.detail}"
        return self.message


class EmptyInputError(BreachBusterError):
    """Raised when an empty or whitespace-only password is submitted."""

    default_code = "EMPTY_INPUT"

    def __init__(self, message: str = "Password cannot be empty", **kwargs):
        super().__init__(message, **kwargs)


class ValidationError(BreachBusterError):
    """Raised when input does not have the expected shape.

    Carries a list of human-readable messages, one per problem found.
    """

    default_code = "VALIDATION"

    def __init__(self, errors: list[str] | str, message: str = "Invalid request format", **kwargs):
        if isinstance(errors, str):
            errors = [errors]
        super().__init__(message, detail="; ".join(errors), **kwargs)
        self.errors = list(errors)


class NoCharacterClassSelectedError(ValidationError):
    """Raised when the generator is invoked with no character classes."""

    default_code = "NO_CHARACTER_CLASS"

    def __init__(self, **kwargs):
        super().__init__(
            ["At least one character class must be selected"],
            message="No character class selected",
            **kwargs,
        )


class QueryTransportError(BreachBusterError):
    """Raised when the Lookup Service cannot be reached or answers badly."""

    default_code = "QUERY_TRANSPORT"

    def __init__(
        self,
        message: str = "Lookup service request failed",
        *,
        status: int | None = None,
        malformed: bool = False,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.status = status
        self.malformed = malformed


class CorpusUnavailableError(BreachBusterError):
    """Raised when the breach corpus is unreachable or returns non-2xx.

    ``status`` is None for network failures and timeouts.
    """

    default_code = "CORPUS_UNAVAILABLE"

    def __init__(self, message: str = "Breach corpus unavailable", *, status: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.status = status
