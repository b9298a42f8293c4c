"""
BreachBuster - password security utilities.

Breach detection against the Pwned Passwords corpus using k-anonymity
range queries, a strength analyzer and a password generator.

Copyright (c) 2025 BreachBuster Security.
All rights reserved.
"""

__version__ = "1.0.0"

from breachbuster.exceptions import (
    BreachBusterError,
    CorpusUnavailableError,
    EmptyInputError,
    NoCharacterClassSelectedError,
    QueryTransportError,
    ValidationError,
)

__all__ = [
    "__version__",
    "BreachBusterError",
    "CorpusUnavailableError",
    "EmptyInputError",
    "NoCharacterClassSelectedError",
    "QueryTransportError",
    "ValidationError",
]
