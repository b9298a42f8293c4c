"""
Lookup Service HTTP API.

Copyright (c) 2025 BreachBuster Security.
All rights reserved.
"""

from breachbuster.server.app import LookupServer, create_app
from breachbuster.server.validation import ValidationResult

__all__ = [
    "LookupServer",
    "ValidationResult",
    "create_app",
]
