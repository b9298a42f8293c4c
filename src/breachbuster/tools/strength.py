"""
Password strength analyzer.

Copyright (c) 2025 BreachBuster Security.
All rights reserved.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

RECOMMENDED_LENGTH = 12
SYMBOL_PATTERN = re.compile(r"[!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>/?]")


class StrengthLabel(str, Enum):
    """Strength rating, weakest first."""

    EMPTY = "Enter password"
    VERY_WEAK = "Very Weak"
    WEAK = "Weak"
    FAIR = "Fair"
    STRONG = "Strong"
    VERY_STRONG = "Very Strong"


REQUIREMENT_HINTS = {
    "length": f"Use at least {RECOMMENDED_LENGTH} characters.",
    "uppercase": "Add an uppercase letter.",
    "lowercase": "Add a lowercase letter.",
    "numbers": "Add a number.",
    "symbols": "Add a symbol.",
}


@dataclass
class StrengthReport:
    """Strength of a single password."""

    score: int
    label: StrengthLabel
    requirements: dict[str, bool] = field(default_factory=dict)

    @property
    def met_count(self) -> int:
        return sum(self.requirements.values())

    @property
    def percent(self) -> int:
        return self.met_count * 20

    @property
    def feedback(self) -> list[str]:
        return [REQUIREMENT_HINTS[name] for name, met in self.requirements.items() if not met]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "score": self.score,
            "label": self.label.value,
            "percent": self.percent,
            "requirements": self.requirements,
            "feedback": self.feedback,
        }


def analyze_strength(password: str) -> StrengthReport:
    """Rate a password on a 0-5 scale."""
    length = len(password)
    requirements = {
        "length": length >= RECOMMENDED_LENGTH,
        "uppercase": any(c.isascii() and c.isupper() for c in password),
        "lowercase": any(c.isascii() and c.islower() for c in password),
        "numbers": any(c.isascii() and c.isdigit() for c in password),
        "symbols": bool(SYMBOL_PATTERN.search(password)),
    }
    met = sum(requirements.values())

    if length == 0:
        score, label = 0, StrengthLabel.EMPTY
    elif length < 8:
        score, label = 1, StrengthLabel.VERY_WEAK
    elif met < 3 or length < 10:
        score, label = 2, StrengthLabel.WEAK
    elif met < 4 or length < 12:
        score, label = 3, StrengthLabel.FAIR
    elif met == 5 and length >= 16:
        score, label = 5, StrengthLabel.VERY_STRONG
    else:
        score, label = 4, StrengthLabel.STRONG

    return StrengthReport(score=score, label=label, requirements=requirements)
