"""
Password generator and strength analyzer.

Copyright (c) 2025 BreachBuster Security.
All rights reserved.
"""

from breachbuster.tools.generator import CharacterClass, generate_password
from breachbuster.tools.strength import StrengthLabel, StrengthReport, analyze_strength

__all__ = [
    "CharacterClass",
    "StrengthLabel",
    "StrengthReport",
    "analyze_strength",
    "generate_password",
]
