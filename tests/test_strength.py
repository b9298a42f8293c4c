"""
Tests for the password strength analyzer.
"""

import pytest

from breachbuster.tools.strength import StrengthLabel, analyze_strength


class TestAnalyzeStrength:

    @pytest.mark.parametrize("password,score,label", [
        ("", 0, StrengthLabel.EMPTY),
        ("Ab1!", 1, StrengthLabel.VERY_WEAK),
        ("abcdefgh", 2, StrengthLabel.WEAK),
        ("Abcdefg1!", 2, StrengthLabel.WEAK),
        ("Abcdefgh1!", 3, StrengthLabel.FAIR),
        ("abcdefghijkl1", 3, StrengthLabel.FAIR),
        ("Abcdefghijk1", 4, StrengthLabel.STRONG),
        ("Abcdefghijk1!", 4, StrengthLabel.STRONG),
        ("Abcdefghijklmn1!", 5, StrengthLabel.VERY_STRONG),
    ])
    def test_ladder(self, password, score, label):
        report = analyze_strength(password)

        assert report.score == score
        assert report.label is label

    def test_requirements(self):
        report = analyze_strength("abc")

        assert report.requirements == {
            "length": False,
            "uppercase": False,
            "lowercase": True,
            "numbers": False,
            "symbols": False,
        }
        assert report.percent == 20
        assert len(report.feedback) == 4

    def test_all_met(self):
        report = analyze_strength("Correct-Horse-42-Battery")

        assert report.percent == 100
        assert report.feedback == []

    def test_to_dict(self):
        data = analyze_strength("Abcdefghijk1").to_dict()

        assert data["label"] == "Strong"
        assert data["score"] == 4
        assert data["percent"] == 80
