"""
Tests for verdicts, risk levels and the exception hierarchy.
"""

import pytest

from breachbuster.exceptions import (
    BreachBusterError,
    CorpusUnavailableError,
    EmptyInputError,
    NoCharacterClassSelectedError,
    QueryTransportError,
    ValidationError,
)
from breachbuster.pwned.models import (
    BreachVerdict,
    ErrorKind,
    RangeEntry,
    RangeQueryResult,
    RiskLevel,
    VerdictStatus,
)


class TestBreachVerdict:
    """Test verdict construction and serialization."""

    def test_breached(self):
        verdict = BreachVerdict.breached(3861493, hash_prefix="CBFDA")

        assert verdict.status is VerdictStatus.BREACHED
        assert verdict.risk_level is RiskLevel.CRITICAL
        assert verdict.message == "This password has been found in 3,861,493 data breaches."

    def test_clean(self):
        verdict = BreachVerdict.clean()

        assert verdict.status is VerdictStatus.CLEAN
        assert verdict.is_breached is False
        assert verdict.exposure_count == 0
        assert verdict.risk_level is RiskLevel.SAFE

    @pytest.mark.parametrize("kind", list(ErrorKind))
    def test_failed_never_reads_as_clean(self, kind):
        verdict = BreachVerdict.failed(kind)

        assert verdict.status is VerdictStatus.ERROR
        assert verdict.is_breached is None
        assert verdict.is_breached is not False
        assert verdict.exposure_count is None
        assert verdict.risk_level is None
        assert "not been found" not in verdict.message

    def test_immutable(self):
        verdict = BreachVerdict.clean()

        with pytest.raises(AttributeError):
            verdict.is_breached = True

    def test_to_dict(self):
        data = BreachVerdict.failed(ErrorKind.CORPUS_UNAVAILABLE, hash_prefix="CBFDA").to_dict()

        assert data["status"] == "error"
        assert data["error"] == "corpus_unavailable"
        assert data["is_breached"] is None
        assert data["hash_prefix"] == "CBFDA"


class TestRiskLevel:
    """Test exposure count thresholds."""

    @pytest.mark.parametrize("count,level", [
        (0, RiskLevel.SAFE),
        (1, RiskLevel.LOW),
        (9, RiskLevel.LOW),
        (10, RiskLevel.MEDIUM),
        (99, RiskLevel.MEDIUM),
        (100, RiskLevel.HIGH),
        (9999, RiskLevel.HIGH),
        (10000, RiskLevel.CRITICAL),
    ])
    def test_thresholds(self, count, level):
        assert RiskLevel.from_count(count) is level


class TestRangeQueryResult:

    def test_to_dict(self):
        result = RangeQueryResult("CBFDA", [RangeEntry("a" * 35, 3)])

        assert result.to_dict() == {
            "prefix": "CBFDA",
            "entry_count": 1,
            "entries": [{"suffix": "a" * 35, "count": 3}],
        }


class TestExceptions:
    """Test the error taxonomy."""

    @pytest.mark.parametrize("exc_type", [
        EmptyInputError,
        CorpusUnavailableError,
        QueryTransportError,
        NoCharacterClassSelectedError,
    ])
    def test_hierarchy(self, exc_type):
        assert issubclass(exc_type, BreachBusterError)

    def test_no_character_class_is_validation_error(self):
        exc = NoCharacterClassSelectedError()

        assert isinstance(exc, ValidationError)
        assert exc.code == "NO_CHARACTER_CLASS"
        assert exc.errors

    def test_validation_error_accepts_single_message(self):
        exc = ValidationError("Hash prefix is required")

        assert exc.errors == ["Hash prefix is required"]
        assert str(exc) == "Invalid request format | Hash prefix is required"

    def test_corpus_status(self):
        exc = CorpusUnavailableError(status=503)

        assert exc.status == 503
        assert exc.code == "CORPUS_UNAVAILABLE"
