"""Shared fixtures for BreachBuster tests."""

import pytest

from breachbuster.config import BreachBusterConfig


@pytest.fixture
def config():
    """Configuration pointing at test hosts."""
    return BreachBusterConfig(
        corpus_url="https://corpus.test",
        service_url="http://lookup.test",
        timeout=5.0,
    )
