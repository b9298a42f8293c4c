"""
Runtime configuration for BreachBuster.

Copyright (c) 2025 BreachBuster Security.
All rights reserved.
"""

import os
from dataclasses import dataclass
from typing import Any

from breachbuster import __version__

DEFAULT_CORPUS_URL = "https://api.pwnedpasswords.com"
DEFAULT_USER_AGENT = f"BreachBuster-Security-App/{__version__}"


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("true", "yes", "1")


def _env_number(name: str, default, cast):
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        return cast(value)
    except ValueError:
        return default


@dataclass
class BreachBusterConfig:
    """Configuration shared by the CLI, the Lookup Service and its clients."""

    # External breach corpus
    corpus_url: str = DEFAULT_CORPUS_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = 30.0
    add_padding: bool = False

    # Lookup Service, as seen by the client
    service_url: str = "http://127.0.0.1:8080"

    # Lookup Service bind address
    host: str = "127.0.0.1"
    port: int = 8080

    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "BreachBusterConfig":
        """Load configuration from environment variables."""
        return cls(
            corpus_url=os.environ.get("BREACHBUSTER_CORPUS_URL", DEFAULT_CORPUS_URL),
            user_agent=os.environ.get("BREACHBUSTER_USER_AGENT", DEFAULT_USER_AGENT),
            timeout=_env_number("BREACHBUSTER_TIMEOUT", 30.0, float),
            add_padding=_env_bool("BREACHBUSTER_ADD_PADDING", False),
            service_url=os.environ.get("BREACHBUSTER_SERVICE_URL", "http://127.0.0.1:8080"),
            host=os.environ.get("BREACHBUSTER_HOST", "127.0.0.1"),
            port=_env_number("BREACHBUSTER_PORT", 8080, int),
            log_level=os.environ.get("BREACHBUSTER_LOG_LEVEL", "WARNING").upper(),
        )

    def validate(self) -> list[str]:
        """Validate configuration. Returns list of errors."""
        errors = []

        if not self.user_agent or not self.user_agent.strip():
            errors.append("User-Agent is required by the breach corpus")
        if self.timeout <= 0:
            errors.append("Timeout must be positive")
        if not 1 <= self.port <= 65535:
            errors.append(f"Port out of range: {self.port}")

        for name, url in (("Corpus URL", self.corpus_url), ("Service URL", self.service_url)):
            if not url.startswith(("http://", "https://")):
                errors.append(f"{name} must start with http:// or https://")

        return errors

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "corpus_url": self.corpus_url,
            "user_agent": self.user_agent,
            "timeout": self.timeout,
            "add_padding": self.add_padding,
            "service_url": self.service_url,
            "host": self.host,
            "port": self.port,
            "log_level": self.log_level,
        }
