"""
BreachBuster Lookup Service - HTTP API for password breach checks.

Copyright (c) 2025 BreachBuster Security.
All rights reserved.
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable

from flask import Flask, jsonify, request

from breachbuster import __version__
from breachbuster.config import BreachBusterConfig
from breachbuster.exceptions import CorpusUnavailableError
from breachbuster.pwned.client import PwnedPasswordsClient
from breachbuster.pwned.digest import match_suffix, prepare_query
from breachbuster.server.validation import (
    validate_password_request,
    validate_range_request,
)

logger = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "Invalid request format"
SCAN_FAILED_MESSAGE = "Failed to check password. Please try again later."


class LookupServer:
    """REST API server brokering range queries to the breach corpus.

    Provides endpoints for:
    - Server-side matching (POST /api/check-password)
    - Client-side matching (POST /api/check-password-range)
    - Health check (GET /health)

    The plaintext and the full hash only live inside a single request
    handler and are never logged or forwarded.
    """

    def __init__(
        self,
        config: BreachBusterConfig | None = None,
        client_factory: Callable[[], PwnedPasswordsClient] | None = None,
    ):
        self.config = config or BreachBusterConfig.from_env()
        self.client_factory = client_factory or (lambda: PwnedPasswordsClient(self.config))

        self.app = Flask(__name__)
        self._setup_routes()

    def _fetch_range(self, prefix: str):
        async def _fetch():
            async with self.client_factory() as client:
                return await client.fetch_range(prefix)

        return asyncio.run(_fetch())

    def _setup_routes(self):
        """Setup Flask routes."""

        @self.app.after_request
        def after_request(response):
            response.headers["X-BreachBuster-Version"] = __version__
            response.headers["X-Content-Type-Options"] = "nosniff"
            response.headers["X-Frame-Options"] = "DENY"
            response.headers["Cache-Control"] = "no-store"
            return response

        def invalid(errors: list[str]):
            return jsonify({
                "success": False,
                "message": INVALID_REQUEST_MESSAGE,
                "errors": errors,
            }), 400

        def scan_failed():
            return jsonify({"success": False, "message": SCAN_FAILED_MESSAGE}), 500

        # ================================================================
        # Health check
        # ================================================================

        @self.app.route("/health")
        def health():
            return jsonify({"status": "ok", "timestamp": datetime.now().isoformat()})

        # ================================================================
        # Breach check endpoints
        # ================================================================

        @self.app.route("/api/check-password", methods=["POST"])
        def check_password():
            """Hash, query and match on the server."""
            validated = validate_password_request(request.get_json(silent=True))
            if not validated.ok:
                return invalid(validated.errors)

            digest = prepare_query(validated.value)

            try:
                result = self._fetch_range(digest.prefix)
            except CorpusUnavailableError as e:
                logger.error(f"Password check failed for prefix {digest.prefix}: {e}")
                return scan_failed()

            verdict = match_suffix(result, digest.suffix)
            return jsonify({
                "success": True,
                "isBreached": verdict.is_breached,
                "count": verdict.exposure_count,
                "message": verdict.message,
            })

        @self.app.route("/api/check-password-range", methods=["POST"])
        def check_password_range():
            """Return every suffix for a prefix; the caller matches locally."""
            validated = validate_range_request(request.get_json(silent=True))
            if not validated.ok:
                return invalid(validated.errors)

            try:
                result = self._fetch_range(validated.value)
            except CorpusUnavailableError as e:
                logger.error(f"Range query failed for prefix {validated.value}: {e}")
                return scan_failed()

            return jsonify({
                "success": True,
                "hashSuffixes": [entry.to_dict() for entry in result.entries],
            })

    def run(self, host: str | None = None, port: int | None = None, debug: bool = False):
        """Run the server."""
        self.app.run(
            host=host or self.config.host,
            port=port or self.config.port,
            debug=debug,
        )


def create_app(config: BreachBusterConfig | None = None) -> Flask:
    """Application factory for WSGI servers."""
    return LookupServer(config=config).app


# CLI command for running server
def add_server_commands(cli_group):
    """Add server commands to a Click group."""
    import click
    from rich.console import Console

    console = Console()

    @cli_group.group()
    def server():
        """Lookup Service management."""
        pass

    @server.command("run")
    @click.option("--host", envvar="BREACHBUSTER_HOST", help="Host to bind to")
    @click.option("--port", "-p", type=int, envvar="BREACHBUSTER_PORT", help="Port to listen on")
    @click.option("--debug", is_flag=True, help="Enable debug mode")
    def server_run(host: str | None, port: int | None, debug: bool):
        """Run the Lookup Service API server.

        Examples:
            breachbuster server run
            breachbuster server run --host 0.0.0.0 --port 9000
        """
        config = BreachBusterConfig.from_env()
        if host:
            config.host = host
        if port:
            config.port = port

        errors = config.validate()
        if errors:
            for error in errors:
                console.print(f"[red]{error}[/red]")
            raise SystemExit(1)

        lookup_server = LookupServer(config=config)

        console.print(f"[green]Starting Lookup Service on {config.host}:{config.port}[/green]")
        console.print(f"Corpus: [cyan]{config.corpus_url}[/cyan]")
        if debug:
            console.print("[yellow]Warning: Debug mode enabled[/yellow]")

        lookup_server.run(host=config.host, port=config.port, debug=debug)

    return server
