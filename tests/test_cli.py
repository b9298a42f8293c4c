"""
Tests for the command-line interface.
"""

from unittest.mock import patch

import httpx
import pytest
from click.testing import CliRunner

from breachbuster import __version__
from breachbuster.cli import main
from breachbuster.exceptions import CorpusUnavailableError
from breachbuster.pwned.client import HashRangeClient

from tests.fixtures import PASSWORD, PASSWORD_HASH, PREFIX, SUFFIX, FakeCorpusClient


@pytest.fixture
def runner():
    return CliRunner()


def patch_corpus(fake):
    return patch("breachbuster.pwned.cli.PwnedPasswordsClient", lambda *args, **kwargs: fake)


class TestRoot:

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, runner):
        result = runner.invoke(main, ["--help"])

        for command in ("pwned", "generate", "strength", "server"):
            assert command in result.output


class TestPwnedCheck:

    def test_breached(self, runner):
        fake = FakeCorpusClient()

        with patch_corpus(fake):
            result = runner.invoke(main, ["pwned", "check", "-p", PASSWORD])

        assert result.exit_code == 0
        assert "3,861,493" in result.output
        assert fake.prefixes == [PREFIX]

    def test_hash(self, runner):
        with patch_corpus(FakeCorpusClient()):
            result = runner.invoke(main, ["pwned", "check", "--hash", PASSWORD_HASH, "--json"])

        assert result.exit_code == 0
        assert '"status": "breached"' in result.output

    def test_prompt(self, runner):
        with patch_corpus(FakeCorpusClient()):
            result = runner.invoke(main, ["pwned", "check"], input=f"{PASSWORD}\n")

        assert result.exit_code == 0
        assert "3,861,493" in result.output

    def test_corpus_unavailable_is_inconclusive(self, runner):
        with patch_corpus(FakeCorpusClient(error=CorpusUnavailableError(status=503))):
            result = runner.invoke(main, ["pwned", "check", "-p", PASSWORD])

        assert result.exit_code == 1
        assert "inconclusive" in result.output
        assert "Good news" not in result.output

    def test_invalid_hash(self, runner):
        result = runner.invoke(main, ["pwned", "check", "--hash", "CBFDA"])

        assert result.exit_code == 1
        assert "40 hex characters" in result.output

    def test_blank_password(self, runner):
        result = runner.invoke(main, ["pwned", "check", "-p", "   "])

        assert result.exit_code == 1
        assert "empty" in result.output

    def test_via_service(self, runner):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={
                "success": True,
                "hashSuffixes": [{"suffix": SUFFIX, "count": 3861493}],
            })

        def build(config, service_url=None):
            return HashRangeClient(config, service_url=service_url, transport=httpx.MockTransport(handler))

        with patch("breachbuster.pwned.cli.HashRangeClient", build):
            result = runner.invoke(main, ["pwned", "check", "-p", PASSWORD, "--service", "http://lookup.test"])

        assert result.exit_code == 0
        assert "3,861,493" in result.output
        assert str(requests[0].url) == "http://lookup.test/api/check-password-range"
        assert PASSWORD.encode() not in requests[0].content

    def test_via_service_failure_is_inconclusive(self, runner):
        def handler(request):
            return httpx.Response(200, text="<html>oops</html>")

        def build(config, service_url=None):
            return HashRangeClient(config, service_url=service_url, transport=httpx.MockTransport(handler))

        with patch("breachbuster.pwned.cli.HashRangeClient", build):
            result = runner.invoke(main, ["pwned", "check", "-p", PASSWORD, "--service", "http://lookup.test"])

        assert result.exit_code == 1
        assert "malformed_response" in result.output
        assert "inconclusive" in result.output


class TestPwnedRange:

    def test_range_json(self, runner):
        with patch_corpus(FakeCorpusClient()):
            result = runner.invoke(main, ["pwned", "range", "cbfda", "--json"])

        assert result.exit_code == 0
        assert '"entry_count": 4' in result.output

    def test_range_table(self, runner):
        with patch_corpus(FakeCorpusClient()):
            result = runner.invoke(main, ["pwned", "range", PREFIX, "--limit", "2"])

        assert result.exit_code == 0
        assert "Showing top 2 of 4 suffixes" in result.output

    def test_invalid_prefix(self, runner):
        result = runner.invoke(main, ["pwned", "range", "XYZ"])

        assert result.exit_code == 1

    def test_config(self, runner):
        result = runner.invoke(main, ["pwned", "config"])

        assert result.exit_code == 0
        assert "corpus_url" in result.output


class TestTools:

    def test_generate(self, runner):
        result = runner.invoke(main, ["generate", "-l", "20", "-n", "3"])

        assert result.exit_code == 0
        assert "Generated Passwords" in result.output

    def test_generate_no_classes(self, runner):
        result = runner.invoke(main, [
            "generate", "--no-uppercase", "--no-lowercase", "--no-digits", "--no-symbols",
        ])

        assert result.exit_code == 1
        assert "No character class selected" in result.output

    def test_generate_length_out_of_range(self, runner):
        result = runner.invoke(main, ["generate", "-l", "4"])

        assert result.exit_code == 2

    def test_generate_check(self, runner):
        with patch("breachbuster.tools.cli.PwnedPasswordsClient", lambda *a, **k: FakeCorpusClient()):
            result = runner.invoke(main, ["generate", "--check"])

        assert result.exit_code == 0
        assert "Clean" in result.output

    def test_strength(self, runner):
        result = runner.invoke(main, ["strength", "-p", "Abcdefghijklmn1!"])

        assert result.exit_code == 0
        assert "VERY STRONG" in result.output

    def test_strength_json(self, runner):
        result = runner.invoke(main, ["strength", "-p", "abc", "--json"])

        assert result.exit_code == 0
        assert '"label": "Very Weak"' in result.output


class TestServerCommand:

    def test_run(self, runner, monkeypatch):
        monkeypatch.delenv("BREACHBUSTER_USER_AGENT", raising=False)

        with patch("breachbuster.server.app.LookupServer.run") as run:
            result = runner.invoke(main, ["server", "run", "--port", "9001"])

        assert result.exit_code == 0
        run.assert_called_once()
        assert run.call_args.kwargs["port"] == 9001

    def test_run_rejects_bad_config(self, runner, monkeypatch):
        monkeypatch.setenv("BREACHBUSTER_USER_AGENT", "")

        with patch("breachbuster.server.app.LookupServer.run") as run:
            result = runner.invoke(main, ["server", "run"])

        assert result.exit_code == 1
        run.assert_not_called()
