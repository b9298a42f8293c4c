"""Test data and fakes shared across test modules."""

from breachbuster.pwned.digest import match_suffix, parse_range_body, prepare_query

PASSWORD = "password123"
PASSWORD_HASH = "CBFDAC6008F9CAB4083784CBD1874F76618D2A97"
PREFIX = "CBFDA"
SUFFIX = "c6008f9cab4083784cbd1874f76618d2a97"
EXPOSURES = 3861493

# Corpus casing is upper-case with CRLF line endings
CORPUS_BODY = (
    "0018A45C4D1DEF81644B54AB7F969B88D65:1\r\n"
    "00D4F6E8FA6EECAD2A3AA415EEC418D38EC:2\r\n"
    "C6008F9CAB4083784CBD1874F76618D2A97:3861493\r\n"
    "FFFFFF26E1F25CF52B41C0F5E0D1E0B9E6B:17\r\n"
)


class FakeCorpusClient:
    """Stands in for PwnedPasswordsClient in server and CLI tests."""

    def __init__(self, body: str = CORPUS_BODY, error: Exception | None = None):
        self.body = body
        self.error = error
        self.prefixes: list[str] = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return False

    async def fetch_range(self, prefix):
        self.prefixes.append(prefix)
        if self.error:
            raise self.error
        return parse_range_body(prefix, self.body)

    async def check_digest(self, digest):
        return match_suffix(await self.fetch_range(digest.prefix), digest.suffix)

    async def check_password(self, password):
        return await self.check_digest(prepare_query(password))
