"""
Pwned Passwords clients.

PwnedPasswordsClient talks to the external breach corpus and is what
the Lookup Service runs server-side. HashRangeClient talks to the
Lookup Service and keeps suffix matching on the caller's side, so the
service only ever sees a 5 character prefix.

Copyright (c) 2025 BreachBuster Security.
All rights reserved.
"""

import asyncio
import logging
from typing import Any

import aiohttp
import httpx

from breachbuster.config import BreachBusterConfig
from breachbuster.exceptions import (
    CorpusUnavailableError,
    QueryTransportError,
    ValidationError,
)
from breachbuster.pwned.digest import (
    digest_from_hash,
    match_suffix,
    normalize_prefix,
    parse_range_body,
    prepare_query,
)
from breachbuster.pwned.models import (
    BreachVerdict,
    ErrorKind,
    PasswordDigest,
    RangeEntry,
    RangeQueryResult,
)

logger = logging.getLogger(__name__)


class PwnedPasswordsClient:
    """Client for the Pwned Passwords range API.

    Only the first 5 characters of the SHA-1 hash are ever sent. There
    is no retry: a failed corpus call surfaces immediately.
    """

    def __init__(
        self,
        config: BreachBusterConfig | None = None,
        session: aiohttp.ClientSession | None = None,
    ):
        """Initialize corpus client.

        Args:
            config: Configuration (loads from env if not provided)
            session: Existing HTTP session to reuse
        """
        self.config = config or BreachBusterConfig.from_env()
        self._session = session

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure HTTP session exists."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "PwnedPasswordsClient":
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _headers(self) -> dict[str, str]:
        headers = {"User-Agent": self.config.user_agent}
        if self.config.add_padding:
            headers["Add-Padding"] = "true"
        return headers

    async def _request(self, prefix: str) -> str:
        """Fetch the raw range body for a prefix.

        Raises:
            CorpusUnavailableError: network failure, timeout or non-2xx
        """
        session = await self._ensure_session()
        url = f"{self.config.corpus_url.rstrip('/')}/range/{prefix}"

        try:
            async with session.get(
                url,
                headers=self._headers(),
                timeout=aiohttp.ClientTimeout(total=self.config.timeout),
            ) as response:
                status = response.status

                if not 200 <= status < 300:
                    logger.warning(f"Corpus returned HTTP {status} for prefix {prefix}")
                    raise CorpusUnavailableError(
                        f"Breach corpus responded with status {status}",
                        status=status,
                    )

                # Undecodable bytes become U+FFFD and the line is dropped by the parser
                return await response.text(errors="replace")

        except UnicodeDecodeError as e:
            logger.warning(f"Corpus body for prefix {prefix} could not be decoded")
            raise CorpusUnavailableError("Breach corpus returned an undecodable body") from e
        except asyncio.TimeoutError as e:
            logger.warning(f"Corpus request timed out for prefix {prefix}")
            raise CorpusUnavailableError("Breach corpus request timed out") from e
        except aiohttp.ClientError as e:
            logger.warning(f"Corpus request failed for prefix {prefix}: {e}")
            raise CorpusUnavailableError("Breach corpus unreachable", detail=str(e)) from e

    async def fetch_range(self, prefix: str) -> RangeQueryResult:
        """Get every suffix the corpus holds for a prefix.

        Args:
            prefix: 5 hex characters, any case

        Returns:
            RangeQueryResult with lower-case suffixes
        """
        prefix = normalize_prefix(prefix)
        body = await self._request(prefix)
        result = parse_range_body(prefix, body)
        logger.debug(f"Prefix {prefix}: {len(result)} corpus entries")
        return result

    async def check_digest(self, digest: PasswordDigest) -> BreachVerdict:
        """Check an already-split digest against the corpus."""
        result = await self.fetch_range(digest.prefix)
        return match_suffix(result, digest.suffix)

    async def check_password(self, password: str) -> BreachVerdict:
        """Check if a password has been exposed in data breaches.

        Args:
            password: Password to check (NOT stored or logged)

        Raises:
            EmptyInputError: empty or whitespace-only password
            CorpusUnavailableError: corpus could not be queried
        """
        digest = prepare_query(password)

        # Clear the password from this frame
        password = None  # noqa: F841

        return await self.check_digest(digest)

    async def check_password_hash(self, sha1_hash: str) -> BreachVerdict:
        """Check a pre-computed SHA-1 hash against Pwned Passwords."""
        return await self.check_digest(digest_from_hash(sha1_hash))


class HashRangeClient:
    """Client for the Lookup Service.

    ``check_password`` sends only the hash prefix and matches the suffix
    locally. ``check_password_remote`` uses the server-side matching
    contract, which hands the plaintext to the first-party server.
    """

    RANGE_PATH = "/api/check-password-range"
    CHECK_PATH = "/api/check-password"

    def __init__(
        self,
        config: BreachBusterConfig | None = None,
        service_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or BreachBusterConfig.from_env()
        self.service_url = (service_url or self.config.service_url).rstrip("/")
        self._transport = transport

    prepare_query = staticmethod(prepare_query)
    match_suffix = staticmethod(match_suffix)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.service_url,
            timeout=self.config.timeout,
            headers={"User-Agent": self.config.user_agent},
            transport=self._transport,
        )

    async def _post(self, path: str, payload: dict[str, Any]) -> httpx.Response:
        try:
            async with self._client() as client:
                return await client.post(path, json=payload)
        except httpx.HTTPError as e:
            logger.warning(f"Lookup service request to {path} failed: {e}")
            raise QueryTransportError(detail=str(e)) from e

    @staticmethod
    def _json_body(response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            raise QueryTransportError(
                "Lookup service returned a non-JSON body",
                status=response.status_code,
                malformed=True,
            ) from e

        if not isinstance(data, dict):
            raise QueryTransportError(
                "Lookup service returned an unexpected body",
                status=response.status_code,
                malformed=True,
            )
        return data

    async def submit_query(self, prefix: str) -> RangeQueryResult:
        """Send a hash prefix to the Lookup Service.

        Raises:
            ValidationError: prefix is not 5 hex characters (nothing is sent)
            QueryTransportError: network failure, non-2xx or malformed body
        """
        prefix = normalize_prefix(prefix)
        response = await self._post(self.RANGE_PATH, {"hashPrefix": prefix})

        if not response.is_success:
            raise QueryTransportError(
                f"Lookup service responded with status {response.status_code}",
                status=response.status_code,
            )

        data = self._json_body(response)
        suffixes = data.get("hashSuffixes")
        if data.get("success") is not True or not isinstance(suffixes, list):
            raise QueryTransportError(
                "Lookup service response is missing hashSuffixes",
                status=response.status_code,
                malformed=True,
            )

        result = RangeQueryResult(prefix=prefix)
        for item in suffixes:
            if (
                not isinstance(item, dict)
                or not isinstance(item.get("suffix"), str)
                or not isinstance(item.get("count"), int)
                or isinstance(item.get("count"), bool)
                or item["count"] < 0
            ):
                raise QueryTransportError(
                    "Lookup service returned a malformed suffix entry",
                    status=response.status_code,
                    malformed=True,
                )
            result.entries.append(RangeEntry(suffix=item["suffix"].lower(), count=item["count"]))

        return result

    async def check_password(self, password: str) -> BreachVerdict:
        """Check a password, matching the suffix on this side.

        Transport problems come back as an error verdict, never as clean.

        Raises:
            EmptyInputError: empty or whitespace-only password
        """
        digest = self.prepare_query(password)
        password = None  # noqa: F841

        return await self.check_digest(digest)

    async def check_digest(self, digest: PasswordDigest) -> BreachVerdict:
        """Submit the prefix of an already-split digest and match locally."""
        try:
            result = await self.submit_query(digest.prefix)
        except QueryTransportError as e:
            kind = ErrorKind.MALFORMED_RESPONSE if e.malformed else ErrorKind.TRANSPORT
            return BreachVerdict.failed(kind, hash_prefix=digest.prefix)

        return self.match_suffix(result, digest.suffix)

    async def check_password_remote(self, password: str) -> BreachVerdict:
        """Check a password with matching done by the Lookup Service.

        Raises:
            EmptyInputError: empty or whitespace-only password
            ValidationError: the service rejected the request
        """
        digest = self.prepare_query(password)

        try:
            response = await self._post(self.CHECK_PATH, {"password": password})
            data = self._json_body(response)
        except QueryTransportError as e:
            kind = ErrorKind.MALFORMED_RESPONSE if e.malformed else ErrorKind.TRANSPORT
            return BreachVerdict.failed(kind, hash_prefix=digest.prefix)

        if response.status_code == 400:
            raise ValidationError(data.get("errors") or [data.get("message", "Invalid request")])

        if not response.is_success or data.get("success") is not True:
            return BreachVerdict.failed(ErrorKind.CORPUS_UNAVAILABLE, hash_prefix=digest.prefix)

        count = data.get("count")
        if not isinstance(data.get("isBreached"), bool) or not isinstance(count, int):
            return BreachVerdict.failed(ErrorKind.MALFORMED_RESPONSE, hash_prefix=digest.prefix)

        if data["isBreached"]:
            return BreachVerdict.breached(count, hash_prefix=digest.prefix)
        return BreachVerdict.clean(hash_prefix=digest.prefix)

