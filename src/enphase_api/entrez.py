"""Client for the Enphase Entrez cloud token service.

Entrez issues the JWTs that local Envoy gateways accept.  Obtaining one
is a two-step flow on the same cookie-bearing session::

    from enphase_api import Entrez

    async with Entrez() as entrez:
        await entrez.login_with_env()
        token = await entrez.generate_token("My Site", "122233445566", True)
"""

from __future__ import annotations

import logging
import os

import aiohttp

from enphase_api import _transport
from enphase_api._constants import (
    AUTH_FLOW,
    DEFAULT_ENTREZ_URL,
    ENTREZ_PASSWORD_ENV,
    ENTREZ_USERNAME_ENV,
    TOKEN_END,
    TOKEN_MARKER,
)
from enphase_api.errors import ConfigurationError, InvalidResponseError
from enphase_api.models import normalize_site_name, uncommissioned_value

_LOGGER = logging.getLogger(__name__)


class Entrez:
    """Entrez cloud service client.

    The client owns an :class:`aiohttp.ClientSession` whose cookie jar
    carries the login session into :meth:`generate_token`; both calls
    must go through the same instance.  Pass *session* to supply your
    own (it must keep cookies); a caller-supplied session is never
    closed by the client.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_ENTREZ_URL,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> Entrez:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @property
    def base_url(self) -> str:
        """Base URL requests are sent to, without a trailing slash."""
        return self._base_url

    @property
    def session(self) -> aiohttp.ClientSession:
        """The HTTP session holding the login cookie (created on first use)."""
        if self._session is None:
            self._session = _transport.make_session()
        return self._session

    async def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    # ------------------------------------------------------------------
    # Login
    # ------------------------------------------------------------------

    async def login(self, username: str, password: str) -> None:
        """Log in and store the session cookie on :attr:`session`.

        The response status and body are not inspected: rejected
        credentials are only noticed when :meth:`generate_token` (or the
        Envoy) fails later.  Raises :class:`TransportError` if the
        request itself cannot be completed.
        """
        _LOGGER.debug("Logging in to Enphase Entrez with %s", username)
        await _transport.request(
            self.session,
            "POST",
            f"{self._base_url}/login",
            data={"username": username, "password": password, "authFlow": AUTH_FLOW},
        )

    async def login_with_env(self) -> None:
        """Log in with ``ENTREZ_USERNAME`` and ``ENTREZ_PASSWORD``.

        Raises :class:`ConfigurationError` before any request is made if
        either variable is unset or empty.
        """
        username = os.environ.get(ENTREZ_USERNAME_ENV)
        if not username:
            raise ConfigurationError(f"{ENTREZ_USERNAME_ENV} environment variable not set")
        password = os.environ.get(ENTREZ_PASSWORD_ENV)
        if not password:
            raise ConfigurationError(f"{ENTREZ_PASSWORD_ENV} environment variable not set")
        await self.login(username, password)

    # ------------------------------------------------------------------
    # Token exchange
    # ------------------------------------------------------------------

    async def generate_token(self, site_name: str, serial_number: str, commissioned: bool) -> str:
        """Request a JWT for the Envoy *serial_number* at *site_name*.

        Requires a prior :meth:`login` on this instance.  The response is
        an HTML page regardless of status; the token is scraped from it
        with :func:`extract_token`.

        Raises:
            InvalidResponseError: If no token is found in the page.
            TransportError: If the request cannot be completed.
        """
        _LOGGER.debug("Generating token for site: %s, serial: %s", site_name, serial_number)
        _, body = await _transport.request(
            self.session,
            "POST",
            f"{self._base_url}/entrez_tokens",
            data={
                "uncommissioned": uncommissioned_value(commissioned),
                "Site": normalize_site_name(site_name),
                "serialNum": serial_number,
            },
        )
        token = extract_token(body)
        _LOGGER.debug("Token generated successfully")
        return token


def extract_token(html: str) -> str:
    """Return the JWT embedded in the Entrez token page.

    Takes the text after ``id="JWTToken"``, past the end of that opening
    tag, up to the next ``</textarea>``, stripped of whitespace.  Raises
    :class:`InvalidResponseError` if a boundary is missing or the token
    is empty.
    """
    _, found, rest = html.partition(TOKEN_MARKER)
    if found:
        _, found, inner = rest.partition(">")
        if found:
            token_text, found, _ = inner.partition(TOKEN_END)
            token = token_text.strip()
            if found and token:
                return token
    raise InvalidResponseError("Failed to extract token from response")
