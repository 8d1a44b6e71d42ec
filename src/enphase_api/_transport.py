"""Internal aiohttp helpers shared by the Entrez and Envoy clients."""

from __future__ import annotations

import logging

import aiohttp

from enphase_api._constants import REQUEST_TIMEOUT, USER_AGENT
from enphase_api.errors import TransportError

_LOGGER = logging.getLogger(__name__)


def make_session(*, verify_ssl: bool = True) -> aiohttp.ClientSession:
    """Create a cookie-retaining session with the library's defaults.

    ``unsafe=True`` lets the jar keep cookies set by bare IP addresses,
    which is how Envoy gateways are usually reached on a LAN.  With
    *verify_ssl* ``False`` the connector skips certificate validation.
    """
    connector = aiohttp.TCPConnector(ssl=False) if not verify_ssl else None
    return aiohttp.ClientSession(
        connector=connector,
        cookie_jar=aiohttp.CookieJar(unsafe=True),
        timeout=aiohttp.ClientTimeout(total=REQUEST_TIMEOUT),
        headers={"User-Agent": USER_AGENT},
    )


async def request(
    session: aiohttp.ClientSession,
    method: str,
    url: str,
    *,
    data: str | dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
) -> tuple[int, str]:
    """Perform one HTTP exchange and return ``(status, body_text)``.

    The status is never checked here.  Connection, TLS and timeout
    failures are raised as :class:`TransportError`.
    """
    _LOGGER.debug("%s %s", method, url)
    try:
        async with session.request(method, url, data=data, headers=headers) as resp:
            body = await resp.text(errors="replace")
            status = resp.status
    except TimeoutError as e:
        raise TransportError(f"{method} {url} timed out") from e
    except aiohttp.ClientError as e:
        raise TransportError(f"{method} {url}: {e}") from e
    _LOGGER.debug("Status code: %s", status)
    return status, body
