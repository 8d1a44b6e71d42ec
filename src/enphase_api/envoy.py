"""Client for a local Enphase Envoy gateway.

The Envoy serves HTTPS with a self-signed certificate, so the default
session skips certificate validation.  A JWT from
:meth:`enphase_api.Entrez.generate_token` must be presented with
:meth:`Envoy.authenticate` before power commands are accepted::

    async with Envoy("192.168.1.50") as envoy:
        await envoy.authenticate(token)
        await envoy.set_power_state("482233445566", PowerState.OFF)
        powered_on = await envoy.get_power_state("482233445566")
"""

from __future__ import annotations

import logging

import aiohttp

from enphase_api import _transport
from enphase_api._constants import POWER_ACCEPT, POWER_CONTENT_TYPE, VALID_TOKEN_TEXT
from enphase_api.errors import AuthenticationError, InvalidResponseError
from enphase_api.models import PowerState, PowerStatusResponse, power_payload

_LOGGER = logging.getLogger(__name__)

_HTTP_OK = 200
_HTTP_NO_CONTENT = 204


class Envoy:
    """Envoy gateway client.

    Pass *session* to reuse an existing :class:`aiohttp.ClientSession`;
    it is then the caller's job to disable certificate checks on it and
    to close it.
    """

    def __init__(self, host: str, *, session: aiohttp.ClientSession | None = None) -> None:
        self._base_url = f"https://{host}"
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> Envoy:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @property
    def base_url(self) -> str:
        """``https://{host}``."""
        return self._base_url

    @property
    def session(self) -> aiohttp.ClientSession:
        """The HTTP session used for device requests (created on first use)."""
        if self._session is None:
            self._session = _transport.make_session(verify_ssl=False)
        return self._session

    async def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def authenticate(self, token: str) -> None:
        """Validate *token* against ``/auth/check_jwt``.

        Succeeds only when the device answers 200 *and* the body says
        ``Valid token``.  Otherwise raises :class:`AuthenticationError`
        carrying the device's reply.
        """
        _LOGGER.debug("Authenticating Envoy via JWT")
        status, body = await _transport.request(
            self.session,
            "GET",
            f"{self._base_url}/auth/check_jwt",
            headers={"Authorization": f"Bearer {token}"},
        )
        if status == _HTTP_OK and VALID_TOKEN_TEXT in body:
            _LOGGER.debug("JWT accepted")
            return
        if not body:
            raise AuthenticationError("Invalid token or authentication failed")
        raise AuthenticationError(f"JWT check failed: {body.strip()}")

    async def set_power_state(self, serial: str, state: PowerState) -> None:
        """Turn the inverter *serial* on or off.

        Raises :class:`InvalidResponseError` unless the device answers
        ``204 No Content``.
        """
        _LOGGER.debug("Setting power state of %s to %s", serial, state.name)
        status, _ = await _transport.request(
            self.session,
            "PUT",
            self._power_url(serial),
            data=power_payload(state),
            headers={"Content-Type": POWER_CONTENT_TYPE},
        )
        if status != _HTTP_NO_CONTENT:
            raise InvalidResponseError(f"Failed to set power state: HTTP {status}")
        _LOGGER.debug("Power state set successfully")

    async def get_power_state(self, serial: str) -> bool:
        """Return ``True`` if the inverter *serial* is powered on.

        Raises :class:`JsonError` if the reply is not a valid power status.
        """
        _LOGGER.debug("Getting power state of %s", serial)
        _, body = await _transport.request(
            self.session,
            "GET",
            self._power_url(serial),
            headers={"Accept": POWER_ACCEPT},
        )
        status = PowerStatusResponse.from_json(body)
        _LOGGER.debug("Parsed power status: %s", status)
        return status.powered_on

    def _power_url(self, serial: str) -> str:
        return f"{self._base_url}/ivp/mod/{serial}/mode/power"
