"""Tests for enphase_api._transport."""

from __future__ import annotations

from unittest.mock import patch

import aiohttp
import pytest
from aiohttp import test_utils, web
from aioresponses import aioresponses

from enphase_api import _transport
from enphase_api._constants import USER_AGENT
from enphase_api.errors import TransportError


class TestMakeSession:
    async def test_unverified_session_disables_ssl(self):
        with patch("aiohttp.TCPConnector", wraps=aiohttp.TCPConnector) as connector:
            session = _transport.make_session(verify_ssl=False)
        try:
            connector.assert_called_once_with(ssl=False)
            assert isinstance(session.connector, aiohttp.TCPConnector)
        finally:
            await session.close()

    async def test_verified_session_uses_default_connector(self):
        with patch("aiohttp.TCPConnector", wraps=aiohttp.TCPConnector) as connector:
            session = _transport.make_session()
        try:
            connector.assert_not_called()
        finally:
            await session.close()

    async def test_defaults(self):
        session = _transport.make_session()
        try:
            assert isinstance(session.cookie_jar, aiohttp.CookieJar)
            assert session.headers["User-Agent"] == USER_AGENT
            assert session.timeout.total == 30
        finally:
            await session.close()


def _make_echo_app() -> web.Application:
    async def echo(request: web.Request) -> web.Response:
        body = await request.text()
        text = "|".join(
            [
                request.headers.get("User-Agent", ""),
                request.headers.get("Content-Type", ""),
                body,
            ]
        )
        return web.Response(status=500, text=text)

    app = web.Application()
    app.router.add_put("/echo", echo)
    return app


class TestRequest:
    async def test_sends_data_and_headers_and_ignores_status(self):
        async with test_utils.TestServer(_make_echo_app()) as server:
            async with _transport.make_session() as session:
                status, body = await _transport.request(
                    session,
                    "PUT",
                    str(server.make_url("/echo")),
                    data='{"length":1,"arr":[1]}',
                    headers={"Content-Type": "application/x-www-form-urlencoded; charset=UTF-8"},
                )

        assert status == 500
        assert body == (
            f"{USER_AGENT}|application/x-www-form-urlencoded; charset=UTF-8"
            '|{"length":1,"arr":[1]}'
        )

    async def test_timeout_is_transport_error(self):
        with aioresponses() as m:
            m.get("https://envoy.test/slow", exception=TimeoutError())
            async with _transport.make_session() as session:
                with pytest.raises(TransportError, match="timed out") as excinfo:
                    await _transport.request(session, "GET", "https://envoy.test/slow")

        assert isinstance(excinfo.value.__cause__, TimeoutError)

    async def test_client_error_is_transport_error(self):
        with aioresponses() as m:
            m.get("https://envoy.test/down", exception=aiohttp.ClientConnectionError("refused"))
            async with _transport.make_session() as session:
                with pytest.raises(TransportError, match="refused"):
                    await _transport.request(session, "GET", "https://envoy.test/down")
