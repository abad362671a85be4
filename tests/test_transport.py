import asyncio
from unittest.mock import MagicMock

import aiohttp
import pytest

from chatfeed.errors import BadStatus, DecodeError, Timeout, TransportError
from chatfeed.transport import DEFAULT_HEADERS, HttpTransport


class FakeResponse:
    def __init__(self, text="", status=200):
        self._text = text
        self.status = status

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    def raise_for_status(self):
        if self.status >= 400:
            raise aiohttp.ClientResponseError(
                request_info=MagicMock(), history=(), status=self.status
            )

    async def text(self):
        return self._text


class FakeSession:
    def __init__(self, result):
        self.result = result
        self.calls = []

    def _request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if isinstance(self.result, Exception):
            raise self.result
        return self.result

    def get(self, url, **kwargs):
        return self._request("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._request("POST", url, **kwargs)


def _post(result):
    transport = HttpTransport(FakeSession(result))
    return asyncio.run(transport.post_json("https://x", {"key": "k"}, {"a": 1}))


def test_get_text_returns_body():
    session = FakeSession(FakeResponse("<html></html>"))
    transport = HttpTransport(session)

    text = asyncio.run(transport.get_text("https://x", params={"v": "id"}))

    assert text == "<html></html>"
    assert session.calls == [("GET", "https://x", {"params": {"v": "id"}})]


def test_post_json_sends_body_and_parses_reply():
    session = FakeSession(FakeResponse('{"ok": true}'))
    transport = HttpTransport(session)

    data = asyncio.run(transport.post_json("https://x", {"key": "k"}, {"a": 1}))

    assert data == {"ok": True}
    assert session.calls == [
        ("POST", "https://x", {"params": {"key": "k"}, "json": {"a": 1}})
    ]


def test_bad_status_is_translated():
    with pytest.raises(BadStatus) as info:
        _post(FakeResponse("", status=429))
    assert info.value.status == 429


def test_timeout_is_translated():
    with pytest.raises(Timeout):
        _post(asyncio.TimeoutError())


def test_client_error_is_transport_error():
    with pytest.raises(TransportError):
        _post(aiohttp.ClientConnectionError("connection reset"))


def test_invalid_json_is_decode_error():
    with pytest.raises(DecodeError):
        _post(FakeResponse("<html>sorry</html>"))
    with pytest.raises(DecodeError):
        _post(FakeResponse("[1, 2]"))


def test_default_headers_pin_language_and_referer():
    assert DEFAULT_HEADERS["Accept-Language"].startswith("en-US")
    assert DEFAULT_HEADERS["Referer"] == "https://www.youtube.com/"
    assert "Mozilla/5.0" in DEFAULT_HEADERS["User-Agent"]
