from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, Mapping

import aiohttp

from .errors import BadStatus, ChatError, DecodeError, Timeout, TransportError

USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:123.0) Gecko/20100101 Firefox/123.0"
# Page markup is matched against English strings, so the language is pinned.
DEFAULT_HEADERS = {
    "Accept-Language": "en-US,en;q=0.5",
    "User-Agent": USER_AGENT,
    "Referer": "https://www.youtube.com/",
}


def create_session(timeout: float = 30.0) -> aiohttp.ClientSession:
    return aiohttp.ClientSession(
        headers=DEFAULT_HEADERS,
        timeout=aiohttp.ClientTimeout(total=timeout),
    )


class HttpTransport:
    def __init__(self, session: aiohttp.ClientSession):
        self.session = session

    @classmethod
    def create(cls, timeout: float = 30.0) -> HttpTransport:
        return cls(create_session(timeout))

    async def close(self):
        await self.session.close()

    async def __aenter__(self) -> HttpTransport:
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def get_text(self, url: str, params: Mapping[str, str] | None = None) -> str:
        try:
            async with self.session.get(url, params=params) as res:
                res.raise_for_status()
                return await res.text()
        except (asyncio.TimeoutError, aiohttp.ClientError) as e:
            raise _translate(e) from e

    async def post_json(
        self, url: str, params: Mapping[str, str], body: Dict[str, Any]
    ) -> Dict[str, Any]:
        try:
            async with self.session.post(url, params=params, json=body) as res:
                res.raise_for_status()
                text = await res.text()
        except (asyncio.TimeoutError, aiohttp.ClientError) as e:
            raise _translate(e) from e
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise DecodeError(f"Response is not JSON: {e}") from e
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")
        return data


def _translate(error: Exception) -> ChatError:
    if isinstance(error, (asyncio.TimeoutError, aiohttp.ServerTimeoutError)):
        return Timeout()
    if isinstance(error, aiohttp.ClientResponseError):
        return BadStatus(error.status)
    return TransportError(str(error) or type(error).__name__)
