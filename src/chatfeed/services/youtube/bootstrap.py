from __future__ import annotations

import json
import re
from typing import Dict, Tuple

import bs4
from loguru import logger

from ...errors import MissingApiKey, MissingContinuation, NotAStream
from ...transport import HttpTransport
from .models import SessionParameters

WATCH_URL = "https://www.youtube.com/watch"
DEFAULT_CLIENT_VERSION = "2.20230801.08.00"

LIVE_NOW_REGEX = re.compile(r"""['"]isLiveNow['"]:\s*(true)""")
REPLAY_REGEX = re.compile(r"""['"]isReplay['"]:\s*(true)""")
API_KEY_REGEX = re.compile(r"""['"]INNERTUBE_API_KEY['"]:\s*['"](.+?)['"]""")
CLIENT_VERSION_REGEX = re.compile(r"""['"]clientVersion['"]:\s*['"]([\d.]+?)['"]""")
LIVE_CONTINUATION_REGEX = re.compile(
    r"""Live chat['"],\s*['"]selected['"]:\s*(?:true|false),\s*['"]continuation['"]:\s*"""
    r"""\{\s*['"]reloadContinuationData['"]:\s*\{['"]continuation['"]:\s*['"](.+?)['"]"""
)
REPLAY_CONTINUATION_REGEX = re.compile(
    r"""Top chat replay['"],\s*['"]selected['"]:\s*true,\s*['"]continuation['"]:\s*"""
    r"""\{\s*['"]reloadContinuationData['"]:\s*\{['"]continuation['"]:\s*['"](.+?)['"]"""
)


async def bootstrap(
    transport: HttpTransport, video_id: str
) -> Tuple[SessionParameters, str]:
    html = await transport.get_text(WATCH_URL, params={"v": video_id})
    params, continuation = parse_watch_page(video_id, html)
    logger.info(
        f"Bootstrapped {video_id}: {'live' if params.is_live else 'replay'}"
        f" (client {params.client_version})"
    )
    return params, continuation


def parse_watch_page(video_id: str, html: str) -> Tuple[SessionParameters, str]:
    if LIVE_NOW_REGEX.search(html):
        is_live = True
    elif REPLAY_REGEX.search(html):
        is_live = False
    else:
        raise NotAStream(video_id)

    ytcfg = extract_ytcfg(html)

    api_key = ytcfg.get("INNERTUBE_API_KEY") or _search(API_KEY_REGEX, html)
    if not api_key:
        raise MissingApiKey()

    client_version = (
        ytcfg.get("INNERTUBE_CLIENT_VERSION")
        or _search(CLIENT_VERSION_REGEX, html)
        or DEFAULT_CLIENT_VERSION
    )

    continuation_regex = (
        LIVE_CONTINUATION_REGEX if is_live else REPLAY_CONTINUATION_REGEX
    )
    continuation = _search(continuation_regex, html)
    if continuation is None:
        raise MissingContinuation()

    return SessionParameters(api_key, client_version, is_live), continuation


def extract_ytcfg(html: str) -> Dict:
    """Merge every ytcfg.set({...}) object on the page."""
    config: Dict = {}
    soup = bs4.BeautifulSoup(html, "html.parser")
    for script in soup.select("script"):
        text = script.text
        start = text.find("ytcfg.set(")
        if start == -1:
            continue
        text = text[start:]
        if "{" not in text:
            continue
        try:
            data, _ = json.JSONDecoder().raw_decode(text, text.index("{"))
        except json.JSONDecodeError:
            logger.debug("Skipping unparseable ytcfg.set block")
            continue
        if isinstance(data, dict):
            config.update(data)
    return config


def _search(regex: re.Pattern[str], text: str) -> str | None:
    match = regex.search(text)
    if match is None:
        return None
    return match.group(1)
