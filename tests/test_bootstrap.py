import asyncio

import pytest

from chatfeed.errors import MissingApiKey, MissingContinuation, NotAStream
from chatfeed.services.youtube.bootstrap import (
    DEFAULT_CLIENT_VERSION,
    WATCH_URL,
    bootstrap,
    extract_ytcfg,
    parse_watch_page,
)
from payloads import FakeTransport, watch_page


def test_live_page_yields_live_parameters():
    """A live watch page selects live mode and the "Live chat" continuation."""
    params, continuation = parse_watch_page("vid", watch_page(live=True))

    assert params.is_live is True
    assert params.api_key == "AIzaKEY"
    assert params.client_version == "2.20240101.00.00"
    assert continuation == "0ofMyCONT"


def test_replay_page_yields_replay_parameters():
    """A replay page selects replay mode and the "Top chat replay" continuation."""
    params, continuation = parse_watch_page(
        "vid", watch_page(live=False, continuation="replay-token")
    )

    assert params.is_live is False
    assert continuation == "replay-token"


def test_page_without_stream_markers_is_not_a_stream():
    html = watch_page().replace('"isLiveNow":true', '"isLiveContent":false')

    with pytest.raises(NotAStream) as info:
        parse_watch_page("abc", html)
    assert info.value.video_id == "abc"


def test_missing_api_key():
    html = watch_page(ytcfg=False)

    with pytest.raises(MissingApiKey):
        parse_watch_page("vid", html)


def test_api_key_found_outside_ytcfg():
    """The raw-body pattern still finds the key when no ytcfg.set block parses."""
    html = watch_page(ytcfg=False) + "<script>var cfg = {'INNERTUBE_API_KEY': 'RAWKEY'};</script>"

    params, _ = parse_watch_page("vid", html)

    assert params.api_key == "RAWKEY"


def test_client_version_falls_back_to_default():
    html = (
        watch_page(ytcfg=False)
        .replace('"clientVersion":"2.20240101.00.00"', '"clientName":"WEB"')
        + '<script>x = {"INNERTUBE_API_KEY":"K"}</script>'
    )

    params, _ = parse_watch_page("vid", html)

    assert params.client_version == DEFAULT_CLIENT_VERSION


def test_missing_continuation():
    html = watch_page().replace("Live chat", "Chat")

    with pytest.raises(MissingContinuation):
        parse_watch_page("vid", html)


def test_live_page_ignores_replay_continuation():
    """Continuation patterns are mode specific."""
    html = watch_page(live=False).replace('"isLiveNow":false', '"isLiveNow":true')

    with pytest.raises(MissingContinuation):
        parse_watch_page("vid", html)


def test_parse_is_deterministic():
    html = watch_page()
    assert parse_watch_page("vid", html) == parse_watch_page("vid", html)


def test_extract_ytcfg_merges_blocks():
    config = extract_ytcfg(watch_page())

    assert config["CSI_SERVICE_NAME"] == "youtube"
    assert config["INNERTUBE_API_KEY"] == "AIzaKEY"


def test_extract_ytcfg_without_blocks():
    assert extract_ytcfg("<html><script>var a = 1;</script></html>") == {}


def test_bootstrap_fetches_watch_page():
    transport = FakeTransport(html=watch_page(continuation="tok"))

    params, continuation = asyncio.run(bootstrap(transport, "dQw4w9WgXcQ"))

    assert transport.gets == [(WATCH_URL, {"v": "dQw4w9WgXcQ"})]
    assert params.is_live
    assert continuation == "tok"
