from __future__ import annotations

from typing import Any, List

from ...errors import DecodeError
from .models import (
    AddChatItem,
    EmojiRun,
    InvalidationContinuation,
    Paid,
    PlainText,
    RawAction,
    RawContinuation,
    RawPage,
    ReplayChatItem,
    ReplayContinuation,
    Run,
    TextRenderer,
    TimedContinuation,
    TextRun,
)
from .types import api


def parse_response(data: api.Response) -> RawPage:
    """Bind a get_live_chat(_replay) JSON payload to a RawPage.

    Only the fields the pager reads are checked; anything else in the payload
    is ignored. Shape violations in those fields raise DecodeError.
    """
    try:
        return _parse_response(data)
    except (KeyError, TypeError, ValueError, AttributeError, IndexError) as e:
        raise DecodeError(f"Unexpected response shape: {e!r}") from e


def _parse_response(data: api.Response) -> RawPage:
    contents = data.get("continuationContents")
    if contents is None:
        return RawPage(actions=None, continuation=None)
    chat = contents["liveChatContinuation"]

    continuation = None
    continuations = chat.get("continuations") or []
    if continuations:
        continuation = _parse_continuation(continuations[0])

    actions: List[RawAction] | None = None
    if "actions" in chat:
        actions = []
        for action in chat["actions"]:
            parsed = _parse_action(action)
            if parsed is not None:
                actions.append(parsed)
    return RawPage(actions=actions, continuation=continuation)


def _parse_continuation(data: api.Continuation) -> RawContinuation:
    invalidation = None
    if "invalidationContinuationData" in data:
        cont = data["invalidationContinuationData"]
        invalidation = InvalidationContinuation(
            token=cont["continuation"],
            topic=cont["invalidationId"]["topic"],
            timeout_ms=cont.get("timeoutMs"),
        )
    timed = None
    if "timedContinuationData" in data:
        cont = data["timedContinuationData"]
        timed = TimedContinuation(
            token=cont["continuation"],
            timeout_ms=cont.get("timeoutMs"),
        )
    replay = None
    if "liveChatReplayContinuationData" in data:
        replay = ReplayContinuation(
            token=data["liveChatReplayContinuationData"]["continuation"]
        )
    return RawContinuation(invalidation=invalidation, timed=timed, replay=replay)


def _parse_action(action: Any) -> RawAction | None:
    if "replayChatItemAction" in action:
        replay = action["replayChatItemAction"]
        items = [
            _parse_add_chat_item(inner["addChatItemAction"])
            for inner in replay.get("actions", [])
            if "addChatItemAction" in inner
        ]
        return ReplayChatItem(
            actions=items,
            video_offset_msec=int(replay["videoOffsetTimeMsec"]),
        )
    if "addChatItemAction" in action:
        return _parse_add_chat_item(action["addChatItemAction"])
    return None


def _parse_add_chat_item(action: api.MessageItem) -> AddChatItem:
    item = action["item"]
    if "liveChatTextMessageRenderer" in item:
        return AddChatItem(
            PlainText(_parse_text_renderer(item["liveChatTextMessageRenderer"]))
        )
    if "liveChatPaidMessageRenderer" in item:
        renderer = item["liveChatPaidMessageRenderer"]
        return AddChatItem(
            Paid(
                _parse_text_renderer(renderer),
                purchase_amount=renderer.get("purchaseAmountText", {}).get(
                    "simpleText"
                ),
            )
        )
    return AddChatItem(None)


def _parse_text_renderer(
    renderer: api.LiveChatTextMessageRenderer,
) -> TextRenderer:
    runs = None
    if "message" in renderer:
        runs = [_parse_run(run) for run in renderer["message"]["runs"]]
    author_name = renderer.get("authorName")
    return TextRenderer(
        id=renderer["id"],
        author_channel_id=renderer["authorExternalChannelId"],
        timestamp_usec=int(renderer["timestampUsec"]),
        author_name=author_name["simpleText"] if author_name else None,
        author_photo=[
            thumbnail["url"]
            for thumbnail in renderer.get("authorPhoto", {}).get("thumbnails", [])
        ],
        runs=runs,
    )


def _parse_run(run: Any) -> Run:
    if "text" in run:
        url = run.get("navigationEndpoint", {}).get("urlEndpoint", {}).get("url")
        return TextRun(
            text=run["text"],
            url=url,
            bold=run.get("bold", False),
            italics=run.get("italics", False),
        )
    if "emoji" in run:
        emoji = run["emoji"]
        thumbnails = emoji.get("image", {}).get("thumbnails", [])
        return EmojiRun(
            emoji_id=emoji["emojiId"],
            shortcuts=list(emoji.get("shortcuts", [])),
            image_url=thumbnails[0]["url"] if thumbnails else None,
            is_custom=emoji.get("isCustomEmoji", False),
        )
    raise ValueError(f"Unknown run: {run}")
