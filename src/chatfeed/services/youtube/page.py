from __future__ import annotations

import re
from collections import deque
from typing import Deque, Iterable, Iterator, Tuple

from loguru import logger

from ...errors import EndOfContinuation, MalformedResponse
from ...helper import timeit_async
from ...transport import HttpTransport
from .models import (
    AddChatItem,
    Author,
    ChatMessage,
    Paid,
    PaidAmount,
    PlainText,
    RawAction,
    RawPage,
    ReplayChatItem,
    SessionParameters,
    TextRenderer,
)
from .parser import parse_response
from .types import api

LIVE_ENDPOINT = "https://www.youtube.com/youtubei/v1/live_chat/get_live_chat"
REPLAY_ENDPOINT = "https://www.youtube.com/youtubei/v1/live_chat/get_live_chat_replay"

type QueuedItem = Tuple[AddChatItem, int | None]


def is_eligible(item: AddChatItem) -> bool:
    match item.renderer:
        case PlainText(text=renderer) | Paid(text=renderer):
            return renderer.runs is not None
        case _:
            return False


def flatten_actions(actions: Iterable[RawAction]) -> Iterator[QueuedItem]:
    """Yield eligible add-item actions in server order.

    Only the first eligible item of a replay batch is kept; its siblings are
    dropped. Every kept replay item carries the batch's video offset.
    """
    for action in actions:
        if isinstance(action, ReplayChatItem):
            for inner in action.actions:
                if is_eligible(inner):
                    yield inner, action.video_offset_msec
                    break
        elif is_eligible(action):
            yield action, None


def parse_amount(text: str) -> float | None:
    """Read the number in a localized price such as "$1,234.50" or "1.234,50 €".

    A separator followed by one or two trailing digits is the decimal mark;
    every other separator groups thousands.
    """
    _number = re.search(r"\d(?:[\d.,]*\d)?", text)
    if _number is None:
        return None
    number = _number.group(0)
    _decimal = re.search(r"[.,](\d{1,2})$", number)
    fraction = ""
    if _decimal is not None:
        fraction = _decimal.group(1)
        number = number[: _decimal.start()]
    whole = re.sub(r"[.,]", "", number)
    try:
        return float(f"{whole}.{fraction}" if fraction else whole)
    except ValueError:
        return None


def parse_paid_amount(text: str | None) -> PaidAmount | None:
    if not text:
        return None
    _currency = re.search(r"[^0-9\s.,]+", text)
    return PaidAmount(
        text=text,
        currency=_currency.group(0) if _currency else None,
        amount=parse_amount(text),
    )


def to_message(item: AddChatItem, time_delta: int | None) -> ChatMessage:
    match item.renderer:
        case PlainText(text=renderer):
            is_super, paid = False, None
        case Paid(text=renderer, purchase_amount=purchase_amount):
            is_super, paid = True, parse_paid_amount(purchase_amount)
        case _:
            raise ValueError("Queued item has no chat message renderer")
    return ChatMessage(
        id=renderer.id,
        runs=renderer.runs or [],
        is_super=is_super,
        author=_author(renderer),
        timestamp=renderer.timestamp_usec // 1000,
        time_delta=time_delta,
        paid=paid,
    )


def _author(renderer: TextRenderer) -> Author:
    # thumbnails are ordered smallest to largest
    avatar_url = renderer.author_photo[-1] if renderer.author_photo else ""
    return Author(
        display_name=renderer.author_name or renderer.author_channel_id,
        id=renderer.author_channel_id,
        avatar_url=avatar_url,
    )


class PageProcessor:
    """One page worth of chat messages plus the cursor to the next page.

    Iterating drains the queue. The processor is owned by a single consumer.
    """

    def __init__(
        self,
        items: Iterable[QueuedItem],
        params: SessionParameters,
        continuation_token: str | None = None,
        signaler_topic: str | None = None,
    ):
        self.items: Deque[QueuedItem] = deque(items)
        self.params = params
        self.continuation_token = continuation_token
        self.signaler_topic = signaler_topic

    @classmethod
    def from_page(cls, page: RawPage, params: SessionParameters) -> PageProcessor:
        continuation = page.continuation
        if continuation is None:
            raise MalformedResponse("Missing continuation contents")

        signaler_topic = None
        if params.is_live:
            token = None
            if continuation.invalidation is not None:
                token = continuation.invalidation.token
                signaler_topic = continuation.invalidation.topic
            elif continuation.timed is not None:
                token = continuation.timed.token
            actions = page.actions or []
        else:
            token = continuation.replay.token if continuation.replay else None
            if page.actions is None:
                raise EndOfContinuation()
            actions = page.actions

        return cls(flatten_actions(actions), params, token, signaler_topic)

    def __iter__(self) -> Iterator[ChatMessage]:
        return self

    def __next__(self) -> ChatMessage:
        if not self.items:
            raise StopIteration
        item, time_delta = self.items.popleft()
        return to_message(item, time_delta)

    def __len__(self) -> int:
        return len(self.items)

    async def cont(self, transport: HttpTransport) -> PageProcessor | None:
        if self.continuation_token is None:
            return None
        page = await fetch_page(transport, self.params, self.continuation_token)
        return PageProcessor.from_page(page, self.params)


@timeit_async
async def fetch_page(
    transport: HttpTransport, params: SessionParameters, continuation: str
) -> RawPage:
    endpoint = LIVE_ENDPOINT if params.is_live else REPLAY_ENDPOINT
    body: api.GetLiveChatBody = {
        "continuation": continuation,
        "context": {
            "client": {
                "clientVersion": params.client_version,
                "clientName": "WEB",
            }
        },
    }
    logger.debug(f"POST {endpoint} continuation={continuation[:16]}...")
    data = await transport.post_json(
        endpoint,
        params={"key": params.api_key, "prettyPrint": "false"},
        body=dict(body),
    )
    return parse_response(data)
