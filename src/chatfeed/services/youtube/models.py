from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

type Run = TextRun | EmojiRun
type Renderer = PlainText | Paid
type RawAction = AddChatItem | ReplayChatItem


@dataclass(frozen=True)
class SessionParameters:
    api_key: str
    client_version: str
    is_live: bool


@dataclass(frozen=True)
class TextRun:
    text: str
    url: str | None = None
    bold: bool = False
    italics: bool = False


@dataclass(frozen=True)
class EmojiRun:
    emoji_id: str
    shortcuts: List[str] = field(default_factory=list)
    image_url: str | None = None
    is_custom: bool = False


@dataclass
class TextRenderer:
    id: str
    author_channel_id: str
    timestamp_usec: int
    author_name: str | None = None
    author_photo: List[str] = field(default_factory=list)
    runs: List[Run] | None = None


@dataclass
class PlainText:
    text: TextRenderer


@dataclass
class Paid:
    text: TextRenderer
    purchase_amount: str | None = None


@dataclass
class AddChatItem:
    # None for renderer kinds that are not chat messages (memberships, gifts...)
    renderer: Renderer | None


@dataclass
class ReplayChatItem:
    actions: List[AddChatItem]
    video_offset_msec: int


@dataclass(frozen=True)
class InvalidationContinuation:
    token: str
    topic: str
    timeout_ms: int | None = None


@dataclass(frozen=True)
class TimedContinuation:
    token: str
    timeout_ms: int | None = None


@dataclass(frozen=True)
class ReplayContinuation:
    token: str


@dataclass(frozen=True)
class RawContinuation:
    invalidation: InvalidationContinuation | None = None
    timed: TimedContinuation | None = None
    replay: ReplayContinuation | None = None


@dataclass
class RawPage:
    actions: List[RawAction] | None
    continuation: RawContinuation | None


@dataclass(frozen=True)
class Author:
    display_name: str
    id: str
    avatar_url: str


@dataclass(frozen=True)
class PaidAmount:
    text: str
    currency: str | None
    amount: float | None


@dataclass(frozen=True)
class ChatMessage:
    id: str
    runs: List[Run]
    is_super: bool
    author: Author
    timestamp: int
    time_delta: int | None = None
    paid: PaidAmount | None = None
