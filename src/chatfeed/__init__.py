from .errors import (
    BadStatus,
    ChatError,
    DecodeError,
    EndOfContinuation,
    InvalidUrl,
    MalformedResponse,
    MissingApiKey,
    MissingContinuation,
    NotAStream,
    Timeout,
    TransportError,
)
from .services.youtube import (
    Author,
    ChatMessage,
    PageProcessor,
    SessionParameters,
    YoutubeRoomService,
    YoutubeService,
    bootstrap,
    extract_video_id,
    fetch_page,
    stream_messages,
)
from .signaler import IntervalSignaler, Signaler, Subscription
from .transport import HttpTransport

__all__ = [
    "Author",
    "BadStatus",
    "ChatError",
    "ChatMessage",
    "DecodeError",
    "EndOfContinuation",
    "HttpTransport",
    "IntervalSignaler",
    "InvalidUrl",
    "MalformedResponse",
    "MissingApiKey",
    "MissingContinuation",
    "NotAStream",
    "PageProcessor",
    "SessionParameters",
    "Signaler",
    "Subscription",
    "Timeout",
    "TransportError",
    "YoutubeRoomService",
    "YoutubeService",
    "bootstrap",
    "extract_video_id",
    "fetch_page",
    "stream_messages",
]
