from .bootstrap import bootstrap, parse_watch_page
from .models import Author, ChatMessage, EmojiRun, PaidAmount, SessionParameters, TextRun
from .page import PageProcessor, fetch_page
from .youtube import YoutubeRoomService, YoutubeService, extract_video_id, stream_messages

__all__ = [
    "Author",
    "ChatMessage",
    "EmojiRun",
    "PageProcessor",
    "PaidAmount",
    "SessionParameters",
    "TextRun",
    "YoutubeRoomService",
    "YoutubeService",
    "bootstrap",
    "extract_video_id",
    "fetch_page",
    "parse_watch_page",
    "stream_messages",
]
