from __future__ import annotations

import argparse
import asyncio
import sys

from loguru import logger

from .config import load_config
from .errors import ChatError
from .services.youtube import ChatMessage, EmojiRun, YoutubeRoomService, extract_video_id
from .signaler import IntervalSignaler
from .transport import HttpTransport


def format_message(message: ChatMessage) -> str:
    text = "".join(
        (run.shortcuts[0] if run.shortcuts else run.emoji_id)
        if isinstance(run, EmojiRun)
        else run.text
        for run in message.runs
    )
    prefix = ""
    if message.time_delta is not None:
        seconds = message.time_delta // 1000
        prefix = f"[{seconds // 3600:d}:{seconds // 60 % 60:02d}:{seconds % 60:02d}] "
    if message.paid is not None:
        prefix += f"({message.paid.text}) "
    return f"{prefix}{message.author.display_name}: {text}"


async def run(url: str, poll_interval: float, http_timeout: float) -> int:
    async def on_message(message: ChatMessage):
        print(format_message(message), flush=True)

    async with HttpTransport.create(http_timeout) as transport:
        room = await YoutubeRoomService.create(
            transport,
            extract_video_id(url),
            on_message,
            IntervalSignaler(poll_interval),
        )
        logger.info(f"Reading chat from {room.url}")
        try:
            await room.wait()
        finally:
            await room.stop()
    return 1 if room.error else 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="chatfeed", description="Print a YouTube live or replay chat feed"
    )
    parser.add_argument("url", help="watch URL, youtu.be link or video id")
    parser.add_argument("--log-level", help="override CHATFEED_LOG_LEVEL")
    args = parser.parse_args(argv)

    try:
        config = load_config()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    logger.remove()
    logger.add(sys.stderr, level=(args.log_level or config.log_level).upper())

    try:
        return asyncio.run(run(args.url, config.poll_interval, config.http_timeout))
    except ChatError as e:
        logger.error(f"{e}")
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
