from __future__ import annotations

import re
from typing import AsyncGenerator, Awaitable, Callable, Dict

from loguru import logger

from ...errors import ChatError, EndOfContinuation, InvalidUrl, MalformedResponse
from ...helper import HTTP_REGEX
from ...signaler import IntervalSignaler, Signaler, Subscription
from ...tasks import Tasks
from ...transport import HttpTransport
from .bootstrap import bootstrap
from .models import ChatMessage, SessionParameters
from .page import PageProcessor, fetch_page

URL_REGEX = re.compile(
    HTTP_REGEX
    + r"((m\.)?youtube\.com\/(watch\?(.*&)?v=(?P<video_id>[\w-]+)|live\/(?P<video_id_live>[\w-]+))"
    + r"|youtu\.be\/(?P<video_id_short>[\w-]+))"
)
VIDEO_ID_REGEX = re.compile(r"[\w-]{11}")

type MessageCallback = Callable[[ChatMessage], Awaitable[None]]


def extract_video_id(url: str) -> str:
    url = url.strip()
    if VIDEO_ID_REGEX.fullmatch(url):
        return url
    match = URL_REGEX.match(url)
    if match is None:
        raise InvalidUrl(url)
    options = match.groupdict()
    video_id = (
        options.get("video_id")
        or options.get("video_id_live")
        or options.get("video_id_short")
    )
    if not video_id:
        raise InvalidUrl(url)
    return video_id


async def stream_messages(
    transport: HttpTransport,
    params: SessionParameters,
    continuation: str,
    signaler: Signaler | None = None,
) -> AsyncGenerator[ChatMessage, None]:
    """Yield chat messages page after page.

    Replay pages are fetched back to back until the continuation runs out.
    Live pages are fetched each time the signaler reports new data, and the
    subscription follows the topic of the most recent page. A failure while
    fetching a continuation is raised after every earlier message has been
    yielded.
    """
    page = await fetch_page(transport, params, continuation)
    try:
        processor = PageProcessor.from_page(page, params)
    except EndOfContinuation:
        logger.info("Replay has no chat")
        return

    subscription: Subscription | None = None
    if params.is_live:
        if processor.signaler_topic is None:
            raise MalformedResponse("Live page carries no invalidation topic")
        signaler = signaler or IntervalSignaler()
        subscription = await signaler.subscribe(processor.signaler_topic)
        logger.info(f"Subscribed to {processor.signaler_topic}")

    try:
        while True:
            for message in processor:
                yield message

            if subscription is not None:
                topic = processor.signaler_topic
                if topic is not None and topic != subscription.topic:
                    await subscription.resubscribe(topic)
                if not await subscription.wait():
                    logger.info("Signaler channel closed")
                    return

            try:
                next_processor = await processor.cont(transport)
            except EndOfContinuation:
                logger.info("Reached end of replay")
                return
            except ChatError as e:
                logger.error(f"Failed to fetch continuation: {e}")
                raise
            if next_processor is None:
                logger.info("Chat ended: no continuation token")
                return
            logger.debug(f"Fetched page with {len(next_processor)} messages")
            processor = next_processor
    finally:
        if subscription is not None:
            await subscription.close()


class YoutubeService:
    def __init__(
        self,
        transport: HttpTransport,
        callback: MessageCallback,
        signaler: Signaler | None = None,
    ):
        self.transport = transport
        self.callback = callback
        self.signaler = signaler
        self.rooms: Dict[str, YoutubeRoomService] = {}

    async def start_channel(self, url: str) -> YoutubeRoomService:
        video_id = extract_video_id(url)
        if video_id in self.rooms:
            return self.rooms[video_id]
        room = await YoutubeRoomService.create(
            self.transport, video_id, self.callback, self.signaler
        )
        self.rooms[video_id] = room
        return room

    async def stop_channel(self, url: str):
        video_id = extract_video_id(url)
        if video_id not in self.rooms:
            return
        room = self.rooms.pop(video_id)
        await room.stop()

    async def stop(self):
        for video_id in list(self.rooms):
            await self.rooms.pop(video_id).stop()


class YoutubeRoomService:
    def __init__(
        self,
        transport: HttpTransport,
        video_id: str,
        params: SessionParameters,
        continuation: str,
        callback: MessageCallback,
        signaler: Signaler | None = None,
    ):
        self.transport = transport
        self.video_id = video_id
        self.params = params
        self.continuation = continuation
        self.callback = callback
        self.signaler = signaler
        self.error: ChatError | None = None
        self.tasks = Tasks()

    @classmethod
    async def create(
        cls,
        transport: HttpTransport,
        video_id: str,
        callback: MessageCallback,
        signaler: Signaler | None = None,
    ) -> YoutubeRoomService:
        params, continuation = await bootstrap(transport, video_id)
        self = cls(transport, video_id, params, continuation, callback, signaler)
        self.tasks.create_task(self.start())
        return self

    @property
    def url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.video_id}"

    @property
    def online(self) -> bool:
        return self.tasks.running

    async def start(self):
        stream = stream_messages(
            self.transport, self.params, self.continuation, self.signaler
        )
        try:
            async for message in stream:
                await self.callback(message)
        except ChatError as e:
            logger.error(f"Chat for {self.video_id} stopped: {e}")
            self.error = e
        finally:
            await stream.aclose()
        logger.info(f"Chat for {self.video_id} ended")

    async def wait(self):
        await self.tasks.join()

    async def stop(self):
        self.tasks.terminate()
        await self.tasks.join()
