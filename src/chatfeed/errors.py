from __future__ import annotations


class ChatError(Exception):
    pass


class InvalidUrl(ChatError, ValueError):
    def __init__(self, url: str):
        super().__init__(f"Could not find a video id in {url!r}")
        self.url = url


class NotAStream(ChatError):
    def __init__(self, video_id: str):
        super().__init__(f"{video_id} is not a live stream or replay")
        self.video_id = video_id


class MissingApiKey(ChatError):
    def __init__(self):
        super().__init__("Could not find INNERTUBE_API_KEY")


class MissingContinuation(ChatError):
    def __init__(self):
        super().__init__("Chat continuation token could not be found")


class MalformedResponse(ChatError):
    pass


class EndOfContinuation(ChatError):
    def __init__(self):
        super().__init__("Reached end of continuation")


class Timeout(ChatError):
    def __init__(self):
        super().__init__("Request timed out")


class BadStatus(ChatError):
    def __init__(self, status: int):
        super().__init__(f"Request returned bad HTTP status: {status}")
        self.status = status


class TransportError(ChatError):
    pass


class DecodeError(ChatError):
    pass
