from typing import List, NotRequired, TypedDict, Union


class Thumbnail(TypedDict):
    url: str
    width: NotRequired[int]
    height: NotRequired[int]


class Thumbnails(TypedDict):
    thumbnails: List[Thumbnail]


class InvalidationId(TypedDict):
    objectSource: int
    objectId: str
    topic: str
    subscribeToGcmTopics: bool
    protoCreationTimestampMs: str


class InvalidationContinuationData(TypedDict):
    invalidationId: InvalidationId
    timeoutMs: int
    continuation: str


class TimedContinuationData(TypedDict):
    timeoutMs: int
    continuation: str


class LiveChatReplayContinuationData(TypedDict):
    timeUntilLastMessageMsec: NotRequired[int]
    continuation: str


class Continuation(TypedDict):
    invalidationContinuationData: NotRequired[InvalidationContinuationData]
    timedContinuationData: NotRequired[TimedContinuationData]
    liveChatReplayContinuationData: NotRequired[LiveChatReplayContinuationData]


class Image(TypedDict):
    thumbnails: List[Thumbnail]


class Emoji(TypedDict):
    emojiId: str
    shortcuts: NotRequired[List[str]]
    searchTerms: NotRequired[List[str]]
    image: Image
    isCustomEmoji: NotRequired[bool]


class UrlEndpoint(TypedDict):
    url: str


class NavigationEndpoint(TypedDict):
    urlEndpoint: NotRequired[UrlEndpoint]


class TextRun(TypedDict):
    text: str
    bold: NotRequired[bool]
    italics: NotRequired[bool]
    navigationEndpoint: NotRequired[NavigationEndpoint]


class EmojiRun(TypedDict):
    emoji: Emoji


type Runs = List[Union[TextRun, EmojiRun]]


class Message(TypedDict):
    runs: Runs


class SimpleText(TypedDict):
    simpleText: str


class LiveChatTextMessageRenderer(TypedDict):
    id: str
    timestampUsec: str
    authorExternalChannelId: str
    authorName: NotRequired[SimpleText]
    authorPhoto: Thumbnails
    message: NotRequired[Message]


class LiveChatPaidMessageRenderer(LiveChatTextMessageRenderer):
    purchaseAmountText: NotRequired[SimpleText]


class MessageItemData(TypedDict):
    liveChatTextMessageRenderer: NotRequired[LiveChatTextMessageRenderer]
    liveChatPaidMessageRenderer: NotRequired[LiveChatPaidMessageRenderer]


class MessageItem(TypedDict):
    item: MessageItemData


class AddChatItemAction(TypedDict):
    addChatItemAction: MessageItem


class ReplayChatItemActionData(TypedDict):
    actions: List[AddChatItemAction]
    videoOffsetTimeMsec: str


class ReplayChatItemAction(TypedDict):
    replayChatItemAction: ReplayChatItemActionData


type Action = Union[AddChatItemAction, ReplayChatItemAction]


class LiveChatContinuation(TypedDict):
    continuations: List[Continuation]
    actions: NotRequired[List[Action]]


class ContinuationContents(TypedDict):
    liveChatContinuation: LiveChatContinuation


class Response(TypedDict):
    continuationContents: NotRequired[ContinuationContents]


class ClientContext(TypedDict):
    clientVersion: str
    clientName: str


class RequestContext(TypedDict):
    client: ClientContext


class GetLiveChatBody(TypedDict):
    continuation: str
    context: RequestContext
