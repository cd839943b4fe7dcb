from typing import Any, List, Literal, TypedDict

Tone = Literal["casual", "technical", "hardcore", "interview"]


class ProxyRequest(TypedDict, total=False):
    endpoint: str
    method: str
    body: Any


class Host(TypedDict, total=False):
    name: str
    role: str
    personality: str


class TurnOptions(TypedDict, total=False):
    tone: str
    includeExamples: bool
    ragContext: str


class TurnRequest(TypedDict):
    currentHost: Host
    otherHost: Host
    topic: str
    conversationHistory: List[str]
    options: TurnOptions


class TurnResponse(TypedDict):
    text: str


class SpeechRequest(TypedDict, total=False):
    text: str
    voiceId: str
    previousText: str
    nextText: str


class SpeechResponse(TypedDict):
    audioContent: str
    voiceId: str
    textLength: int
