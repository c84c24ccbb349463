from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ActivityType(str, Enum):
    MESSAGE = "message"
    CONVERSATION_UPDATE = "conversationUpdate"
    EVENT = "event"
    TYPING = "typing"


@dataclass(frozen=True)
class Activity:
    id: str
    type: str
    text: str | None
    channel_id: str
    user_id: str
    conversation_id: str

    @property
    def is_message(self) -> bool:
        return self.type == ActivityType.MESSAGE
