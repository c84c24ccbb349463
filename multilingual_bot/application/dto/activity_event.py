from __future__ import annotations

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from multilingual_bot.domain.entities.activity import Activity, ActivityType


class ChannelAccountDTO(BaseModel):
    id: str = Field(min_length=1)
    name: str | None = None


class ConversationAccountDTO(BaseModel):
    id: str = Field(min_length=1)


class ActivityEventDTO(BaseModel):
    """Bot Framework shaped activity as posted by a channel adapter."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: str = ActivityType.MESSAGE.value
    id: str | None = None
    text: str | None = None
    channel_id: str = Field(default="api", alias="channelId", min_length=1)
    from_: ChannelAccountDTO = Field(alias="from")
    conversation: ConversationAccountDTO

    def to_activity(self) -> Activity:
        return Activity(
            id=self.id or uuid4().hex,
            type=self.type,
            text=self.text,
            channel_id=self.channel_id,
            user_id=self.from_.id,
            conversation_id=self.conversation.id,
        )
