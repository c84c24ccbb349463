from pydantic import BaseModel, Field

from multilingual_bot.domain.entities.reply import Reply


class ReplySchema(BaseModel):
    text: str
    suggested_actions: list[str] = Field(default_factory=list)

    @staticmethod
    def from_reply(reply: Reply) -> "ReplySchema":
        return ReplySchema(text=reply.text, suggested_actions=list(reply.suggested_actions))


class TurnResponseSchema(BaseModel):
    replies: list[ReplySchema] = Field(default_factory=list)
