from __future__ import annotations

from typing import Any

from multilingual_bot.domain.entities.activity import Activity
from multilingual_bot.domain.entities.reply import Reply


class TurnContext:
    """
    Everything known about one inbound activity while it is being processed.
    Replies are collected in order and handed back to the channel adapter when the turn ends.
    """

    def __init__(self, activity: Activity) -> None:
        self.activity = activity
        self.responses: list[Reply] = []
        # per-turn cache, e.g. loaded bot state
        self.turn_state: dict[str, Any] = {}

    def send_activity(self, reply: Reply | str) -> Reply:
        if isinstance(reply, str):
            reply = Reply(text=reply)
        self.responses.append(reply)
        return reply
