from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from multilingual_bot.api.schemas import ReplySchema, TurnResponseSchema
from multilingual_bot.application.dto.activity_event import ActivityEventDTO
from multilingual_bot.application.exceptions import PersistenceFailureError
from multilingual_bot.application.use_cases.handle_turn import HandleTurnUseCase
from multilingual_bot.wiring.dependencies import get_handle_turn_use_case


router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/api/messages", response_model=TurnResponseSchema)
def post_activity(
    event: ActivityEventDTO,
    use_case: HandleTurnUseCase = Depends(get_handle_turn_use_case),
) -> TurnResponseSchema:
    activity = event.to_activity()
    logger.info(
        "Activity received",
        extra={"activity_id": activity.id, "user_id": activity.user_id, "conversation_id": activity.conversation_id},
    )
    try:
        replies = use_case.handle(activity)
    except PersistenceFailureError as e:
        logger.exception("Turn not durably completed", extra={"activity_id": activity.id, "reason": str(e)})
        raise HTTPException(status_code=503, detail="Conversation state could not be saved") from e

    return TurnResponseSchema(replies=[ReplySchema.from_reply(reply) for reply in replies])
