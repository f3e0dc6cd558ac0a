import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from api.auth import AuthPrincipal, get_current_principal
from api.deps import get_chat_client
from api.ratelimit import chat_rate_limit, limiter
from api.schemas import ChatReplyOut
from core.services.chat import ChatClient
from core.validators import ChatInput

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["chat"])


@router.post("/chat", response_model=ChatReplyOut)
@limiter.limit(chat_rate_limit)
def post_chat(
    request: Request,
    response: Response,
    body: ChatInput,
    principal: Annotated[AuthPrincipal, Depends(get_current_principal)],
    client: Annotated[ChatClient, Depends(get_chat_client)],
):
    del request, response
    reply = client.reply(body.messages)
    logger.info("chat_replied", extra={"profile_id": principal.user_id, "turns": len(body.messages)})
    return ChatReplyOut(reply=reply)
