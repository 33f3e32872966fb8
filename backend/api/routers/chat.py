"""Chat API endpoints.

Routes:
- POST /channels/{channel_id}/bot - Ask the channel bot, or a user's persona bot when the
  message addresses `@<name>-bot`; the answer is stored as a reply
- POST /users/{owner_id}/docs/chat - Ask about the caller's personal documents

Dependencies: backend.application.services.chat_service, backend.workers
System role: Grounded chat HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from kombu.exceptions import OperationalError

from backend.api.deps import get_chat_service
from backend.api.routers.router_utils import ANSWER_UNAVAILABLE, to_http_exception
from backend.application.services.chat_service import ChatService, mentions_bot, user_bot_name
from backend.core.exceptions import ChatRAGException
from backend.models.chat import (
    ChannelBotRequest,
    ChannelBotResponse,
    DocumentChatRequest,
    DocumentChatResponse,
)
from backend.workers.tasks.document_ingestion import embed_message

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


@router.post("/channels/{channel_id}/bot", response_model=ChannelBotResponse)
async def ask_channel_bot(
    channel_id: str,
    request: ChannelBotRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> ChannelBotResponse:
    """Answer a question in a channel from the channel's messages and PDFs.

    A `@<name>-bot` mention (without `@channel-bot`) routes the question to
    that user's persona bot instead, which answers from their own messages.

    Flow:
    1. ChatService retrieves, generates and stores the bot reply
    2. The reply is queued for embedding so later questions can use it
    3. Return answer, context and sources

    Args:
        channel_id: Channel ID
        request: Message, history and optional thread parent
        chat_service: Injected ChatService

    Returns:
        ChannelBotResponse: Answer with context, sources and reply ID

    Raises:
        HTTPException(404): Channel or addressed user not found
        HTTPException(400): Empty question
        HTTPException(502): Provider failure
    """
    try:
        ask = chat_service.ask_channel_bot
        if not mentions_bot(request.message) and user_bot_name(request.message) is not None:
            ask = chat_service.ask_user_bot
        answer = await ask(
            channel_id=channel_id,
            message=request.message,
            history=request.history,
            parent_message_id=request.parent_message_id,
        )
    except ChatRAGException as e:
        raise to_http_exception(e, ANSWER_UNAVAILABLE) from e

    # The reply is already stored; if the queue is down the sweep embeds it later
    try:
        embed_message.delay(answer.reply_message_id)
    except OperationalError as e:
        logger.warning(
            f"{__name__}:ask_channel_bot - Could not queue reply embedding",
            extra={"reply_message_id": answer.reply_message_id, "error": str(e)},
        )

    return ChannelBotResponse(
        content=answer.content,
        context=answer.used_context,
        sources=answer.sources,
        reply_message_id=answer.reply_message_id,
    )


@router.post("/users/{owner_id}/docs/chat", response_model=DocumentChatResponse)
async def chat_with_documents(
    owner_id: str,
    request: DocumentChatRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> DocumentChatResponse:
    """Answer a question from the caller's personal documents only.

    Nothing is persisted.

    Raises:
        HTTPException(400): Empty question
        HTTPException(502): Provider failure
    """
    try:
        answer = await chat_service.chat_with_documents(
            owner_id=owner_id,
            query=request.query,
            history=request.history,
        )
    except ChatRAGException as e:
        raise to_http_exception(e, ANSWER_UNAVAILABLE) from e

    return DocumentChatResponse(
        content=answer.content,
        context=answer.used_context,
        sources=answer.sources,
    )
