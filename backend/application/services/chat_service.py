"""
Chat service for retrieval-augmented answers.

Three flows share retrieval and generation:
- Channel bot: answers from the channel's messages and shared PDFs, under
  the channel's persona, and stores the answer as a threaded reply.
- User persona bot (`@<name>-bot`): answers in a user's voice from the
  messages they wrote; DMs are searched only when asked inside a DM.
- Personal-document chat: answers only from the caller's own documents,
  nothing is stored.

Dependencies: sqlalchemy, backend.core, backend.boundary.db
System role: Chat service orchestration layer
"""

import logging
import re

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from backend.boundary.db.CRUD import channel_crud, message_crud, user_crud
from backend.core.answering import (
    DEFAULT_CHANNEL_PERSONA,
    DEFAULT_DOCUMENT_PERSONA,
    DEFAULT_USER_PERSONA,
    AnswerGenerator,
    GeneratedAnswer,
)
from backend.core.exceptions import NotFoundError, ValidationError
from backend.core.retriever import RetrievalService
from backend.models.conversation import ConversationMessage

logger = logging.getLogger(__name__)

BOT_SENDER_ID = "bot"
BOT_MENTION = "@channel-bot"
_MENTION_RE = re.compile(re.escape(BOT_MENTION), re.IGNORECASE)
# @<name>-bot addresses a user's persona bot; @channel-bot also matches and is excluded
_ANY_BOT_MENTION_RE = re.compile(r"@([\w-]+)-bot\b", re.IGNORECASE)


def mentions_bot(content: str) -> bool:
    """True when a message addresses the channel bot."""
    return bool(_MENTION_RE.search(content))


def user_bot_name(content: str) -> str | None:
    """Name of the user whose persona bot is addressed, None if there is none."""
    for match in _ANY_BOT_MENTION_RE.finditer(content):
        if not _MENTION_RE.fullmatch(match.group(0)):
            return match.group(1)
    return None


def strip_bot_mention(content: str) -> str:
    """Remove bot mentions and surrounding whitespace from a question."""
    return " ".join(_ANY_BOT_MENTION_RE.sub(" ", content).split())


class ChannelBotAnswer(GeneratedAnswer):
    """Generated answer plus the ID of the stored reply message."""

    reply_message_id: str


class ChatService:
    """
    Chat service for grounded Q&A.

    Coordinates scope validation, retrieval, answer generation and, for the
    bots, reply persistence.
    """

    def __init__(
        self,
        db: AsyncSession,
        retrieval_service: RetrievalService,
        answer_generator: AnswerGenerator,
        top_k: int = 5,
    ) -> None:
        """
        Initialize chat service.

        Args:
            db: AsyncSession for database operations
            retrieval_service: Scoped vector retrieval
            answer_generator: Grounded answer generation
            top_k: Passages retrieved per question
        """
        self.db = db
        self.retrieval_service = retrieval_service
        self.answer_generator = answer_generator
        self.top_k = top_k

    async def ask_channel_bot(
        self,
        channel_id: str,
        message: str,
        history: list[ConversationMessage] | None = None,
        parent_message_id: str | None = None,
    ) -> ChannelBotAnswer:
        """
        Answer a question in a channel and store the reply.

        Flow:
        1. Validate the channel exists and read its persona
        2. Strip the bot mention from the question
        3. Retrieve from the channel scope (messages and PDF attachments)
        4. Generate the answer
        5. Store the answer as a reply from the bot and commit

        Args:
            channel_id: Channel the question was asked in
            message: Raw user message
            history: Prior turns, oldest first
            parent_message_id: Message the reply is threaded under

        Returns:
            ChannelBotAnswer: Answer, context, sources and stored reply ID

        Raises:
            NotFoundError: Channel does not exist
            ValidationError: Nothing left to answer after removing the mention
            TransientProviderError: Embedding, index or completion call failed
            GenerationError: Completion came back empty
        """
        channel = await channel_crud.get_by_id(self.db, channel_id)
        if channel is None:
            raise NotFoundError("channel", channel_id)

        question = strip_bot_mention(message)
        if not question:
            raise ValidationError("Question is empty", field="message")

        results = await self.retrieval_service.retrieve(
            question,
            channel_id=channel_id,
            limit=self.top_k,
            include_attachments=True,
        )
        logger.info(
            f"{__name__}:ask_channel_bot - Retrieved {len(results)} passages",
            extra={"channel_id": channel_id},
        )

        answer = await self.answer_generator.generate(
            query=question,
            history=history or [],
            results=results,
            system_persona=channel.system_prompt or DEFAULT_CHANNEL_PERSONA,
        )

        return await self._store_reply(channel_id, answer, parent_message_id)

    async def ask_user_bot(
        self,
        channel_id: str,
        message: str,
        history: list[ConversationMessage] | None = None,
        parent_message_id: str | None = None,
    ) -> ChannelBotAnswer:
        """
        Answer as a user's persona bot and store the reply in the channel.

        The addressed user is read from the `@<name>-bot` mention. Only the
        messages that user wrote are searched: their public messages when
        asked in a shared channel, DMs included when asked inside a DM.

        Args:
            channel_id: Channel the question was asked in
            message: Raw user message containing the mention
            history: Prior turns, oldest first
            parent_message_id: Message the reply is threaded under

        Returns:
            ChannelBotAnswer: Answer, context, sources and stored reply ID

        Raises:
            NotFoundError: Channel or addressed user does not exist
            ValidationError: No persona bot mention, or nothing left to answer
            TransientProviderError: Embedding, index or completion call failed
            GenerationError: Completion came back empty
        """
        channel = await channel_crud.get_by_id(self.db, channel_id)
        if channel is None:
            raise NotFoundError("channel", channel_id)

        name = user_bot_name(message)
        if name is None:
            raise ValidationError("No persona bot mentioned", field="message")
        user = await user_crud.get_by_name(self.db, name)
        if user is None:
            raise NotFoundError("user", name)

        question = strip_bot_mention(message)
        if not question:
            raise ValidationError("Question is empty", field="message")

        public_only = not channel.is_dm
        results = await self.retrieval_service.retrieve_from_sender(
            question,
            sender_id=user.id,
            public_only=public_only,
            limit=self.top_k,
        )
        logger.info(
            f"{__name__}:ask_user_bot - Retrieved {len(results)} passages",
            extra={"channel_id": channel_id, "user_id": user.id, "public_only": public_only},
        )

        answer = await self.answer_generator.generate(
            query=question,
            history=history or [],
            results=results,
            system_persona=user.system_prompt or DEFAULT_USER_PERSONA.format(name=user.name),
        )
        return await self._store_reply(channel_id, answer, parent_message_id)

    async def _store_reply(
        self,
        channel_id: str,
        answer: GeneratedAnswer,
        parent_message_id: str | None,
    ) -> ChannelBotAnswer:
        reply = await message_crud.create(
            self.db,
            channel_id=channel_id,
            sender_id=BOT_SENDER_ID,
            content=answer.content,
            parent_message_id=parent_message_id,
        )
        await self.db.commit()
        logger.info(
            f"{__name__}:_store_reply - Stored bot reply {reply.id}",
            extra={"channel_id": channel_id, "parent_message_id": parent_message_id},
        )
        return ChannelBotAnswer(**answer.model_dump(), reply_message_id=reply.id)

    async def chat_with_documents(
        self,
        owner_id: str,
        query: str,
        history: list[ConversationMessage] | None = None,
    ) -> GeneratedAnswer:
        """
        Answer a question from the caller's personal documents only.

        Args:
            owner_id: Caller's user ID
            query: Question text
            history: Prior turns, oldest first

        Returns:
            GeneratedAnswer: Answer, context and document sources

        Raises:
            ValidationError: Empty owner or query
            TransientProviderError: Embedding, index or completion call failed
            GenerationError: Completion came back empty
        """
        if not owner_id:
            raise ValidationError("Owner is required", field="owner_id")
        if not query.strip():
            raise ValidationError("Query is empty", field="query")

        results = await self.retrieval_service.retrieve(query, owner_id=owner_id, limit=self.top_k)
        return await self.answer_generator.generate(
            query=query,
            history=history or [],
            results=results,
            system_persona=DEFAULT_DOCUMENT_PERSONA,
        )
