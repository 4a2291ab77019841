"""Chat orchestration: one support turn from user message to stored reply.

`handle_message` walks ResolveSession -> PersistUserMessage -> BuildHistory ->
Generate -> PersistAiMessage. Any failure aborts the remaining steps, except
that a failure to store the AI reply is logged and the reply still returned.
Nothing is retried.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import structlog

from api.features.chat.entities import Message, Sender
from api.features.chat.generator import ReplyGenerator
from api.features.chat.history import project_history
from api.features.chat.repository import ConversationRepository
from api.shared.exceptions import StoreError

chat_logger = structlog.get_logger("supportchat.chat")


@dataclass(frozen=True)
class ChatReply:
    reply: str
    session_id: str


class ChatService:
    def __init__(
        self,
        repository: ConversationRepository,
        reply_generator: ReplyGenerator,
    ):
        self.repository = repository
        self.reply_generator = reply_generator

    async def resolve_session(self, session_id: Optional[str]) -> str:
        """Return an existing conversation id, or a freshly created one.

        An unknown session id is replaced, not rejected.
        """
        if session_id and await self.repository.conversation_exists(session_id):
            return session_id
        conversation_id = await self.repository.create_conversation()
        chat_logger.info(
            "conversation_created",
            conversation_id=conversation_id,
            requested_session_id=session_id,
        )
        return conversation_id

    async def handle_message(
        self, message: str, session_id: Optional[str] = None
    ) -> ChatReply:
        conversation_id = await self.resolve_session(session_id)
        log = chat_logger.bind(conversation_id=conversation_id)

        user_message_id = await self.repository.append_message(
            conversation_id, Sender.USER, message
        )

        stored = await self.repository.list_messages(conversation_id)
        # The new message goes to the generator as its own turn, not in history
        history = project_history([m for m in stored if m.id != user_message_id])

        reply = await self.reply_generator.generate_reply(history, message)

        try:
            await self.repository.append_message(conversation_id, Sender.AI, reply)
        except StoreError as e:
            log.warning(
                "ai_message_not_persisted", error_code=e.error_code, error=e.message
            )

        log.info("message_handled", history_turns=len(history))
        return ChatReply(reply=reply, session_id=conversation_id)

    async def get_history(self, session_id: str) -> List[Message]:
        return await self.repository.list_messages(session_id)
