"""Conversation store: conversations and their ordered messages.

Every operation opens its own session and commits on its own. Nothing here
spans several operations in one transaction.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List, Optional
import uuid

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from api.features.chat.entities import Conversation, Message, Sender
from api.shared.exceptions import StoreError
from infra.resources import DatabaseResource


class ConversationRepository:
    """Create, look up, append to and list conversations."""

    def __init__(self, database: DatabaseResource):
        self.database = database
        self._last_timestamp: Optional[datetime] = None

    def _next_timestamp(self) -> datetime:
        # Strictly increasing within the process so turn order survives clock ties
        now = datetime.now(timezone.utc)
        if self._last_timestamp is not None and now <= self._last_timestamp:
            now = self._last_timestamp + timedelta(microseconds=1)
        self._last_timestamp = now
        return now

    async def create_conversation(self) -> str:
        conversation = Conversation(
            id=str(uuid.uuid4()), created_at=self._next_timestamp()
        )
        try:
            async with self.database.get_session() as session:
                session.add(conversation)
                await session.commit()
        except SQLAlchemyError as e:
            raise StoreError("create_conversation", str(e)) from e
        return conversation.id

    async def conversation_exists(self, conversation_id: str) -> bool:
        stmt = select(Conversation.id).where(Conversation.id == conversation_id)
        try:
            async with self.database.get_session() as session:
                result = await session.execute(stmt)
                return result.scalar_one_or_none() is not None
        except SQLAlchemyError as e:
            raise StoreError(
                "conversation_exists", str(e), {"conversation_id": conversation_id}
            ) from e

    async def append_message(
        self,
        conversation_id: str,
        sender: Sender,
        text: str,
    ) -> str:
        """Insert a message; fails with StoreError for an unknown conversation."""
        message = Message(
            id=str(uuid.uuid4()),
            conversation_id=conversation_id,
            sender=Sender(sender),
            text=text,
            timestamp=self._next_timestamp(),
        )
        try:
            async with self.database.get_session() as session:
                session.add(message)
                await session.commit()
        except SQLAlchemyError as e:
            raise StoreError(
                "append_message",
                str(e),
                {"conversation_id": conversation_id, "sender": Sender(sender).value},
            ) from e
        return message.id

    async def list_messages(self, conversation_id: str) -> List[Message]:
        """All messages of a conversation, oldest first. Unknown ids yield []."""
        stmt = (
            select(Message)
            .where(Message.conversation_id == conversation_id)
            .order_by(Message.timestamp.asc())
        )
        try:
            async with self.database.get_session() as session:
                result = await session.execute(stmt)
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise StoreError(
                "list_messages", str(e), {"conversation_id": conversation_id}
            ) from e
