"""DTOs for the Chat feature."""
from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict, Field

from api.features.chat.entities import Sender
from api.shared.dtos import BaseDTO
from core.settings import SETTINGS


class ChatMessageRequest(BaseDTO):
    """Incoming user message."""

    # Callers send `sessionId` only
    model_config = ConfigDict(populate_by_name=False)

    message: str = Field(
        min_length=1,
        max_length=SETTINGS.CHAT.MAX_MESSAGE_LENGTH,
        description="User message text",
    )
    session_id: Optional[str] = Field(
        default=None, alias="sessionId", description="Existing session identifier"
    )


class ChatMessageResponse(BaseDTO):
    """Generated reply and the session it belongs to."""

    reply: str = Field(description="Assistant reply")
    session_id: str = Field(alias="sessionId", description="Session identifier")


class MessageDTO(BaseDTO):
    """Stored conversation message."""

    id: str = Field(description="Message identifier")
    conversation_id: str = Field(
        alias="conversationId", description="Owning conversation identifier"
    )
    sender: Sender = Field(description="Message author: user or ai")
    text: str = Field(description="Message text")
    timestamp: datetime = Field(description="Creation timestamp")


class HistoryResponse(BaseDTO):
    """Messages of a session in chronological order."""

    messages: List[MessageDTO] = Field(description="Messages in chronological order")


class ErrorResponse(BaseDTO):
    """Sanitized error body returned to callers."""

    error: str = Field(description="Error summary")
    message: Optional[str] = Field(default=None, description="User-facing explanation")
