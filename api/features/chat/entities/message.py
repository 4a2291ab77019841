"""Message entity and the storage-side sender vocabulary."""
from datetime import datetime
from enum import Enum

from sqlalchemy import Enum as SQLEnum, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from api.shared.entities.base import BaseEntity
from api.shared.entities.types import UTCDateTime


class Sender(str, Enum):
    """Who authored a stored message."""

    USER = "user"
    AI = "ai"


class Message(BaseEntity):
    """A single immutable message within a conversation."""

    __tablename__ = "messages"
    __table_args__ = (
        Index("idx_messages_conversation_id_timestamp", "conversation_id", "timestamp"),
    )

    conversation_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("conversations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sender: Mapped[Sender] = mapped_column(
        SQLEnum(
            Sender,
            name="message_sender",
            native_enum=False,
            create_constraint=True,
            length=10,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, index=True
    )
