"""Conversation entity: one support session."""
from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from api.shared.entities.base import BaseEntity
from api.shared.entities.types import UTCDateTime


class Conversation(BaseEntity):
    """A chat session. Created once, never updated."""

    __tablename__ = "conversations"

    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
