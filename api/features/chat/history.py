"""Projection of stored messages into provider-facing conversation turns."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Sequence

from api.features.chat.entities import Message, Sender


class Role(str, Enum):
    """Speaker labels understood by the generation provider."""

    USER = "user"
    MODEL = "model"


_ROLE_BY_SENDER: Dict[Sender, Role] = {
    Sender.USER: Role.USER,
    Sender.AI: Role.MODEL,
}


def role_for_sender(sender: Sender) -> Role:
    return _ROLE_BY_SENDER[Sender(sender)]


@dataclass(frozen=True)
class HistoryTurn:
    role: Role
    content: str


def project_history(messages: Sequence[Message]) -> List[HistoryTurn]:
    """Map stored messages one-to-one onto turns, keeping their order.

    No windowing happens here; the reply generator decides how much of the
    history it sends.
    """
    return [
        HistoryTurn(role=role_for_sender(m.sender), content=m.text) for m in messages
    ]
