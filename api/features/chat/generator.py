"""Reply generation adapter around a LangChain chat model.

Composes the provider call (persona preamble, recent history window, the new
user message), invokes the model and turns provider failures into the chat
feature's exception types.
"""
from __future__ import annotations

import time
from typing import Any, List, Optional, Sequence, Tuple, Type

import structlog
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_openai import ChatOpenAI

from api.features.chat.exceptions import (
    AuthError,
    EmptyReplyError,
    GenerationError,
    NotConfiguredError,
    RateLimitError,
    ReplyGenerationException,
    SafetyBlockedError,
)
from api.features.chat.history import HistoryTurn, Role
from assistant.prompts.persona.store_knowledge import build_persona_preamble

gen_logger = structlog.get_logger("supportchat.generation")


# Best-effort: matched case-sensitively against the provider's error text, in
# order. Provider wording changes; extend this table when it does.
GENERATION_ERROR_PATTERNS: Tuple[
    Tuple[Type[ReplyGenerationException], Tuple[str, ...]], ...
] = (
    (AuthError, ("API key", "API_KEY", "authentication", "invalid_api_key")),
    (
        RateLimitError,
        ("quota", "rate limit", "Rate limit", "RESOURCE_EXHAUSTED", "rate_limit_exceeded"),
    ),
    (SafetyBlockedError, ("safety", "SAFETY", "content_filter")),
)


def classify_generation_error(error: BaseException) -> ReplyGenerationException:
    """Map a provider failure onto AuthError, RateLimitError, SafetyBlockedError or GenerationError."""
    description = str(error) or type(error).__name__
    details = {"provider_error": type(error).__name__}
    for error_cls, patterns in GENERATION_ERROR_PATTERNS:
        if any(pattern in description for pattern in patterns):
            return error_cls(description, details)
    return GenerationError(f"Failed to generate reply: {description}", details)


def _to_langchain_message(turn: HistoryTurn) -> BaseMessage:
    if Role(turn.role) is Role.USER:
        return HumanMessage(content=turn.content)
    return AIMessage(content=turn.content)


def _content_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    # Multi-part content: keep the text parts only
    parts = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(str(part.get("text", "")))
    return "".join(parts)


class ReplyGenerator:
    def __init__(
        self,
        *,
        api_key: str = "",
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        max_output_tokens: int = 500,
        history_window: int = 10,
        base_url: Optional[str] = None,
        llm: Optional[BaseChatModel] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self.history_window = history_window
        self.base_url = base_url
        self._llm = llm

    @property
    def is_configured(self) -> bool:
        return self._llm is not None or bool(self.api_key)

    def _get_llm(self) -> BaseChatModel:
        if self._llm is None:
            if not self.api_key:
                raise NotConfiguredError("OPENAI_API_KEY")
            self._llm = ChatOpenAI(
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_output_tokens,
                openai_api_key=self.api_key,
                openai_api_base=self.base_url,
            )
        return self._llm

    def window(self, history: Sequence[HistoryTurn]) -> List[HistoryTurn]:
        """The most recent `history_window` turns, oldest first."""
        if self.history_window <= 0:
            return []
        return list(history)[-self.history_window:]

    def compose_messages(
        self, history: Sequence[HistoryTurn], new_message: str
    ) -> List[BaseMessage]:
        preamble, acknowledgment = build_persona_preamble()
        messages: List[BaseMessage] = [
            HumanMessage(content=preamble),
            AIMessage(content=acknowledgment),
        ]
        messages.extend(_to_langchain_message(turn) for turn in self.window(history))
        messages.append(HumanMessage(content=new_message))
        return messages

    async def generate_reply(
        self, history: Sequence[HistoryTurn], new_message: str
    ) -> str:
        llm = self._get_llm()
        messages = self.compose_messages(history, new_message)

        start_time = time.time()
        try:
            result = await llm.ainvoke(messages)
        except Exception as e:
            classified = classify_generation_error(e)
            gen_logger.error(
                "reply_generation_failed",
                model=self.model,
                error_code=classified.error_code,
                error=str(e),
                latency_ms=int((time.time() - start_time) * 1000),
            )
            raise classified from e

        text = _content_text(getattr(result, "content", result))
        if not text.strip():
            gen_logger.warning("reply_generation_empty", model=self.model)
            raise EmptyReplyError(self.model)

        gen_logger.info(
            "reply_generated",
            model=self.model,
            context_messages=len(messages),
            latency_ms=int((time.time() - start_time) * 1000),
        )
        return text.strip()
