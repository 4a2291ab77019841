"""Controller for the Chat feature.

Maps orchestrator outcomes onto the HTTP contract. Internal error detail is
logged here and never returned to the caller.
"""
import logging

from fastapi import HTTPException

from api.features.chat.dtos import (
    ChatMessageRequest,
    ChatMessageResponse,
    ErrorResponse,
    HistoryResponse,
    MessageDTO,
)
from api.features.chat.exceptions import (
    AuthError,
    NotConfiguredError,
    RateLimitError,
    ReplyGenerationException,
)
from api.features.chat.service import ChatService
from api.shared.exceptions import StoreError

logger = logging.getLogger("supportchat.chat")

CONFIGURATION_ERROR = ErrorResponse(
    error="AI service configuration error",
    message="Please check the AI service configuration",
)
RATE_LIMIT_ERROR = ErrorResponse(
    error="Rate limit exceeded",
    message="Too many requests. Please try again later.",
)
PROCESSING_ERROR = ErrorResponse(
    error="Failed to process message",
    message="An error occurred while processing your message. Please try again or rephrase your question.",
)
HISTORY_ERROR = ErrorResponse(
    error="Failed to fetch conversation history",
    message="An error occurred while fetching the conversation history.",
)
SESSION_REQUIRED_ERROR = ErrorResponse(error="Session ID is required")


def _http_error(status_code: int, body: ErrorResponse) -> HTTPException:
    return HTTPException(
        status_code=status_code, detail=body.model_dump(exclude_none=True)
    )


class ChatController:
    """Controller handling chat messages and history retrieval."""

    def __init__(self, chat_service: ChatService):
        self.chat_service = chat_service

    async def send_message(self, request: ChatMessageRequest) -> ChatMessageResponse:
        try:
            result = await self.chat_service.handle_message(
                request.message, request.session_id
            )
            return ChatMessageResponse(reply=result.reply, session_id=result.session_id)
        except (NotConfiguredError, AuthError) as e:
            logger.error(f"Reply generation misconfigured: {e.message}")
            raise _http_error(500, CONFIGURATION_ERROR)
        except RateLimitError as e:
            logger.warning(f"Reply generation rate limited: {e.message}")
            raise _http_error(429, RATE_LIMIT_ERROR)
        except ReplyGenerationException as e:
            logger.error(f"Reply generation failed [{e.error_code}]: {e.message}")
            raise _http_error(500, PROCESSING_ERROR)
        except StoreError as e:
            logger.error(f"Chat store failure: {e.message} {e.details}")
            raise _http_error(500, PROCESSING_ERROR)
        except Exception:
            logger.exception("Unexpected error while handling chat message")
            raise _http_error(500, PROCESSING_ERROR)

    async def get_history(self, session_id: str) -> HistoryResponse:
        if not session_id or not session_id.strip():
            raise _http_error(400, SESSION_REQUIRED_ERROR)
        try:
            messages = await self.chat_service.get_history(session_id)
        except StoreError as e:
            logger.error(f"Failed to fetch history: {e.message} {e.details}")
            raise _http_error(500, HISTORY_ERROR)
        except Exception:
            logger.exception("Unexpected error while fetching history")
            raise _http_error(500, HISTORY_ERROR)
        return HistoryResponse(
            messages=[MessageDTO.model_validate(m) for m in messages]
        )
