"""Exceptions for the Chat feature."""
from typing import Any, Dict, Optional

from api.shared.exceptions import SupportChatException


class ChatException(SupportChatException):
    """Base exception for chat operations."""

    pass


class ReplyGenerationException(ChatException):
    """Base exception for failures of the reply generation provider."""

    def __init__(
        self,
        message: str,
        error_code: str = "GENERATION_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details)


class NotConfiguredError(ReplyGenerationException):
    """Raised when no provider credential is configured. Never retried."""

    def __init__(self, setting: str):
        message = f"Reply generation is not configured. Please set {setting}."
        super().__init__(message, "NOT_CONFIGURED", {"setting": setting})


class AuthError(ReplyGenerationException):
    """Raised when the provider rejects the configured credential."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "PROVIDER_AUTH_ERROR", details)


class RateLimitError(ReplyGenerationException):
    """Raised when the provider reports quota or rate limit exhaustion."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "RATE_LIMIT_EXCEEDED", details)


class SafetyBlockedError(ReplyGenerationException):
    """Raised when the provider blocks the exchange with its content filters."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "SAFETY_BLOCKED", details)


class GenerationError(ReplyGenerationException):
    """Raised for any other provider failure."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "GENERATION_ERROR", details)


class EmptyReplyError(ReplyGenerationException):
    """Raised when the provider returns a blank reply."""

    def __init__(self, model: str):
        message = f"Empty reply from model '{model}'"
        super().__init__(message, "EMPTY_REPLY", {"model": model})
