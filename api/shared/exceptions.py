"""Shared exceptions for the support chat API."""
from typing import Any, Dict, Optional


class SupportChatException(Exception):
    """Base exception for the support chat API."""

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class StoreError(SupportChatException):
    """Raised when a conversation store operation fails."""

    def __init__(self, operation: str, message: str, details: Optional[Dict[str, Any]] = None):
        full_message = f"Store operation '{operation}' failed: {message}"
        error_details: Dict[str, Any] = {"operation": operation}
        if details:
            error_details.update(details)
        super().__init__(full_message, "STORE_ERROR", error_details)
