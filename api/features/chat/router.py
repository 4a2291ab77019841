"""Router for the Chat feature.

Mounted twice by the application (`/chat` and `/api/chat`) so both
front-ends serve the same contract.
"""
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends

from di.container import ApplicationContainer as DependencyContainer
from api.features.chat.controller import ChatController
from api.features.chat.dtos import (
    ChatMessageRequest,
    ChatMessageResponse,
    ErrorResponse,
    HistoryResponse,
)
from api.shared.dtos import HealthCheckResponse
from api.shared.response import ResponseModel

router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.get("/health", response_model=ResponseModel[HealthCheckResponse])
async def health_check():
    return ResponseModel.success(
        data=HealthCheckResponse(status="healthy", dependencies={"database": "ok"}),
        message="Chat service is healthy",
    )


@router.post(
    "/message", response_model=ChatMessageResponse, responses=_ERROR_RESPONSES
)
@inject
async def send_message(
    request: ChatMessageRequest,
    controller: ChatController = Depends(
        Provide[DependencyContainer.controllers.chat_controller]
    ),
):
    """Send a user message and receive the assistant reply."""
    return await controller.send_message(request)


@router.get("/history", response_model=HistoryResponse, responses=_ERROR_RESPONSES)
@router.get("/history/", include_in_schema=False)
@inject
async def get_history_without_session(
    controller: ChatController = Depends(
        Provide[DependencyContainer.controllers.chat_controller]
    ),
):
    return await controller.get_history("")


@router.get(
    "/history/{session_id}",
    response_model=HistoryResponse,
    responses=_ERROR_RESPONSES,
)
@inject
async def get_history(
    session_id: str,
    controller: ChatController = Depends(
        Provide[DependencyContainer.controllers.chat_controller]
    ),
):
    """Fetch every message of a session, oldest first."""
    return await controller.get_history(session_id)
