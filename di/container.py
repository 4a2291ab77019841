from __future__ import annotations

from dependency_injector import containers, providers

from core.settings import SETTINGS
from infra.resources import DatabaseResource


class InfrastructureContainer(containers.DeclarativeContainer):
    """Infrastructure layer dependencies."""

    # Database (opened once in the application lifespan)
    database = providers.Resource(
        DatabaseResource,
        database_url=str(SETTINGS.DATABASE.DATABASE_URL),
    )


class ServiceContainer(containers.DeclarativeContainer):
    """Application services - depends on infrastructure."""

    infrastructure = providers.DependenciesContainer()

    # Conversation store
    conversation_repository = providers.Singleton(
        "api.features.chat.repository.ConversationRepository",
        database=infrastructure.database,
    )

    # Reply generation (LLM is created lazily, so a missing key only fails at use)
    reply_generator = providers.Singleton(
        "api.features.chat.generator.ReplyGenerator",
        api_key=SETTINGS.OPENAI.OPENAI_API_KEY.get_secret_value(),
        model=SETTINGS.OPENAI.OPENAI_MODEL,
        base_url=SETTINGS.OPENAI.OPENAI_BASE_URL,
        temperature=SETTINGS.GENERATION.TEMPERATURE,
        max_output_tokens=SETTINGS.GENERATION.MAX_OUTPUT_TOKENS,
        history_window=SETTINGS.GENERATION.HISTORY_WINDOW,
    )

    # Orchestrator
    chat_service = providers.Factory(
        "api.features.chat.service.ChatService",
        repository=conversation_repository,
        reply_generator=reply_generator,
    )


class ControllerContainer(containers.DeclarativeContainer):
    """Controller-specific dependencies."""

    services = providers.DependenciesContainer()

    chat_controller = providers.Factory(
        "api.features.chat.controller.ChatController",
        chat_service=services.chat_service,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """Main application container composing all sub-containers."""

    wiring_config = containers.WiringConfiguration(
        modules=[
            "api.features.chat.router",
        ]
    )

    infrastructure = providers.Container(InfrastructureContainer)
    services = providers.Container(ServiceContainer, infrastructure=infrastructure)
    controllers = providers.Container(ControllerContainer, services=services)
