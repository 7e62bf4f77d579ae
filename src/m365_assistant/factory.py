"""
Assistant Factory

Factory pattern for creating assistant components with proper dependency injection.
"""
from typing import Optional

from .config import AssistantConfig
from .core.chat_service import ActionHandler, ChatService
from .core.extractor import IntentExtractor
from .core.response_builder import ResponseBuilder


class AssistantFactory:
    """Factory for creating extractor and chat service instances"""

    @staticmethod
    def create_extractor(config: AssistantConfig) -> IntentExtractor:
        """
        Create an extractor from the configured (or packaged) catalogs

        Raises:
            CatalogError: if a configured catalog is invalid
        """
        return IntentExtractor(config=config.nlp)

    @staticmethod
    def create_chat_service(
        config: Optional[AssistantConfig] = None,
        extractor: Optional[IntentExtractor] = None,
        action_handler: Optional[ActionHandler] = None,
    ) -> ChatService:
        """
        Create a fully configured chat service with its own history

        Args:
            config: Assistant configuration, defaults when None
            extractor: Extractor to share between services; created when None
            action_handler: Optional collaborator hook

        Returns:
            ChatService initialized with the welcome message
        """
        config = config or AssistantConfig()
        extractor = extractor or AssistantFactory.create_extractor(config)

        response_builder = ResponseBuilder(
            extractor=extractor,
            clarification_threshold=config.chat.clarification_threshold,
        )

        service = ChatService(
            extractor=extractor,
            response_builder=response_builder,
            config=config.chat,
            action_handler=action_handler,
        )
        service.ensure_welcome()
        return service
