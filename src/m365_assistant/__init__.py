"""
M365 Assistant Package

Natural-language core of a Microsoft 365 business dashboard. It turns chat
commands into structured requests for the calendar, reminders, SharePoint
and Dataverse:
- Intent classification with confidence scoring
- Entity extraction (dates, times, durations, people, locations, priorities)
- Template-based chat replies and conversation history

Main Components:
- IntentExtractor: catalog-driven intent/entity extraction
- ResponseBuilder: per-intent reply rendering
- ChatService: conversation history and message processing

Usage:
    from m365_assistant import AssistantFactory

    service = AssistantFactory.create_chat_service()
    reply = await service.process_user_message("Remind me to call John at 3pm tomorrow")
"""

from .core import (
    IntentExtractor,
    ResponseBuilder,
    ChatService,
    ActionHandler,
    parse_date,
    parse_time,
)
from .models import (
    IntentName,
    EntityType,
    IntentClassification,
    ExtractedEntity,
    IntentResult,
    TimeOfDay,
    MessageRole,
    ChatMessage,
)
from .config import (
    AssistantConfig,
    NLPConfig,
    ChatConfig,
    LoggingConfig,
    load_config_from_env,
    load_config_from_dict,
    load_config_from_file,
    get_config,
)
from .exceptions import AssistantError, CatalogError, ResponseGenerationError
from .factory import AssistantFactory

__version__ = "0.1.0"
__author__ = "M365 Assistant Team"

__all__ = [
    # Core components
    "IntentExtractor",
    "ResponseBuilder",
    "ChatService",
    "ActionHandler",
    "parse_date",
    "parse_time",
    # Data models
    "IntentName",
    "EntityType",
    "IntentClassification",
    "ExtractedEntity",
    "IntentResult",
    "TimeOfDay",
    "MessageRole",
    "ChatMessage",
    # Configuration
    "AssistantConfig",
    "NLPConfig",
    "ChatConfig",
    "LoggingConfig",
    "load_config_from_env",
    "load_config_from_dict",
    "load_config_from_file",
    "get_config",
    # Errors
    "AssistantError",
    "CatalogError",
    "ResponseGenerationError",
    # Factory
    "AssistantFactory",
    # Metadata
    "__version__",
    "__author__",
]
