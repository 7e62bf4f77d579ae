"""
Data models for the M365 assistant

Intent/entity results produced by the extractor, chat messages owned by
the chat service, and the catalog definitions that drive classification.
"""

from .intent import (
    IntentName,
    EntityType,
    IntentClassification,
    ExtractedEntity,
    IntentResult,
    TimeOfDay,
)
from .chat import (
    MessageRole,
    ChatMessage,
    generate_message_id,
)
from .catalog import (
    IntentDefinition,
    EntityDefinition,
    load_intent_catalog,
    load_entity_catalog,
)

__all__ = [
    # Intent models
    "IntentName",
    "EntityType",
    "IntentClassification",
    "ExtractedEntity",
    "IntentResult",
    "TimeOfDay",
    # Chat models
    "MessageRole",
    "ChatMessage",
    "generate_message_id",
    # Catalog
    "IntentDefinition",
    "EntityDefinition",
    "load_intent_catalog",
    "load_entity_catalog",
]
