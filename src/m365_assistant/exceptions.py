"""
Custom exceptions for the M365 assistant.
"""


class AssistantError(Exception):
    """Base exception for the assistant package"""
    pass


class CatalogError(AssistantError):
    """Raised when an intent or entity catalog cannot be loaded or compiled"""
    pass


class ResponseGenerationError(AssistantError):
    """Raised when a chat reply cannot be built for a classified message"""

    def __init__(self, intent: str, message: str):
        self.intent = intent
        super().__init__(f"Failed to build response for intent '{intent}': {message}")
