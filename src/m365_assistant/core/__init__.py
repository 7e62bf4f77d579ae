"""
Core components for the M365 assistant

The extractor classifies utterances; the response builder and chat
service turn classifications into conversation replies.
"""

from .extractor import IntentExtractor, HELP_TEXT
from .response_builder import ResponseBuilder, ComposedResponse, DEFAULT_TEMPLATES
from .chat_service import ChatService, ActionHandler, WELCOME_MESSAGE, QUICK_ACTIONS
from .temporal import parse_date, parse_time, parse_duration, resolve_when

__all__ = [
    "IntentExtractor",
    "HELP_TEXT",
    "ResponseBuilder",
    "ComposedResponse",
    "DEFAULT_TEMPLATES",
    "ChatService",
    "ActionHandler",
    "WELCOME_MESSAGE",
    "QUICK_ACTIONS",
    "parse_date",
    "parse_time",
    "parse_duration",
    "resolve_when",
]
