"""
ChatService component

Owns the conversation history and turns user utterances into assistant
replies via the extractor and the response builder.
"""
import logging
from typing import List, Optional, Protocol, Tuple

from ..config import ChatConfig
from ..models.chat import ChatMessage, MessageRole
from ..models.intent import IntentResult
from .actions import ActionDraft
from .extractor import IntentExtractor
from .response_builder import ResponseBuilder

logger = logging.getLogger(__name__)


WELCOME_MESSAGE = """👋 Hello! I'm your AI assistant. I can help you with:

📅 **Calendar** - Schedule meetings, view your calendar
⏰ **Reminders** - Create and manage reminders
📁 **SharePoint** - Search for documents
💾 **Dataverse** - Query your data

Type your request in natural language, or type "help" for more options."""

# (label, utterance) shortcuts offered by the chat UI
QUICK_ACTIONS: Tuple[Tuple[str, str], ...] = (
    ("📅 Show my calendar", "Show my calendar for today"),
    ("⏰ Create reminder", "Remind me to check emails at 3pm"),
    ("📁 Search SharePoint", "Search SharePoint for project documents"),
    ("❓ Help", "Help"),
)


class ActionHandler(Protocol):
    """Hands a classified request to the calendar/SharePoint/Dataverse clients"""

    async def handle(self, result: IntentResult, draft: ActionDraft) -> None:
        ...


class ChatService:
    """
    Chat Service component

    Not safe for overlapping process_user_message calls on one instance:
    callers serialize sends (the UI disables input while a reply is loading).
    """

    def __init__(
        self,
        extractor: IntentExtractor,
        response_builder: ResponseBuilder,
        config: Optional[ChatConfig] = None,
        action_handler: Optional[ActionHandler] = None,
    ):
        """
        Initialize ChatService

        Args:
            extractor: Intent/entity extractor
            response_builder: Reply renderer
            config: Chat configuration (loading and apology texts)
            action_handler: Optional collaborator hook awaited for
                actionable intents before the reply is published
        """
        self.extractor = extractor
        self.response_builder = response_builder
        self.config = config or ChatConfig()
        self.action_handler = action_handler
        self.last_result: Optional[IntentResult] = None
        self._history: List[ChatMessage] = []

    @property
    def is_processing(self) -> bool:
        """True while a loading placeholder is in the history"""
        return any(message.is_loading for message in self._history)

    def get_history(self) -> List[ChatMessage]:
        """Copy of the conversation history in chronological order"""
        return list(self._history)

    def clear_history(self) -> None:
        self._history = []

    def add_system_message(self, content: str) -> ChatMessage:
        message = ChatMessage(content=content, role=MessageRole.SYSTEM)
        self._history.append(message)
        return message

    def ensure_welcome(self) -> List[ChatMessage]:
        """Add the welcome message if the history is empty, then return the history"""
        if not self._history:
            self.add_system_message(WELCOME_MESSAGE)
        return self.get_history()

    def reset(self) -> List[ChatMessage]:
        """Clear the conversation back to the single welcome message"""
        self.clear_history()
        return self.ensure_welcome()

    async def process_user_message(self, text: str) -> ChatMessage:
        """
        Process a user utterance and return the assistant reply

        The user message and a loading placeholder are appended before any
        processing. The placeholder is then removed and the resolved reply
        appended. Failures never propagate: the reply becomes the apology
        text and the error is logged.
        """
        user_message = ChatMessage(content=text, role=MessageRole.USER)
        self._history.append(user_message)

        placeholder = ChatMessage(
            content=self.config.loading_text,
            role=MessageRole.ASSISTANT,
            is_loading=True,
        )
        self._history.append(placeholder)

        try:
            content = await self._generate_response(text)
        except Exception as e:
            logger.error(f"Error processing message {user_message.id}: {e}")
            content = self.config.error_text

        self._history = [m for m in self._history if m.id != placeholder.id]
        reply = ChatMessage(content=content, role=MessageRole.ASSISTANT)
        self._history.append(reply)
        return reply

    async def _generate_response(self, text: str) -> str:
        result = self.extractor.classify(text)
        self.last_result = result
        logger.debug(
            f"Classified message as {result.intent.value} "
            f"(confidence={result.confidence}, entities={len(result.entities)})"
        )

        composed = self.response_builder.compose(result)

        if self.action_handler is not None and composed.draft is not None:
            await self.action_handler.handle(result, composed.draft)

        return composed.content
