"""
Chat conversation data models
"""
import itertools
import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field

_message_sequence = itertools.count(1)


def generate_message_id() -> str:
    """Unique message id; the numeric prefix orders ids by creation time"""
    return f"msg_{next(_message_sequence):08d}_{uuid.uuid4().hex[:9]}"


class MessageRole(str, Enum):
    """Author of a chat message"""
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ChatMessage(BaseModel):
    """Single entry of the conversation history"""
    id: str = Field(default_factory=generate_message_id)
    content: str
    role: MessageRole
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    is_loading: bool = False
