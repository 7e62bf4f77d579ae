"""
Intent classification data models

Structured output of the intent/entity extractor. Results are immutable
once produced.
"""
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class IntentName(str, Enum):
    """Closed set of intents the assistant understands"""
    CREATE_EVENT = "create_event"
    VIEW_CALENDAR = "view_calendar"
    CREATE_REMINDER = "create_reminder"
    VIEW_REMINDERS = "view_reminders"
    SEARCH_SHAREPOINT = "search_sharepoint"
    QUERY_DATAVERSE = "query_dataverse"
    HELP = "help"
    UNKNOWN = "unknown"


class EntityType(str, Enum):
    """Entity types recognised in user input"""
    DATE = "date"
    TIME = "time"
    DURATION = "duration"
    PERSON = "person"
    LOCATION = "location"
    PRIORITY = "priority"


def _check_intent_confidence(intent: IntentName, confidence: float) -> None:
    if intent == IntentName.UNKNOWN and confidence != 0.0:
        raise ValueError("unknown intent must carry confidence 0")
    if intent != IntentName.UNKNOWN and confidence <= 0.0:
        raise ValueError(f"intent '{intent.value}' must carry a positive confidence")


class IntentClassification(BaseModel):
    """Intent label with its heuristic confidence"""
    model_config = ConfigDict(frozen=True)

    intent: IntentName
    confidence: float = Field(ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _validate_confidence(self) -> "IntentClassification":
        _check_intent_confidence(self.intent, self.confidence)
        return self

    @classmethod
    def unknown(cls) -> "IntentClassification":
        return cls(intent=IntentName.UNKNOWN, confidence=0.0)


class ExtractedEntity(BaseModel):
    """Typed span of the input. The value is raw text, never parsed."""
    model_config = ConfigDict(frozen=True)

    type: EntityType
    value: str = Field(min_length=1)
    start_index: int = Field(ge=0)
    end_index: int

    @model_validator(mode="after")
    def _validate_span(self) -> "ExtractedEntity":
        if self.end_index <= self.start_index:
            raise ValueError("end_index must be greater than start_index")
        return self


class IntentResult(BaseModel):
    """
    Result of classifying one user utterance

    Entities are ordered by start_index ascending.
    """
    model_config = ConfigDict(frozen=True)

    intent: IntentName
    confidence: float = Field(ge=0.0, le=1.0)
    entities: Tuple[ExtractedEntity, ...] = ()
    original_text: str

    @model_validator(mode="after")
    def _validate_result(self) -> "IntentResult":
        _check_intent_confidence(self.intent, self.confidence)
        for previous, current in zip(self.entities, self.entities[1:]):
            if current.start_index < previous.start_index:
                raise ValueError("entities must be ordered by start_index")
        return self

    def first_entity(self, entity_type: EntityType) -> Optional[ExtractedEntity]:
        """Return the first entity of the given type, if any"""
        for entity in self.entities:
            if entity.type == entity_type:
                return entity
        return None

    def entities_of(self, *entity_types: EntityType) -> List[ExtractedEntity]:
        """Return all entities whose type is one of entity_types, in order"""
        return [entity for entity in self.entities if entity.type in entity_types]


class TimeOfDay(BaseModel):
    """Wall-clock time resolved from a time expression"""
    model_config = ConfigDict(frozen=True)

    hours: int = Field(ge=0, le=23)
    minutes: int = Field(ge=0, le=59)
