"""
Unit tests for the data models
"""
import pytest
from pydantic import ValidationError

from m365_assistant.models.chat import ChatMessage, MessageRole, generate_message_id
from m365_assistant.models.intent import (
    EntityType,
    ExtractedEntity,
    IntentClassification,
    IntentName,
    IntentResult,
    TimeOfDay,
)


def _entity(entity_type, value, start):
    return ExtractedEntity(
        type=entity_type, value=value, start_index=start, end_index=start + len(value)
    )


class TestExtractedEntity:
    """Test ExtractedEntity validation"""

    def test_valid_entity(self):
        entity = _entity(EntityType.DATE, "tomorrow", 4)
        assert entity.end_index == 12

    def test_empty_value_rejected(self):
        with pytest.raises(ValidationError):
            ExtractedEntity(type=EntityType.DATE, value="", start_index=0, end_index=1)

    def test_empty_span_rejected(self):
        with pytest.raises(ValidationError):
            ExtractedEntity(type=EntityType.TIME, value="3pm", start_index=5, end_index=5)

    def test_negative_start_rejected(self):
        with pytest.raises(ValidationError):
            ExtractedEntity(type=EntityType.TIME, value="3pm", start_index=-1, end_index=2)

    def test_entities_are_immutable(self):
        entity = _entity(EntityType.PERSON, "John", 0)
        with pytest.raises(ValidationError):
            entity.value = "Jane"


class TestIntentResult:
    """Test IntentResult invariants and helpers"""

    def test_unknown_requires_zero_confidence(self):
        with pytest.raises(ValidationError):
            IntentResult(intent=IntentName.UNKNOWN, confidence=0.3, original_text="x")

    def test_known_intent_requires_positive_confidence(self):
        with pytest.raises(ValidationError):
            IntentResult(intent=IntentName.HELP, confidence=0.0, original_text="x")

    def test_confidence_bounds(self):
        with pytest.raises(ValidationError):
            IntentResult(intent=IntentName.HELP, confidence=1.2, original_text="x")

    def test_entities_must_be_ordered(self):
        with pytest.raises(ValidationError):
            IntentResult(
                intent=IntentName.CREATE_EVENT,
                confidence=0.9,
                entities=(_entity(EntityType.TIME, "3pm", 10), _entity(EntityType.DATE, "today", 2)),
                original_text="x",
            )

    def test_entity_lookup(self):
        result = IntentResult(
            intent=IntentName.CREATE_EVENT,
            confidence=0.9,
            entities=(
                _entity(EntityType.PERSON, "Ann", 0),
                _entity(EntityType.DATE, "today", 4),
                _entity(EntityType.PERSON, "Bob", 10),
            ),
            original_text="Ann today Bob",
        )
        assert result.first_entity(EntityType.PERSON).value == "Ann"
        assert result.first_entity(EntityType.LOCATION) is None
        assert [e.value for e in result.entities_of(EntityType.PERSON)] == ["Ann", "Bob"]
        assert len(result.entities_of(EntityType.PERSON, EntityType.DATE)) == 3

    def test_unknown_classification(self):
        classification = IntentClassification.unknown()
        assert classification.intent == IntentName.UNKNOWN
        assert classification.confidence == 0.0

    def test_intent_names_serialize_as_strings(self):
        result = IntentResult(intent=IntentName.HELP, confidence=0.9, original_text="help")
        assert result.model_dump(mode="json")["intent"] == "help"


class TestTimeOfDay:
    def test_range(self):
        assert TimeOfDay(hours=23, minutes=59).hours == 23
        with pytest.raises(ValidationError):
            TimeOfDay(hours=24, minutes=0)
        with pytest.raises(ValidationError):
            TimeOfDay(hours=0, minutes=60)


class TestChatMessage:
    """Test chat message defaults"""

    def test_defaults(self):
        message = ChatMessage(content="hi", role=MessageRole.USER)
        assert message.id.startswith("msg_")
        assert message.timestamp.tzinfo is not None
        assert message.is_loading is False

    def test_ids_are_unique_and_increasing(self):
        ids = [generate_message_id() for _ in range(50)]
        assert len(set(ids)) == 50
        assert ids == sorted(ids)
