"""
IntentExtractor component

Rule-based natural-language understanding for the assistant: intent
classification with confidence scoring and multi-type entity extraction,
both driven by declarative catalogs.
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Tuple

from ..config import NLPConfig
from ..models.catalog import (
    EntityDefinition,
    IntentDefinition,
    load_entity_catalog,
    load_intent_catalog,
)
from ..models.intent import (
    ExtractedEntity,
    IntentClassification,
    IntentName,
    IntentResult,
    TimeOfDay,
)
from . import temporal

logger = logging.getLogger(__name__)


HELP_TEXT = """**Available Commands:**

📅 **Calendar Management**
- "Schedule a meeting with [name] on [date] at [time]"
- "Show my calendar for today"
- "What meetings do I have this week?"

⏰ **Reminders**
- "Remind me to [task] at [time]"
- "Set a reminder for [date]"
- "Show my reminders"

📁 **SharePoint**
- "Find documents in SharePoint about [topic]"
- "Search SharePoint for [query]"

💾 **Dataverse**
- "Get contacts from Dataverse"
- "Query accounts from Dataverse"
- "Show my leads"

❓ **Help**
- "Help" - Show this help text
- "What can you do?" - List capabilities"""


class IntentExtractor:
    """
    Intent/entity extractor

    Stateless once constructed: classify() has no side effects and one
    instance can serve any number of conversations.
    """

    def __init__(
        self,
        intent_catalog: Optional[Sequence[IntentDefinition]] = None,
        entity_catalog: Optional[Sequence[EntityDefinition]] = None,
        config: Optional[NLPConfig] = None,
    ):
        """
        Initialize IntentExtractor

        Args:
            intent_catalog: Ordered intent definitions. Loaded from the
                configured (or packaged) YAML catalog when None.
            entity_catalog: Ordered entity definitions, loaded likewise.
            config: Scoring configuration
        """
        self.config = config or NLPConfig()
        self.intent_catalog: Tuple[IntentDefinition, ...] = tuple(
            intent_catalog
            if intent_catalog is not None
            else load_intent_catalog(self.config.intents_catalog)
        )
        self.entity_catalog: Tuple[EntityDefinition, ...] = tuple(
            entity_catalog
            if entity_catalog is not None
            else load_entity_catalog(self.config.entities_catalog)
        )
        logger.debug(
            f"IntentExtractor initialized with {len(self.intent_catalog)} intents "
            f"and {len(self.entity_catalog)} entity types"
        )

    def classify(self, text: str) -> IntentResult:
        """
        Classify an utterance and extract its entities

        Never raises: on any internal failure the result is the unknown
        intent with no entities.
        """
        try:
            classification = self.detect_intent(text)
            entities = self.extract_entities(text)
            return IntentResult(
                intent=classification.intent,
                confidence=classification.confidence,
                entities=entities,
                original_text=text,
            )
        except Exception as e:
            logger.error(f"Intent classification failed for {text[:100]!r}: {e}")
            return IntentResult(
                intent=IntentName.UNKNOWN,
                confidence=0.0,
                entities=(),
                original_text=text,
            )

    def detect_intent(self, text: str) -> IntentClassification:
        """
        Pick the highest-confidence intent

        A pattern match scores pattern_confidence. Otherwise k distinct
        keyword hits score min(keyword_cap, keyword_base + keyword_step * k).
        Only a strictly greater score replaces the current best, so the
        earlier catalog entry wins ties.
        """
        best_intent = IntentName.UNKNOWN
        best_confidence = 0.0
        text_lower = text.lower()

        for definition in self.intent_catalog:
            confidence = self._score(definition, text, text_lower)
            if confidence > best_confidence:
                best_intent = definition.name
                best_confidence = confidence

        if best_intent == IntentName.UNKNOWN:
            return IntentClassification.unknown()
        return IntentClassification(intent=best_intent, confidence=best_confidence)

    def _score(self, definition: IntentDefinition, text: str, text_lower: str) -> float:
        if any(pattern.search(text) for pattern in definition.patterns):
            return self.config.pattern_confidence

        matched = sum(1 for keyword in definition.keywords if keyword in text_lower)
        if matched == 0:
            return 0.0
        score = self.config.keyword_base + self.config.keyword_step * matched
        return round(min(self.config.keyword_cap, score), 4)

    def extract_entities(self, text: str) -> List[ExtractedEntity]:
        """
        Extract entities of every catalog type

        Overlapping entities of different types are all kept. Within a type,
        a second match with the same start and value is dropped.
        """
        entities: List[ExtractedEntity] = []
        seen = set()

        for definition in self.entity_catalog:
            for pattern in definition.patterns:
                for match in pattern.finditer(text):
                    span = self._value_span(match)
                    if span is None:
                        continue
                    start, end = span
                    value = text[start:end]
                    key = (definition.type, start, value)
                    if key in seen:
                        continue
                    seen.add(key)
                    entities.append(
                        ExtractedEntity(
                            type=definition.type,
                            value=value,
                            start_index=start,
                            end_index=end,
                        )
                    )

        # list.sort is stable, ties keep catalog/scan order
        entities.sort(key=lambda entity: entity.start_index)
        return entities

    @staticmethod
    def _value_span(match) -> Optional[Tuple[int, int]]:
        """Span of the trimmed value: first capturing group if set, else whole match"""
        group = 1 if match.re.groups and match.group(1) else 0
        raw = match.group(group)
        stripped = raw.strip()
        if not stripped:
            return None
        start = match.start(group) + (len(raw) - len(raw.lstrip()))
        return start, start + len(stripped)

    def parse_date(self, text: str, now: Optional[datetime] = None) -> Optional[datetime]:
        return temporal.parse_date(text, now)

    def parse_time(self, text: str) -> Optional[TimeOfDay]:
        return temporal.parse_time(text)

    def parse_duration(self, text: str) -> Optional[timedelta]:
        return temporal.parse_duration(text)

    def get_help_text(self) -> str:
        """Multi-section help listing the supported commands"""
        return HELP_TEXT

    def supported_intents(self) -> List[str]:
        return [definition.name.value for definition in self.intent_catalog]

    def supported_entities(self) -> List[str]:
        return [definition.type.value for definition in self.entity_catalog]
