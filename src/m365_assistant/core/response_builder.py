"""
ResponseBuilder component

Renders the assistant's Markdown-like reply for a classified utterance.
Replies are template-based and deterministic: each intent has one
template, and the draft built for the collaborators supplies its values.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Optional

from jinja2 import Environment

from ..exceptions import ResponseGenerationError
from ..models.intent import IntentName, IntentResult
from . import actions
from .extractor import IntentExtractor

logger = logging.getLogger(__name__)


DEFAULT_TEMPLATES: Dict[str, str] = {
    "clarification": (
        "I think you might be asking about {{ intent_label }}, but I'm not entirely sure. "
        "Could you please rephrase your request?"
    ),
    "create_event": """📅 I'll help you create an event.

**Date:** {{ draft.date_text or "Please specify a date" }}
**Time:** {{ draft.time_text or "Please specify a time" }}
{% if draft.attendees %}
**With:** {{ draft.attendees | join(", ") }}
{% endif %}
{% if draft.location %}
**Location:** {{ draft.location }}
{% endif %}
{% if draft.duration_text %}
**Duration:** {{ draft.duration_text }}
{% endif %}

*To confirm this event, please use the Calendar page to finalize the details.*""",
    "view_calendar": """📅 **Your Calendar**

{% if draft.date_text %}
Showing events for: {{ draft.date_text }}
{% else %}
Showing today's events:
{% endif %}

*Navigate to the Calendar page to view and manage your events.*""",
    "create_reminder": """⏰ I'll create a reminder for you.

**Task:** {{ draft.task }}
{% if draft.date_text %}
**Due:** {{ draft.date_text }}{{ " at " ~ draft.time_text if draft.time_text else "" }}
{% endif %}
{% if draft.priority %}
**Priority:** {{ draft.priority }}
{% endif %}

*Navigate to the Reminders page to view and manage your reminders.*""",
    "view_reminders": """⏰ **Your Reminders**

*Navigate to the Reminders page to view all your reminders and tasks.*""",
    "search_sharepoint": """📁 **SharePoint Search**

Searching for: "{{ draft.query }}"

*To access SharePoint content, please ensure you are authenticated and have the appropriate permissions.*""",
    "query_dataverse": """💾 **Dataverse Query**

Querying: {{ draft.collection }}
{% if draft.filters %}
Filters:
{% for item in draft.filters %}
- {{ item.field }}: {{ item.value }}
{% endfor %}
{% endif %}

*To access Dataverse data, please ensure you are authenticated and have the appropriate permissions.*""",
    "unknown": """I'm not sure how to help with "{{ text }}".

Here are some things I can help you with:
- 📅 Schedule meetings and view your calendar
- ⏰ Create and manage reminders
- 📁 Search SharePoint for documents
- 💾 Query data from Dataverse

Type "help" for more detailed information about available commands.""",
}


@dataclass(frozen=True)
class ComposedResponse:
    """Rendered reply plus the collaborator draft it was rendered from"""
    content: str
    draft: Optional[actions.ActionDraft] = None
    needs_clarification: bool = False


class ResponseBuilder:
    """
    Response Builder component

    Maps an IntentResult to reply text through a dispatch table keyed on
    intent. Low-confidence guesses get a clarification prompt instead.
    """

    def __init__(
        self,
        extractor: IntentExtractor,
        templates: Optional[Dict[str, str]] = None,
        clarification_threshold: float = 0.5,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize ResponseBuilder

        Args:
            extractor: Extractor supplying the help text
            templates: Overrides for DEFAULT_TEMPLATES, keyed by template name
            clarification_threshold: Confidence below which a known intent
                is answered with a clarification prompt
            clock: Reference time source for resolving relative dates
        """
        self.extractor = extractor
        self.templates = {**DEFAULT_TEMPLATES, **(templates or {})}
        self.clarification_threshold = clarification_threshold
        self.clock = clock or datetime.now
        self.jinja_env = Environment(trim_blocks=True, lstrip_blocks=True)

        self._builders = {
            IntentName.CREATE_EVENT: self._build_create_event,
            IntentName.VIEW_CALENDAR: self._build_view_calendar,
            IntentName.CREATE_REMINDER: self._build_create_reminder,
            IntentName.VIEW_REMINDERS: self._build_view_reminders,
            IntentName.SEARCH_SHAREPOINT: self._build_search_sharepoint,
            IntentName.QUERY_DATAVERSE: self._build_query_dataverse,
            IntentName.HELP: self._build_help,
        }

    def build(self, result: IntentResult) -> str:
        """Reply text for a classified utterance"""
        return self.compose(result).content

    def compose(self, result: IntentResult) -> ComposedResponse:
        """
        Build the reply and its collaborator draft

        Raises:
            ResponseGenerationError: if a template fails to render
        """
        if result.confidence < self.clarification_threshold and result.intent != IntentName.UNKNOWN:
            logger.debug(
                f"Low confidence {result.confidence} for {result.intent.value}, asking to rephrase"
            )
            content = self._render(
                "clarification",
                result.intent,
                intent_label=result.intent.value.replace("_", " "),
            )
            return ComposedResponse(content=content, needs_clarification=True)

        builder = self._builders.get(result.intent, self._build_unknown)
        return builder(result)

    def _render(self, template_name: str, intent: IntentName, **template_vars) -> str:
        try:
            template = self.jinja_env.from_string(self.templates[template_name])
            return template.render(**template_vars)
        except Exception as e:
            logger.error(f"Error rendering template '{template_name}': {e}")
            raise ResponseGenerationError(intent.value, str(e)) from e

    def _build_create_event(self, result: IntentResult) -> ComposedResponse:
        draft = actions.build_event_draft(result, self.clock())
        return ComposedResponse(
            content=self._render("create_event", result.intent, draft=draft), draft=draft
        )

    def _build_view_calendar(self, result: IntentResult) -> ComposedResponse:
        draft = actions.build_calendar_view_draft(result, self.clock())
        return ComposedResponse(
            content=self._render("view_calendar", result.intent, draft=draft), draft=draft
        )

    def _build_create_reminder(self, result: IntentResult) -> ComposedResponse:
        draft = actions.build_reminder_draft(result, self.clock())
        return ComposedResponse(
            content=self._render("create_reminder", result.intent, draft=draft), draft=draft
        )

    def _build_view_reminders(self, result: IntentResult) -> ComposedResponse:
        return ComposedResponse(content=self._render("view_reminders", result.intent))

    def _build_search_sharepoint(self, result: IntentResult) -> ComposedResponse:
        draft = actions.build_sharepoint_draft(result)
        return ComposedResponse(
            content=self._render("search_sharepoint", result.intent, draft=draft), draft=draft
        )

    def _build_query_dataverse(self, result: IntentResult) -> ComposedResponse:
        draft = actions.build_dataverse_draft(result)
        return ComposedResponse(
            content=self._render("query_dataverse", result.intent, draft=draft), draft=draft
        )

    def _build_help(self, result: IntentResult) -> ComposedResponse:
        return ComposedResponse(content=self.extractor.get_help_text())

    def _build_unknown(self, result: IntentResult) -> ComposedResponse:
        return ComposedResponse(
            content=self._render("unknown", result.intent, text=result.original_text)
        )
