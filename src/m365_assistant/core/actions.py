"""
Action drafts

Intent-specific post-processing layered on top of the generic entity
extractor. Each draft carries the structured parameters a calendar,
reminder, SharePoint or Dataverse client would receive; the chat reply is
rendered from the same draft.
"""
import re
from datetime import datetime, timedelta
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from ..models.intent import EntityType, IntentName, IntentResult
from . import temporal

DEFAULT_TASK = "your task"
DEFAULT_QUERY = "your query"
DEFAULT_COLLECTION = "records"

_TASK_RE = re.compile(
    r"remind\s+me\s+(?:to|about)\s+(.+?)(?:\s+(?:on|at|by)\b|$)",
    re.IGNORECASE,
)
_SEARCH_QUERY_RE = re.compile(
    r"(?:find|search|look\s+for)\s+(?:files?|documents?)?\s*"
    r"(?:in\s+sharepoint\s+)?(?:for\s+)?(.+)",
    re.IGNORECASE,
)
# Checked in order, the first substring found wins
_DATAVERSE_COLLECTIONS = (
    ("contact", "contacts"),
    ("account", "accounts"),
    ("lead", "leads"),
)


class EventDraft(BaseModel):
    """Parameters for creating a calendar event"""
    date_text: Optional[str] = None
    time_text: Optional[str] = None
    start: Optional[datetime] = None
    duration_text: Optional[str] = None
    duration: Optional[timedelta] = None
    attendees: List[str] = Field(default_factory=list)
    location: Optional[str] = None


class CalendarViewDraft(BaseModel):
    """Parameters for listing calendar events"""
    date_text: Optional[str] = None
    day: Optional[datetime] = None


class ReminderDraft(BaseModel):
    """Parameters for creating a reminder"""
    task: str = DEFAULT_TASK
    date_text: Optional[str] = None
    time_text: Optional[str] = None
    due: Optional[datetime] = None
    priority: Optional[str] = None


class SharePointSearchDraft(BaseModel):
    """Parameters for a SharePoint search"""
    query: str = DEFAULT_QUERY


class DataverseFilter(BaseModel):
    field: str
    value: str


class DataverseQueryDraft(BaseModel):
    """Parameters for a Dataverse query"""
    collection: str = DEFAULT_COLLECTION
    filters: List[DataverseFilter] = Field(default_factory=list)


ActionDraft = Union[
    EventDraft,
    CalendarViewDraft,
    ReminderDraft,
    SharePointSearchDraft,
    DataverseQueryDraft,
]


def _clean_phrase(phrase: str) -> str:
    return phrase.strip().rstrip("?!.").strip()


def extract_task(text: str) -> str:
    """
    Task phrase of a "remind me to/about <task>" request

    The phrase stops before a trailing on/at/by clause. Falls back to
    DEFAULT_TASK when the trigger phrase is absent.
    """
    match = _TASK_RE.search(text)
    if not match:
        return DEFAULT_TASK
    return _clean_phrase(match.group(1)) or DEFAULT_TASK


def extract_search_query(text: str) -> str:
    """Query phrase of a "find/search/look for ... <query>" request"""
    match = _SEARCH_QUERY_RE.search(text)
    if not match:
        return DEFAULT_QUERY
    return _clean_phrase(match.group(1)) or DEFAULT_QUERY


def infer_dataverse_collection(text: str) -> str:
    """Target entity collection named in the text, 'records' when none is"""
    text_lower = text.lower()
    for marker, collection in _DATAVERSE_COLLECTIONS:
        if marker in text_lower:
            return collection
    return DEFAULT_COLLECTION


def build_event_draft(result: IntentResult, now: Optional[datetime] = None) -> EventDraft:
    date_entity = result.first_entity(EntityType.DATE)
    time_entity = result.first_entity(EntityType.TIME)
    duration_entity = result.first_entity(EntityType.DURATION)
    location_entity = result.first_entity(EntityType.LOCATION)

    return EventDraft(
        date_text=date_entity.value if date_entity else None,
        time_text=time_entity.value if time_entity else None,
        start=temporal.resolve_when(result.entities, now),
        duration_text=duration_entity.value if duration_entity else None,
        duration=temporal.parse_duration(duration_entity.value) if duration_entity else None,
        attendees=[e.value for e in result.entities_of(EntityType.PERSON)],
        location=location_entity.value if location_entity else None,
    )


def build_calendar_view_draft(
    result: IntentResult, now: Optional[datetime] = None
) -> CalendarViewDraft:
    date_entity = result.first_entity(EntityType.DATE)
    if date_entity is None:
        return CalendarViewDraft()
    return CalendarViewDraft(
        date_text=date_entity.value,
        day=temporal.parse_date(date_entity.value, now),
    )


def build_reminder_draft(result: IntentResult, now: Optional[datetime] = None) -> ReminderDraft:
    date_entity = result.first_entity(EntityType.DATE)
    time_entity = result.first_entity(EntityType.TIME)
    priority_entity = result.first_entity(EntityType.PRIORITY)

    return ReminderDraft(
        task=extract_task(result.original_text),
        date_text=date_entity.value if date_entity else None,
        time_text=time_entity.value if time_entity else None,
        due=temporal.resolve_when(result.entities, now),
        priority=priority_entity.value if priority_entity else None,
    )


def build_sharepoint_draft(result: IntentResult) -> SharePointSearchDraft:
    return SharePointSearchDraft(query=extract_search_query(result.original_text))


def build_dataverse_draft(result: IntentResult) -> DataverseQueryDraft:
    return DataverseQueryDraft(
        collection=infer_dataverse_collection(result.original_text),
        filters=[
            DataverseFilter(field=e.type.value, value=e.value)
            for e in result.entities_of(EntityType.PERSON, EntityType.LOCATION)
        ],
    )


def build_draft(result: IntentResult, now: Optional[datetime] = None) -> Optional[ActionDraft]:
    """
    Build the collaborator draft for a classified utterance

    Returns None for intents with nothing to hand off (view reminders,
    help, unknown).
    """
    if result.intent == IntentName.CREATE_EVENT:
        return build_event_draft(result, now)
    if result.intent == IntentName.VIEW_CALENDAR:
        return build_calendar_view_draft(result, now)
    if result.intent == IntentName.CREATE_REMINDER:
        return build_reminder_draft(result, now)
    if result.intent == IntentName.SEARCH_SHAREPOINT:
        return build_sharepoint_draft(result)
    if result.intent == IntentName.QUERY_DATAVERSE:
        return build_dataverse_draft(result)
    return None
