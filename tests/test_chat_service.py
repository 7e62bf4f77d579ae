"""
Unit tests for ChatService

Tests history management, the loading placeholder lifecycle and the
collaborator hook.
"""
import pytest
from unittest.mock import AsyncMock, patch

from m365_assistant.config import AssistantConfig, ChatConfig
from m365_assistant.core.actions import ReminderDraft
from m365_assistant.core.chat_service import QUICK_ACTIONS, WELCOME_MESSAGE, ChatService
from m365_assistant.core.extractor import HELP_TEXT
from m365_assistant.factory import AssistantFactory
from m365_assistant.models.chat import MessageRole
from m365_assistant.models.intent import IntentName


@pytest.fixture
def chat_service(extractor, response_builder):
    return ChatService(extractor=extractor, response_builder=response_builder)


class TestMessageProcessing:
    """Test process_user_message"""

    @pytest.mark.asyncio
    async def test_help_reply(self, chat_service):
        reply = await chat_service.process_user_message("help")

        assert reply.role == MessageRole.ASSISTANT
        assert reply.content == HELP_TEXT
        assert not reply.is_loading

    @pytest.mark.asyncio
    async def test_history_grows_by_two_per_message(self, chat_service):
        await chat_service.process_user_message("help")
        await chat_service.process_user_message("Show my reminders")

        history = chat_service.get_history()
        assert [m.role for m in history] == [
            MessageRole.USER,
            MessageRole.ASSISTANT,
            MessageRole.USER,
            MessageRole.ASSISTANT,
        ]
        assert history[0].content == "help"
        assert history[2].content == "Show my reminders"
        assert not any(m.is_loading for m in history)
        assert not chat_service.is_processing

    @pytest.mark.asyncio
    async def test_message_ids_are_unique_and_ordered(self, chat_service):
        await chat_service.process_user_message("help")
        await chat_service.process_user_message("xyzzy")

        ids = [m.id for m in chat_service.get_history()]
        assert len(ids) == len(set(ids))
        assert ids == sorted(ids)
        assert all(m.timestamp.tzinfo is not None for m in chat_service.get_history())

    @pytest.mark.asyncio
    async def test_reminder_scenario(self, chat_service):
        reply = await chat_service.process_user_message("Remind me to call John at 3pm tomorrow")

        assert "**Task:** call John" in reply.content
        assert "**Due:** tomorrow at 3pm" in reply.content
        assert chat_service.last_result.intent == IntentName.CREATE_REMINDER

    @pytest.mark.asyncio
    async def test_build_failure_becomes_apology(self, chat_service):
        with patch.object(
            chat_service.response_builder, "compose", side_effect=RuntimeError("template broke")
        ):
            reply = await chat_service.process_user_message("help")

        assert reply.content == "Sorry, I encountered an error. Please try again."
        assert len(chat_service.get_history()) == 2
        assert not chat_service.is_processing

    @pytest.mark.asyncio
    async def test_custom_texts(self, extractor, response_builder):
        config = ChatConfig(loading_text="Working...", error_text="Oops.")
        service = ChatService(extractor, response_builder, config=config)

        with patch.object(service.extractor, "classify", side_effect=ValueError("bad")):
            reply = await service.process_user_message("help")
        assert reply.content == "Oops."


class TestActionHandler:
    """Test the collaborator hook"""

    @pytest.mark.asyncio
    async def test_handler_receives_draft(self, extractor, response_builder):
        handler = AsyncMock()
        service = ChatService(extractor, response_builder, action_handler=handler)

        await service.process_user_message("Remind me to call John at 3pm tomorrow")

        handler.handle.assert_awaited_once()
        result, draft = handler.handle.await_args.args
        assert result.intent == IntentName.CREATE_REMINDER
        assert isinstance(draft, ReminderDraft)
        assert draft.task == "call John"

    @pytest.mark.asyncio
    async def test_handler_skipped_without_draft(self, extractor, response_builder):
        handler = AsyncMock()
        service = ChatService(extractor, response_builder, action_handler=handler)

        await service.process_user_message("help")
        await service.process_user_message("remember the milk")

        handler.handle.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_placeholder_visible_while_handler_runs(self, extractor, response_builder):
        seen = {}

        class RecordingHandler:
            async def handle(self, result, draft):
                seen["history"] = service.get_history()
                seen["processing"] = service.is_processing

        service = ChatService(extractor, response_builder, action_handler=RecordingHandler())
        await service.process_user_message("Show my calendar")

        assert seen["processing"]
        placeholder = seen["history"][-1]
        assert placeholder.is_loading
        assert placeholder.content == "Thinking..."
        assert placeholder.id not in [m.id for m in service.get_history()]

    @pytest.mark.asyncio
    async def test_handler_failure_becomes_apology(self, extractor, response_builder):
        handler = AsyncMock()
        handler.handle.side_effect = ConnectionError("graph unavailable")
        service = ChatService(extractor, response_builder, action_handler=handler)

        reply = await service.process_user_message("Search SharePoint for budget")
        assert reply.content == "Sorry, I encountered an error. Please try again."


class TestHistory:
    """Test history management"""

    def test_ensure_welcome_once(self, chat_service):
        chat_service.ensure_welcome()
        history = chat_service.ensure_welcome()

        assert len(history) == 1
        assert history[0].role == MessageRole.SYSTEM
        assert history[0].content == WELCOME_MESSAGE

    @pytest.mark.asyncio
    async def test_reset_is_idempotent(self, chat_service):
        await chat_service.process_user_message("help")

        first = chat_service.reset()
        second = chat_service.reset()
        assert len(first) == len(second) == 1
        assert second[0].content == WELCOME_MESSAGE

    def test_history_is_a_copy(self, chat_service):
        chat_service.add_system_message("hello")
        chat_service.get_history().clear()
        assert len(chat_service.get_history()) == 1

    def test_clear_history(self, chat_service):
        chat_service.ensure_welcome()
        chat_service.clear_history()
        assert chat_service.get_history() == []

    def test_quick_actions_are_understood(self, extractor):
        for _, utterance in QUICK_ACTIONS:
            assert extractor.classify(utterance).confidence == 0.9


class TestFactory:
    """Test service assembly"""

    def test_service_starts_with_welcome(self):
        service = AssistantFactory.create_chat_service(AssistantConfig())
        history = service.get_history()
        assert len(history) == 1
        assert history[0].content == WELCOME_MESSAGE

    def test_threshold_flows_from_config(self, extractor):
        config = AssistantConfig(chat=ChatConfig(clarification_threshold=0.3))
        service = AssistantFactory.create_chat_service(config, extractor=extractor)
        assert service.response_builder.clarification_threshold == 0.3
        assert service.extractor is extractor
