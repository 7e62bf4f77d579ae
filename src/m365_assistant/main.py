"""
Assistant Main Entry Point

Interactive console chat driving a ChatService, for trying the assistant
without the dashboard UI.

Special Commands:
    quit              - Exit the chat
    history           - Show the full conversation history
    reset             - Clear the conversation
"""
import asyncio
import sys

from .config import get_config
from .exceptions import CatalogError
from .factory import AssistantFactory
from .logger import get_logger, setup_logging
from .models.chat import ChatMessage

logger = get_logger("m365_assistant.main")


def _print_message(message: ChatMessage) -> None:
    print(f"[{message.role.value}] {message.content}\n")


async def main_async() -> None:
    """Run the interactive chat loop until quit or end of input"""
    config = get_config()
    setup_logging(config.logging)

    try:
        service = AssistantFactory.create_chat_service(config)
    except CatalogError as e:
        logger.error(f"Unable to load catalogs: {e}")
        sys.exit(1)

    for message in service.get_history():
        _print_message(message)

    loop = asyncio.get_running_loop()
    while True:
        line = await loop.run_in_executor(None, sys.stdin.readline)
        if not line:
            break
        text = line.strip()
        if not text:
            continue

        if text.lower() == "quit":
            break
        if text.lower() == "history":
            for message in service.get_history():
                _print_message(message)
            continue
        if text.lower() == "reset":
            for message in service.reset():
                _print_message(message)
            continue

        reply = await service.process_user_message(text)
        _print_message(reply)


def main() -> None:
    """Main entry point for the console chat"""
    try:
        asyncio.run(main_async())
    except KeyboardInterrupt:
        logger.debug("Chat interrupted by user")


if __name__ == "__main__":
    main()
