"""
Configuration module for the M365 assistant

This module handles all configuration parameters for the intent extractor,
the chat response generator and logging.
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


ENV_PREFIX = "M365_ASSISTANT_"


@dataclass
class NLPConfig:
    """Intent/entity extractor configuration"""
    intents_catalog: Optional[str] = None
    entities_catalog: Optional[str] = None
    pattern_confidence: float = 0.9
    keyword_base: float = 0.3
    keyword_step: float = 0.15
    keyword_cap: float = 0.8


@dataclass
class ChatConfig:
    """Chat response generator configuration"""
    clarification_threshold: float = 0.5
    loading_text: str = "Thinking..."
    error_text: str = "Sorry, I encountered an error. Please try again."


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = "INFO"
    to_console: bool = True
    to_file: bool = False
    dir: str = "logs"
    file: str = "assistant.log"
    use_json: bool = False


@dataclass
class AssistantConfig:
    """Main assistant configuration"""
    service_name: str = "m365-assistant"
    nlp: NLPConfig = None
    chat: ChatConfig = None
    logging: LoggingConfig = None

    def __post_init__(self):
        if self.nlp is None:
            self.nlp = NLPConfig()
        if self.chat is None:
            self.chat = ChatConfig()
        if self.logging is None:
            self.logging = LoggingConfig()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config_from_env() -> AssistantConfig:
    """
    Load configuration from environment variables

    Returns:
        AssistantConfig instance with values from environment
    """
    nlp_config = NLPConfig(
        intents_catalog=os.getenv(f"{ENV_PREFIX}INTENTS_CATALOG"),
        entities_catalog=os.getenv(f"{ENV_PREFIX}ENTITIES_CATALOG"),
        pattern_confidence=float(os.getenv(f"{ENV_PREFIX}PATTERN_CONFIDENCE", "0.9")),
        keyword_base=float(os.getenv(f"{ENV_PREFIX}KEYWORD_BASE", "0.3")),
        keyword_step=float(os.getenv(f"{ENV_PREFIX}KEYWORD_STEP", "0.15")),
        keyword_cap=float(os.getenv(f"{ENV_PREFIX}KEYWORD_CAP", "0.8")),
    )

    chat_config = ChatConfig(
        clarification_threshold=float(
            os.getenv(f"{ENV_PREFIX}CLARIFICATION_THRESHOLD", "0.5")
        ),
        loading_text=os.getenv(f"{ENV_PREFIX}LOADING_TEXT", "Thinking..."),
        error_text=os.getenv(
            f"{ENV_PREFIX}ERROR_TEXT",
            "Sorry, I encountered an error. Please try again.",
        ),
    )

    logging_config = LoggingConfig(
        level=os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO"),
        to_console=_env_bool(f"{ENV_PREFIX}LOG_TO_CONSOLE", True),
        to_file=_env_bool(f"{ENV_PREFIX}LOG_TO_FILE", False),
        dir=os.getenv(f"{ENV_PREFIX}LOG_DIR", "logs"),
        file=os.getenv(f"{ENV_PREFIX}LOG_FILE", "assistant.log"),
        use_json=_env_bool(f"{ENV_PREFIX}LOG_JSON", False),
    )

    return AssistantConfig(
        service_name=os.getenv(f"{ENV_PREFIX}SERVICE_NAME", "m365-assistant"),
        nlp=nlp_config,
        chat=chat_config,
        logging=logging_config,
    )


def load_config_from_dict(config_dict: Dict[str, Any]) -> AssistantConfig:
    """
    Load configuration from a dictionary

    Args:
        config_dict: Configuration dictionary

    Returns:
        AssistantConfig instance
    """
    nlp_dict = config_dict.get("nlp", {})
    nlp_config = NLPConfig(
        intents_catalog=nlp_dict.get("intents_catalog"),
        entities_catalog=nlp_dict.get("entities_catalog"),
        pattern_confidence=nlp_dict.get("pattern_confidence", 0.9),
        keyword_base=nlp_dict.get("keyword_base", 0.3),
        keyword_step=nlp_dict.get("keyword_step", 0.15),
        keyword_cap=nlp_dict.get("keyword_cap", 0.8),
    )

    chat_dict = config_dict.get("chat", {})
    chat_config = ChatConfig(
        clarification_threshold=chat_dict.get("clarification_threshold", 0.5),
        loading_text=chat_dict.get("loading_text", "Thinking..."),
        error_text=chat_dict.get(
            "error_text", "Sorry, I encountered an error. Please try again."
        ),
    )

    logging_dict = config_dict.get("logging", {})
    logging_config = LoggingConfig(
        level=logging_dict.get("level", "INFO"),
        to_console=logging_dict.get("to_console", True),
        to_file=logging_dict.get("to_file", False),
        dir=logging_dict.get("dir", "logs"),
        file=logging_dict.get("file", "assistant.log"),
        use_json=logging_dict.get("use_json", False),
    )

    return AssistantConfig(
        service_name=config_dict.get("service_name", "m365-assistant"),
        nlp=nlp_config,
        chat=chat_config,
        logging=logging_config,
    )


def load_config_from_file(config_path: str) -> AssistantConfig:
    """
    Load configuration from a YAML file

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        AssistantConfig instance
    """
    with open(Path(config_path), "r", encoding="utf-8") as f:
        config_dict = yaml.safe_load(f) or {}
    return load_config_from_dict(config_dict)


def get_config() -> AssistantConfig:
    """
    Get the current configuration

    A YAML file named by M365_ASSISTANT_CONFIG_FILE takes precedence,
    otherwise environment variables are used.

    Returns:
        AssistantConfig instance
    """
    config_file = os.getenv(f"{ENV_PREFIX}CONFIG_FILE")
    if config_file:
        return load_config_from_file(config_file)
    return load_config_from_env()
