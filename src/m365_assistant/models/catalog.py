"""
Catalog-driven definitions for intents and entities

Intent and entity rules live in YAML resources so the rule set can be
changed, or replaced in tests, without touching the extractor's control
flow. This module loads those files and compiles them into immutable
definition tables.
"""
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Pattern, Tuple

import yaml

from ..exceptions import CatalogError
from .intent import EntityType, IntentName

RESOURCES_DIR = Path(__file__).resolve().parent.parent / "resources"
DEFAULT_INTENTS_PATH = RESOURCES_DIR / "intents.yml"
DEFAULT_ENTITIES_PATH = RESOURCES_DIR / "entities.yml"


@dataclass(frozen=True)
class IntentDefinition:
    """High-precision patterns and low-precision keywords for one intent"""
    name: IntentName
    patterns: Tuple[Pattern, ...]
    keywords: Tuple[str, ...]

    @classmethod
    def from_strings(
        cls,
        name: str,
        patterns: Iterable[str] = (),
        keywords: Iterable[str] = (),
    ) -> "IntentDefinition":
        try:
            intent = IntentName(name)
        except ValueError as e:
            raise CatalogError(f"Unknown intent name in catalog: {name!r}") from e
        if intent == IntentName.UNKNOWN:
            raise CatalogError("The 'unknown' intent cannot be defined in a catalog")

        compiled = tuple(_compile(p, re.IGNORECASE, name) for p in patterns)
        # Lower-cased and de-duplicated, first occurrence order kept
        distinct = tuple(dict.fromkeys(str(k).lower() for k in keywords if str(k)))
        return cls(name=intent, patterns=compiled, keywords=distinct)


@dataclass(frozen=True)
class EntityDefinition:
    """Regular expressions that recognise one entity type"""
    type: EntityType
    patterns: Tuple[Pattern, ...]

    @classmethod
    def from_strings(
        cls,
        entity_type: str,
        patterns: Iterable[str],
        ignore_case: bool = True,
    ) -> "EntityDefinition":
        try:
            etype = EntityType(entity_type)
        except ValueError as e:
            raise CatalogError(f"Unknown entity type in catalog: {entity_type!r}") from e
        flags = re.IGNORECASE if ignore_case else 0
        return cls(
            type=etype,
            patterns=tuple(_compile(p, flags, entity_type) for p in patterns),
        )


def _compile(pattern: str, flags: int, owner: str) -> Pattern:
    try:
        return re.compile(pattern, flags)
    except (re.error, TypeError) as e:
        raise CatalogError(f"Invalid pattern {pattern!r} for {owner!r}: {e}") from e


def load_catalog_file(path: Path) -> Dict[str, Any]:
    """Load a YAML catalog file"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise CatalogError(f"Unable to read catalog {path}: {e}") from e
    if not isinstance(data, dict):
        raise CatalogError(f"Catalog {path} must be a mapping")
    return data


def build_intent_catalog(config: Dict[str, Any]) -> List[IntentDefinition]:
    """Compile the 'intents' section of a catalog, preserving order"""
    entries = config.get("intents")
    if not isinstance(entries, list):
        raise CatalogError("Intent catalog must contain an 'intents' list")

    definitions = []
    seen = set()
    for entry in entries:
        if not isinstance(entry, dict) or "name" not in entry:
            raise CatalogError(f"Intent entry without a name: {entry!r}")
        definition = IntentDefinition.from_strings(
            entry["name"],
            patterns=entry.get("patterns") or [],
            keywords=entry.get("keywords") or [],
        )
        if definition.name in seen:
            raise CatalogError(f"Duplicate intent in catalog: {definition.name.value}")
        seen.add(definition.name)
        definitions.append(definition)
    return definitions


def build_entity_catalog(config: Dict[str, Any]) -> List[EntityDefinition]:
    """Compile the 'entities' section of a catalog, preserving order"""
    entries = config.get("entities")
    if not isinstance(entries, list):
        raise CatalogError("Entity catalog must contain an 'entities' list")

    definitions = []
    for entry in entries:
        if not isinstance(entry, dict) or "type" not in entry:
            raise CatalogError(f"Entity entry without a type: {entry!r}")
        name = entry["type"]
        try:
            entity_type = EntityType(name)
        except ValueError as e:
            raise CatalogError(f"Unknown entity type in catalog: {name!r}") from e
        default_ignore_case = bool(entry.get("ignore_case", True))

        compiled = []
        for pattern_entry in entry.get("patterns") or []:
            if isinstance(pattern_entry, str):
                regex, ignore_case = pattern_entry, default_ignore_case
            elif isinstance(pattern_entry, dict) and "regex" in pattern_entry:
                regex = pattern_entry["regex"]
                ignore_case = bool(pattern_entry.get("ignore_case", default_ignore_case))
            else:
                raise CatalogError(f"Invalid pattern entry for {name!r}: {pattern_entry!r}")
            compiled.append(_compile(regex, re.IGNORECASE if ignore_case else 0, name))

        definitions.append(EntityDefinition(type=entity_type, patterns=tuple(compiled)))
    return definitions


def load_intent_catalog(path: Optional[str] = None) -> List[IntentDefinition]:
    """Load the intent catalog (package default when path is None)"""
    return build_intent_catalog(load_catalog_file(Path(path) if path else DEFAULT_INTENTS_PATH))


def load_entity_catalog(path: Optional[str] = None) -> List[EntityDefinition]:
    """Load the entity catalog (package default when path is None)"""
    return build_entity_catalog(load_catalog_file(Path(path) if path else DEFAULT_ENTITIES_PATH))
