"""
Shared test configuration
"""
from datetime import datetime

import pytest

from m365_assistant.core.extractor import IntentExtractor
from m365_assistant.core.response_builder import ResponseBuilder

# Monday
FIXED_NOW = datetime(2026, 10, 19, 9, 30)


@pytest.fixture(scope="session")
def extractor():
    """Extractor built from the packaged catalogs"""
    return IntentExtractor()


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def response_builder(extractor):
    """ResponseBuilder with a pinned clock"""
    return ResponseBuilder(extractor=extractor, clock=lambda: FIXED_NOW)
