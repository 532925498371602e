"""Shared fixtures for the extraction test suite."""
import pytest

from scamintel.intelligence_extractor import IntelligenceExtractor
from scamintel.language_detector import LanguageDetector


@pytest.fixture
def extractor() -> IntelligenceExtractor:
    return IntelligenceExtractor(observer=None)


@pytest.fixture
def detector() -> LanguageDetector:
    return LanguageDetector()


@pytest.fixture
def recorded_counts():
    """Observer that records (conversation_id, entity_type, count) calls."""
    calls = []

    def observer(conversation_id, entity_type, count):
        calls.append((conversation_id, entity_type, count))

    observer.calls = calls
    return observer
