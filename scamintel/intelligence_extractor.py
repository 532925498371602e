"""
Intelligence Extractor Module
Coordinates language detection and all entity extractors for one message.

Language is detected once per call and handed to the language-aware
extractors. Results are concatenated in a fixed extractor order; duplicates
are removed within a type only, since the same digits may legitimately be
reported as a phone number and as a bank account.
"""
import logging
from collections import Counter
from typing import Callable, List, Optional

from .bank_account_extractor import BankAccountExtractor
from .config import Config
from .email_extractor import EmailExtractor
from .language_detector import LanguageDetector
from .models import (
    BankAccount,
    Email,
    Entity,
    LanguageDetectionResult,
    Message,
    Organization,
    PaymentId,
    PhoneNumber,
    Url,
)
from .organization_extractor import OrganizationExtractor
from .payment_extractor import PaymentIdExtractor
from .phone_extractor import PhoneNumberExtractor
from .url_extractor import UrlExtractor
from .utils import sanitize_text

logger = logging.getLogger(__name__)

# observer(conversation_id, entity_type, count)
ExtractionObserver = Callable[[Optional[str], str, int], None]


def log_entity_counts(conversation_id: Optional[str], entity_type: str, count: int) -> None:
    """Default observer: one INFO line per extracted entity type."""
    logger.info(
        f"Entities extracted: conversation={conversation_id or '-'} "
        f"type={entity_type} count={count}"
    )


class IntelligenceExtractor:
    """
    Extract structured intelligence from scammer messages.
    Stateless: one instance can serve any number of concurrent conversations.
    """

    def __init__(self, observer: Optional[ExtractionObserver] = log_entity_counts):
        self.observer = observer
        self.language_detector = LanguageDetector()
        self.phone_extractor = PhoneNumberExtractor(self.language_detector)
        self.payment_extractor = PaymentIdExtractor(self.language_detector)
        self.url_extractor = UrlExtractor()
        self.organization_extractor = OrganizationExtractor()
        self.bank_account_extractor = BankAccountExtractor()
        self.email_extractor = EmailExtractor()

    # ------------------------------------------------------------------
    # MAIN EXTRACTION ENTRY POINT
    # ------------------------------------------------------------------
    def extract_entities(
        self,
        text: str,
        conversation_history: Optional[List[Message]] = None,
        conversation_id: Optional[str] = None,
    ) -> List[Entity]:
        """
        Extract every entity type from text (plus recent conversation history).

        Args:
            text: Current message text
            conversation_history: Earlier messages; the most recent
                Config.HISTORY_WINDOW are prepended to the text
            conversation_id: Passed through to the observer

        Returns:
            Phone numbers, payment ids, URLs, organizations, bank accounts
            and emails, in that order
        """
        try:
            full_text = sanitize_text(self._build_context(text, conversation_history))
            if not full_text:
                return []

            language = self.language_detector.detect(full_text).language

            entities: List[Entity] = []
            entities.extend(self.phone_extractor.extract(full_text, language))
            entities.extend(self.payment_extractor.extract(full_text, language))
            entities.extend(self.url_extractor.extract(full_text))
            entities.extend(self.organization_extractor.extract(full_text))
            entities.extend(self.bank_account_extractor.extract(full_text))
            entities.extend(self.email_extractor.extract(full_text))

            if entities:
                self._report(entities, language, conversation_id)

            return entities

        except Exception as e:
            logger.error(f"Intelligence extraction error: {e}", exc_info=True)
            return []

    def detect_language(self, text: str) -> LanguageDetectionResult:
        return self.language_detector.detect(text)

    # ------------------------------------------------------------------
    # PER-TYPE EXTRACTORS
    # ------------------------------------------------------------------
    def extract_phone_numbers(self, text: str, language: Optional[str] = None) -> List[PhoneNumber]:
        return self.phone_extractor.extract(text, language)

    def extract_payment_ids(self, text: str, language: Optional[str] = None) -> List[PaymentId]:
        return self.payment_extractor.extract(text, language)

    def extract_urls(self, text: str) -> List[Url]:
        return self.url_extractor.extract(text)

    def extract_organizations(self, text: str) -> List[Organization]:
        return self.organization_extractor.extract(text)

    def extract_bank_accounts(self, text: str) -> List[BankAccount]:
        return self.bank_account_extractor.extract(text)

    def extract_emails(self, text: str) -> List[Email]:
        return self.email_extractor.extract(text)

    # ------------------------------------------------------------------
    # HELPERS
    # ------------------------------------------------------------------
    def _build_context(self, current_text: str, history: Optional[List[Message]]) -> str:
        """
        Join the last HISTORY_WINDOW messages with the current text.

        The result is cut from the front to MAX_TEXT_LENGTH, so the oldest
        history is dropped first and the current text is always kept.
        """
        try:
            if not history or Config.HISTORY_WINDOW == 0:
                return current_text or ""
            parts = []
            for msg in history[-Config.HISTORY_WINDOW:]:
                if hasattr(msg, "text") and msg.text:
                    parts.append(str(msg.text))
            parts.append(current_text or "")
            context = " ".join(parts)

            limit = Config.MAX_TEXT_LENGTH
            if len(context) > limit:
                logger.debug(f"Dropping {len(context) - limit} characters of oldest history")
                context = context[-limit:]
            return context
        except Exception as e:
            logger.error(f"Error building context: {e}")
            return current_text or ""

    def _report(self, entities: List[Entity], language: str, conversation_id: Optional[str]) -> None:
        counts = Counter(entity.type.value for entity in entities)

        logger.info(
            f"🔍 Extracted {len(entities)} items (language={language}): "
            + ", ".join(f"{entity_type}={count}" for entity_type, count in counts.items())
        )

        if self.observer is None:
            return
        for entity_type, count in counts.items():
            try:
                self.observer(conversation_id, entity_type, count)
            except Exception as e:
                logger.warning(f"Extraction observer failed for {entity_type}: {e}")


_default_extractor = IntelligenceExtractor()


def extract_entities(text: str) -> List[Entity]:
    """Extract all entities from text using the shared default extractor."""
    return _default_extractor.extract_entities(text)


def detect_language(text: str) -> LanguageDetectionResult:
    return _default_extractor.detect_language(text)
