"""
Language Detection Module
Script-range and common-word scoring used to pick regional extraction defaults
"""
import re
import logging
from types import MappingProxyType
from typing import Dict

from .models import LanguageDetectionResult
from .utils import sanitize_text

logger = logging.getLogger(__name__)

# Evaluation order matters: ties go to the first language reaching the max
SUPPORTED_LANGUAGES = ("en", "es", "fr", "de", "hi", "zh", "ar", "ru", "pt", "it")

SCRIPT_WEIGHT = 10.0
WORD_WEIGHT = 0.5
MIN_CONFIDENCE = 0.2

_SCRIPT_PATTERNS = MappingProxyType({
    "hi": re.compile(r"[\u0900-\u097F]"),  # Devanagari
    "zh": re.compile(r"[\u4E00-\u9FFF]"),  # CJK unified ideographs
    "ar": re.compile(r"[\u0600-\u06FF]"),  # Arabic
    "ru": re.compile(r"[\u0400-\u04FF]"),  # Cyrillic
})

_COMMON_WORDS = MappingProxyType({
    "en": (
        "the", "is", "are", "and", "or", "you", "your", "have", "has", "will",
        "can", "please", "thank", "hello", "account", "payment", "transfer",
        "bank", "call", "contact", "urgent", "verify", "confirm",
    ),
    "es": (
        "el", "la", "los", "las", "de", "del", "y", "o", "es", "está", "son",
        "por", "para", "con", "su", "usted", "hola", "gracias", "cuenta",
        "pago", "banco", "transferencia", "urgente",
    ),
    "fr": (
        "le", "la", "les", "de", "du", "et", "ou", "est", "sont", "pour",
        "avec", "votre", "vous", "bonjour", "merci", "compte", "paiement",
        "banque", "transfert", "urgent",
    ),
    "de": (
        "der", "die", "das", "und", "oder", "ist", "sind", "für", "mit", "ihr",
        "ihre", "sie", "hallo", "danke", "konto", "zahlung", "bank",
        "überweisung", "dringend",
    ),
    "pt": (
        "o", "a", "os", "as", "de", "do", "da", "e", "ou", "é", "são", "para",
        "com", "seu", "sua", "você", "olá", "obrigado", "conta", "pagamento",
        "banco", "transferência", "urgente",
    ),
    "it": (
        "il", "lo", "la", "i", "gli", "le", "di", "e", "o", "è", "sono", "per",
        "con", "suo", "sua", "lei", "ciao", "grazie", "conto", "pagamento",
        "banca", "trasferimento", "urgente",
    ),
})


class LanguageDetector:
    """
    Heuristic language identification.

    A script hit (Devanagari, CJK, Arabic, Cyrillic) adds a large fixed bonus
    that dominates word scoring; every common function word found as a
    space-bounded whole word adds a small increment. Confidence is the top
    score divided by 5, capped at 1.0. Low-confidence results are reported
    as "unknown".
    """

    def detect(self, text: str) -> LanguageDetectionResult:
        try:
            text = sanitize_text(text)
            if not text:
                return LanguageDetectionResult()

            scores = self._score(text)

            max_score = 0.0
            detected = "unknown"
            for language in SUPPORTED_LANGUAGES:
                if scores[language] > max_score:
                    max_score = scores[language]
                    detected = language

            confidence = min(max_score / 5, 1.0)
            if confidence < MIN_CONFIDENCE:
                return LanguageDetectionResult()

            return LanguageDetectionResult(language=detected, confidence=confidence)

        except Exception as e:
            logger.error(f"Language detection error: {e}", exc_info=True)
            return LanguageDetectionResult()

    def _score(self, text: str) -> Dict[str, float]:
        scores = {language: 0.0 for language in SUPPORTED_LANGUAGES}

        for language, pattern in _SCRIPT_PATTERNS.items():
            if pattern.search(text):
                scores[language] += SCRIPT_WEIGHT

        # Padding lets edge words match the same " word " probe as inner ones
        padded = f" {text.lower()} "
        for language, words in _COMMON_WORDS.items():
            for word in words:
                if f" {word} " in padded:
                    scores[language] += WORD_WEIGHT

        return scores
