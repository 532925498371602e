"""
Phone Number Extraction Module
International phone number extraction with E.164 normalization.

Six pattern families run independently and in a fixed order; the same number
matched by several families collapses to the first normalized occurrence.
Country codes come from an explicit ``+`` when present, otherwise from
length/prefix heuristics and the regional default of the detected language.
"""
import re
import logging
from datetime import datetime
from types import MappingProxyType
from typing import List, NamedTuple, Optional, Tuple

from .language_detector import LanguageDetector
from .models import PhoneNumber
from .utils import extract_context, sanitize_text

logger = logging.getLogger(__name__)

MIN_DIGITS = 7
MAX_DIGITS = 15

_E164_PATTERN = re.compile(r"^\+\d{1,3}\d{4,14}$", re.ASCII)
_NON_DIGIT = re.compile(r"\D", re.ASCII)

# 12-digit numbers with one of these prefixes carry their country code
_KNOWN_TWO_DIGIT_PREFIXES = frozenset({"44", "91", "86"})


class RegionalPhoneInfo(NamedTuple):
    default_country_code: str
    region: str
    common_formats: Tuple[str, ...]


REGIONAL_PHONE_INFO = MappingProxyType({
    "en": RegionalPhoneInfo("1", "US/Canada", ("(XXX) XXX-XXXX", "XXX-XXX-XXXX", "XXX.XXX.XXXX")),
    "es": RegionalPhoneInfo("34", "Spain", ("XXX XX XX XX", "+34 XXX XX XX XX")),
    "fr": RegionalPhoneInfo("33", "France", ("XX XX XX XX XX", "+33 X XX XX XX XX")),
    "de": RegionalPhoneInfo("49", "Germany", ("XXXX XXXXXXX", "+49 XXX XXXXXXX")),
    "hi": RegionalPhoneInfo("91", "India", ("XXXXX-XXXXX", "+91 XXXXX XXXXX", "XXXXXXXXXX")),
    "zh": RegionalPhoneInfo("86", "China", ("XXX XXXX XXXX", "+86 XXX XXXX XXXX")),
    "ar": RegionalPhoneInfo("966", "Saudi Arabia", ("XX XXX XXXX", "+966 XX XXX XXXX")),
    "ru": RegionalPhoneInfo("7", "Russia", ("XXX XXX-XX-XX", "+7 XXX XXX-XX-XX")),
    "pt": RegionalPhoneInfo("55", "Brazil", ("(XX) XXXXX-XXXX", "+55 XX XXXXX-XXXX")),
    "it": RegionalPhoneInfo("39", "Italy", ("XXX XXX XXXX", "+39 XXX XXX XXXX")),
})

DEFAULT_PHONE_INFO = RegionalPhoneInfo("1", "Unknown", ("XXX-XXX-XXXX",))

_REGION_BY_COUNTRY_CODE = MappingProxyType({
    info.default_country_code: info.region for info in REGIONAL_PHONE_INFO.values()
})


def get_regional_phone_info(language: Optional[str]) -> RegionalPhoneInfo:
    """Regional defaults for a language, falling back to {1, "Unknown"}."""
    return REGIONAL_PHONE_INFO.get(language or "", DEFAULT_PHONE_INFO)


def validate_phone_number(e164_number: str) -> bool:
    """E.164: + then a 1-3 digit country code and a 4-14 digit number."""
    return bool(_E164_PATTERN.match(e164_number))


def normalize_phone_number(
    digits: str,
    matched_text: str,
    language: Optional[str] = None,
) -> Tuple[str, str, float]:
    """
    Normalize a digit string to E.164.

    Args:
        digits: Digits-only form of the match
        matched_text: Matched text, used to detect an explicit leading +
        language: ISO-639-1 code selecting the regional default

    Returns:
        (normalized, country_code, confidence)
    """
    length = len(digits)

    if matched_text.startswith("+"):
        confidence = 0.9
        if length == 11 and digits[0] == "1":
            cc_length = 1
        elif 11 <= length <= 13:
            cc_length = 2
        elif length >= 12:
            cc_length = 3
        else:
            cc_length = 1
        country_code, national = digits[:cc_length], digits[cc_length:]

    elif length == 11 and digits[0] == "1":
        country_code, national = "1", digits[1:]
        confidence = 0.8

    elif length == 12 and digits[:2] in _KNOWN_TWO_DIGIT_PREFIXES:
        country_code, national = digits[:2], digits[2:]
        confidence = 0.7

    elif length == 10:
        country_code = get_regional_phone_info(language).default_country_code
        national = digits
        # Any language tag resolves to a regional default, listed or not
        confidence = 0.7 if language else 0.6

    elif 11 <= length <= 13:
        country_code, national = digits[:-10], digits[-10:]
        confidence = 0.5

    else:
        country_code, national = digits[:1], digits[1:]
        confidence = 0.4

    return f"+{country_code}{national}", country_code, confidence


class PhoneNumberExtractor:
    """Extract phone numbers and normalize them to E.164"""

    def __init__(self, language_detector: Optional[LanguageDetector] = None):
        self.language_detector = language_detector or LanguageDetector()
        self.patterns = self._compile_patterns()

    def _compile_patterns(self) -> Tuple[re.Pattern, ...]:
        """Pattern families, in evaluation order."""
        return (
            # E.164 with optional separators: +1 555 123 4567
            re.compile(r"\+(\d{1,3})[\s.-]?(\d{1,4})[\s.-]?(\d{1,4})[\s.-]?(\d{1,9})", re.ASCII),
            # Area code in parentheses: +1 (555) 123-4567
            re.compile(r"\+(\d{1,3})[\s.-]?\((\d{1,4})\)[\s.-]?(\d{1,4})[\s.-]?(\d{1,9})", re.ASCII),
            # Country code in parentheses: (44) 20-7946-0958
            re.compile(r"\((\d{1,3})\)[\s.-]?(\d{2,4})[\s.-]?(\d{3,4})[\s.-]?(\d{2,9})", re.ASCII),
            # Separated groups without plus: 1 234 567 8900
            re.compile(r"(?<![\d+])(\d{1,3})[\s.-](\d{3,4})[\s.-](\d{3,4})[\s.-]?(\d{2,9})(?!\d)", re.ASCII),
            # US style: 555-123-4567
            re.compile(r"(?<![\d+])(\d{3})[\s.-](\d{3})[\s.-](\d{4})(?!\d)", re.ASCII),
            # Bare digit runs
            re.compile(r"(?<![\d+])(\d{10,15})(?!\d)", re.ASCII),
        )

    def extract(self, text: str, language: Optional[str] = None) -> List[PhoneNumber]:
        try:
            text = sanitize_text(text)
            if not text:
                return []

            if not language:
                language = self.language_detector.detect(text).language

            timestamp = datetime.now()
            phone_numbers: List[PhoneNumber] = []
            seen = set()

            for pattern in self.patterns:
                for match in pattern.finditer(text):
                    raw = match.group(0).strip()
                    digits = _NON_DIGIT.sub("", raw)

                    if not MIN_DIGITS <= len(digits) <= MAX_DIGITS:
                        continue

                    normalized, country_code, confidence = normalize_phone_number(
                        digits, raw, language
                    )
                    if normalized in seen:
                        continue
                    seen.add(normalized)

                    phone_numbers.append(PhoneNumber(
                        value=normalized,
                        confidence=confidence,
                        context=extract_context(text, match.start(), len(raw)),
                        timestamp=timestamp,
                        validated=validate_phone_number(normalized),
                        country_code=country_code,
                        format=raw,
                        region=_REGION_BY_COUNTRY_CODE.get(country_code, "Unknown"),
                    ))

            return phone_numbers

        except Exception as e:
            logger.error(f"Phone number extraction error: {e}", exc_info=True)
            return []
