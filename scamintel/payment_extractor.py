"""
Payment Identifier Extraction Module
UPI handles, crypto wallets, PayPal ids and regional payment systems.

UPI, Bitcoin, Ethereum and PayPal patterns always run. Alipay, WeChat Pay,
PIX and SEPA formats are too ambiguous outside their home locale (bare digit
strings, short handles), so they only run when the detected or declared
language matches exactly.
"""
import re
import logging
from datetime import datetime
from typing import Callable, List, Optional, Set

from .language_detector import LanguageDetector
from .models import PaymentId
from .utils import extract_context, sanitize_text

logger = logging.getLogger(__name__)

# Provider names are matched as substrings of the handle's provider part
_UPI_PROVIDERS = (
    "paytm", "ybl", "okaxis", "okicici", "oksbi", "okhdfc",
    "ibl", "axl", "upi", "gpay", "phonepe",
)

_PAYPAL_CONTEXT_KEYWORDS = ("paypal", "transaction")

SEPA_LANGUAGES = frozenset({"fr", "de", "es", "it"})

_UPI_SHAPE = re.compile(r"^[a-zA-Z0-9._-]+@[a-zA-Z0-9]+$")

_EMAIL_ALT = r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"
_UUID_ALT = r"[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}"

# ASCII word boundaries: CJK text often runs straight into an id without a space
_ID_START = r"(?<![A-Za-z0-9_])"
_ID_END = r"(?![A-Za-z0-9_])"


def is_valid_upi(upi: str) -> bool:
    """handle@provider with a recognised provider"""
    if not _UPI_SHAPE.match(upi):
        return False
    provider = upi.split("@", 1)[1].lower()
    return any(p in provider for p in _UPI_PROVIDERS)


def is_valid_bitcoin_address(address: str) -> bool:
    # Legacy (1...) and P2SH (3...): 26-35 chars; Bech32 (bc1...): 42-62 chars
    if address.startswith(("1", "3")):
        return 26 <= len(address) <= 35
    if address.startswith("bc1"):
        return 42 <= len(address) <= 62
    return False


class PaymentIdExtractor:
    """Extract payment identifiers, applying regional systems by language"""

    def __init__(self, language_detector: Optional[LanguageDetector] = None):
        self.language_detector = language_detector or LanguageDetector()
        self.patterns = self._compile_patterns()

    def _compile_patterns(self):
        """Pre-compile regex patterns for performance."""
        return {
            "upi": re.compile(r"\b([a-zA-Z0-9._-]+@[a-zA-Z0-9]+)\b", re.ASCII),
            "bitcoin": re.compile(
                r"\b([13][a-km-zA-HJ-NP-Z1-9]{25,34}|bc1[a-z0-9]{39,59})\b", re.ASCII
            ),
            "ethereum": re.compile(r"\b(0x[a-fA-F0-9]{40})\b", re.ASCII),
            "paypal": re.compile(r"\b([A-Z0-9]{17})\b", re.ASCII),
            "alipay": re.compile(
                rf"(?:支付宝|{_ID_START}alipay)[:：\s]*({_EMAIL_ALT}|[0-9]{{11}}){_ID_END}",
                re.IGNORECASE,
            ),
            "wechat": re.compile(
                rf"(?:微信|{_ID_START}wechat)[:：\s]*([a-zA-Z0-9_-]{{6,20}}){_ID_END}",
                re.IGNORECASE,
            ),
            "pix": re.compile(
                rf"\b(?:chave pix|pix)[:\s]*({_EMAIL_ALT}|[0-9]{{11}}|[0-9]{{14}}|{_UUID_ALT}){_ID_END}",
                re.IGNORECASE,
            ),
            "sepa": re.compile(r"\b(RF\d{2}[A-Z0-9]{1,21})\b", re.IGNORECASE | re.ASCII),
        }

    def extract(self, text: str, language: Optional[str] = None) -> List[PaymentId]:
        try:
            text = sanitize_text(text)
            if not text:
                return []

            if not language:
                language = self.language_detector.detect(text).language

            timestamp = datetime.now()
            payment_ids: List[PaymentId] = []
            seen: Set[str] = set()

            def collect(
                pattern_name: str,
                payment_system: str,
                confidence: float,
                accept: Optional[Callable[[str, str], bool]] = None,
                validate: Optional[Callable[[str], bool]] = None,
                normalize: Optional[Callable[[str], str]] = None,
            ) -> None:
                try:
                    for match in self.patterns[pattern_name].finditer(text):
                        raw = match.group(1)
                        value = normalize(raw) if normalize else raw
                        context = extract_context(text, match.start(), len(value))

                        if accept and not accept(value, context):
                            continue
                        if value in seen:
                            continue
                        seen.add(value)

                        payment_ids.append(PaymentId(
                            value=value,
                            confidence=confidence,
                            context=context,
                            timestamp=timestamp,
                            validated=validate(value) if validate else True,
                            payment_system=payment_system,
                            format=value,
                        ))
                except Exception as e:
                    logger.debug(f"{payment_system} pattern error: {e}")

            collect("upi", "UPI", 0.85, accept=lambda value, _: is_valid_upi(value))
            collect("bitcoin", "Bitcoin", 0.8, validate=is_valid_bitcoin_address)
            collect("ethereum", "Ethereum", 0.8)
            collect(
                "paypal", "PayPal", 0.7,
                accept=lambda _, context: any(
                    k in context.lower() for k in _PAYPAL_CONTEXT_KEYWORDS
                ),
            )

            if language == "zh":
                collect("alipay", "Alipay", 0.85)
                collect("wechat", "WeChat Pay", 0.85)

            if language == "pt":
                collect("pix", "PIX", 0.85)

            if language in SEPA_LANGUAGES:
                collect("sepa", "SEPA", 0.8, normalize=str.upper)

            return payment_ids

        except Exception as e:
            logger.error(f"Payment ID extraction error: {e}", exc_info=True)
            return []
