"""
Bank Account Extraction Module
IBANs plus domestic account numbers disambiguated by banking context
"""
import re
import logging
from datetime import datetime
from typing import List, Optional, Set

from .models import BankAccount
from .utils import extract_context, sanitize_text

logger = logging.getLogger(__name__)

IBAN_COUNTRY_CODES = frozenset({
    "AD", "AE", "AL", "AT", "AZ", "BA", "BE", "BG", "BH", "BR", "BY", "CH",
    "CR", "CY", "CZ", "DE", "DK", "DO", "EE", "EG", "ES", "FI", "FO", "FR",
    "GB", "GE", "GI", "GL", "GR", "GT", "HR", "HU", "IE", "IL", "IQ", "IS",
    "IT", "JO", "KW", "KZ", "LB", "LC", "LI", "LT", "LU", "LV", "MC", "MD",
    "ME", "MK", "MR", "MT", "MU", "NL", "NO", "PK", "PL", "PS", "PT", "QA",
    "RO", "RS", "SA", "SE", "SI", "SK", "SM", "TN", "TR", "UA", "VA", "VG",
    "XK",
})

IBAN_MIN_LENGTH = 15
IBAN_MAX_LENGTH = 34

# Checked before the general keywords: these only occur in Indian banking
_INDIAN_BANKING_KEYWORDS = ("ifsc", "neft", "rtgs", "imps", "upi")

_BANKING_KEYWORDS = (
    "account", "routing", "bank", "transfer", "deposit", "wire", "ach",
    "a/c", "account number",
)

_IBAN_SHAPE = re.compile(r"^[A-Z]{2}\d{2}[A-Z0-9]{1,30}$", re.ASCII)


def is_valid_iban(iban: str) -> bool:
    """Shape, length bounds and a known country code."""
    if not _IBAN_SHAPE.match(iban):
        return False
    if not IBAN_MIN_LENGTH <= len(iban) <= IBAN_MAX_LENGTH:
        return False
    return iban[:2] in IBAN_COUNTRY_CODES


def iban_checksum_valid(iban: str) -> bool:
    """ISO 13616 mod-97 check."""
    rearranged = iban[4:] + iban[:4]
    numeric = "".join(str(int(c, 36)) for c in rearranged)
    return int(numeric) % 97 == 1


class BankAccountExtractor:
    """Extract IBANs and context-confirmed domestic account numbers"""

    def __init__(self):
        self.patterns = self._compile_patterns()

    def _compile_patterns(self):
        return {
            "iban": re.compile(r"\b([A-Z]{2}\d{2}[A-Z0-9]{1,30})\b", re.ASCII),
            "domestic": re.compile(r"\b(\d{8,18})\b", re.ASCII),
            # Indian Financial System Code: 4 letters, a zero, 6 alphanumerics
            "ifsc": re.compile(r"\b([A-Z]{4}0[A-Z0-9]{6})\b", re.IGNORECASE | re.ASCII),
        }

    def extract(self, text: str) -> List[BankAccount]:
        try:
            text = sanitize_text(text)
            if not text:
                return []

            timestamp = datetime.now()
            accounts: List[BankAccount] = []
            seen: Set[str] = set()

            for match in self.patterns["iban"].finditer(text):
                value = match.group(1)
                if not is_valid_iban(value) or value in seen:
                    continue
                seen.add(value)

                accounts.append(BankAccount(
                    value=value,
                    confidence=0.9,
                    context=extract_context(text, match.start(1), len(value)),
                    timestamp=timestamp,
                    validated=True,
                    format="IBAN",
                    country_code=value[:2],
                    checksum_valid=iban_checksum_valid(value),
                ))

            for match in self.patterns["domestic"].finditer(text):
                value = match.group(1)
                if value in seen:
                    continue

                context = extract_context(text, match.start(1), len(value))
                context_lower = context.lower()

                if any(k in context_lower for k in _INDIAN_BANKING_KEYWORDS):
                    seen.add(value)
                    accounts.append(BankAccount(
                        value=value,
                        confidence=0.75,
                        context=context,
                        timestamp=timestamp,
                        validated=9 <= len(value) <= 18,
                        format="INDIAN_ACCOUNT",
                        ifsc=self._find_ifsc(context),
                    ))
                    continue

                if any(k in context_lower for k in _BANKING_KEYWORDS) and 8 <= len(value) <= 17:
                    seen.add(value)
                    accounts.append(BankAccount(
                        value=value,
                        confidence=0.7,
                        context=context,
                        timestamp=timestamp,
                        validated=True,
                        format="US_ACCOUNT",
                    ))

            return accounts

        except Exception as e:
            logger.error(f"Bank account extraction error: {e}", exc_info=True)
            return []

    def _find_ifsc(self, context: str) -> Optional[str]:
        match = self.patterns["ifsc"].search(context)
        return match.group(1).upper() if match else None
