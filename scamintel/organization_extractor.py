"""
Organization Extraction Module
Brand, institution and legal-entity name extraction with impersonation scoring.

Passes run in a fixed order and share one deduplication set keyed on the
lower-cased name, so a name claimed by a more specific pass (a known brand)
is never re-emitted by a looser one (a quoted phrase).
"""
import re
import logging
from datetime import datetime
from typing import List, Set

from .models import Organization
from .utils import extract_context, sanitize_text

logger = logging.getLogger(__name__)

LEGAL_SUFFIXES = (
    "Inc", "LLC", "Ltd", "Corporation", "Corp", "Company", "Co", "Group",
)

INSTITUTIONAL_KEYWORDS = (
    "Bank", "Trust", "Services", "Solutions", "Technologies", "Tech",
    "Systems", "Enterprises", "Holdings", "Partners", "Associates",
    "Foundation", "Institute", "Agency", "Department", "Ministry", "Bureau",
)

# Brands and institutions commonly impersonated in scams
KNOWN_BRANDS = (
    # Tech companies
    "Amazon", "Microsoft", "Apple", "Google", "Facebook", "Meta", "Netflix",
    "PayPal", "eBay", "Twitter", "Instagram", "WhatsApp", "Telegram",
    "LinkedIn", "TikTok", "Snapchat", "YouTube", "Adobe", "Oracle", "IBM",
    "Intel", "Samsung", "Sony", "Dell", "HP", "Lenovo",
    # Financial institutions
    "Bank of America", "Wells Fargo", "Chase", "JPMorgan", "Citibank", "HSBC",
    "Barclays", "Goldman Sachs", "Morgan Stanley", "American Express", "Visa",
    "Mastercard", "Discover", "Capital One", "US Bank", "PNC Bank", "TD Bank",
    "ICICI Bank", "HDFC Bank", "State Bank of India", "SBI", "Axis Bank",
    "Kotak",
    # Government agencies
    "IRS", "FBI", "CIA", "NSA", "Social Security", "Medicare", "Medicaid",
    "Department of Justice", "Homeland Security", "Immigration", "Customs",
    "Border Protection", "Treasury", "Federal Reserve",
    # Delivery / logistics
    "FedEx", "UPS", "DHL", "USPS", "Amazon Logistics",
    # Telecom
    "Verizon", "AT&T", "T-Mobile", "Sprint", "Comcast", "Xfinity", "Spectrum",
    # Other
    "Geek Squad", "Norton", "McAfee", "Symantec", "Best Buy", "Walmart",
    "Target", "Costco", "Home Depot", "Publishers Clearing House",
    "Lottery Commission", "Sweepstakes",
)

IMPERSONATION_INDICATORS = (
    "verify your account", "suspended account", "unusual activity",
    "security alert", "confirm your identity", "update your information",
    "claim your prize", "refund pending", "payment failed", "action required",
    "urgent", "immediate action", "click here", "verify now", "confirm now",
    "act now", "limited time", "expires", "locked account",
    "unauthorized access", "suspicious activity", "fraud alert",
    "representative", "customer service", "support team",
    "technical support", "help desk", "final notice", "arrest", "warrant",
    "legal action", "owe", "back taxes", "prize", "winner",
    "congratulations", "selected", "inheritance",
)

AUTHORITY_KEYWORDS = (
    "official", "authorized", "government", "federal", "department",
    "agency", "administration",
)

FINANCIAL_KEYWORDS = (
    "payment", "refund", "money", "transfer", "account", "credit card",
    "bank", "wire", "deposit",
)

# Digits ("Paypa1") or characters unusual in a company name
_SUSPICIOUS_NAME_PATTERNS = (
    re.compile(r"\d"),
    re.compile(r"[^a-zA-Z0-9\s&'-]"),
)

INDICATOR_WEIGHT = 0.25
INDICATOR_CAP = 0.7
AUTHORITY_WEIGHT = 0.2
FINANCIAL_WEIGHT = 0.15
SUSPICIOUS_NAME_WEIGHT = 0.2
POTENTIALLY_FAKE_THRESHOLD = 0.5


def score_impersonation_risk(context: str, organization_name: str) -> float:
    """
    Estimate how likely a named organization is being impersonated.

    Args:
        context: Text surrounding the organization mention
        organization_name: The extracted name

    Returns:
        Risk score between 0.0 and 1.0
    """
    score = 0.0
    context_lower = context.lower()
    name_lower = organization_name.lower()

    indicator_count = sum(1 for i in IMPERSONATION_INDICATORS if i in context_lower)
    if indicator_count:
        score += min(indicator_count * INDICATOR_WEIGHT, INDICATOR_CAP)

    if any(k in context_lower for k in AUTHORITY_KEYWORDS):
        score += AUTHORITY_WEIGHT

    if any(k in context_lower for k in FINANCIAL_KEYWORDS):
        score += FINANCIAL_WEIGHT

    for pattern in _SUSPICIOUS_NAME_PATTERNS:
        if pattern.search(name_lower):
            score += SUSPICIOUS_NAME_WEIGHT

    return min(score, 1.0)


class OrganizationExtractor:
    """Extract organization names and score their impersonation risk"""

    def __init__(self):
        self.patterns = self._compile_patterns()

    def _compile_patterns(self):
        name_body = r"[A-Z][A-Za-z0-9&\s'-]{1,50}"
        return {
            "brands": tuple(
                re.compile(
                    rf"(?<![A-Za-z0-9_])({re.escape(brand)})(?![A-Za-z0-9_])", re.IGNORECASE
                )
                for brand in KNOWN_BRANDS
            ),
            "legal_suffix": re.compile(
                rf"\b({name_body}\s+(?:{'|'.join(LEGAL_SUFFIXES)})\.?)\b"
            ),
            "institutional": re.compile(
                rf"\b({name_body}\s+(?:{'|'.join(INSTITUTIONAL_KEYWORDS)}))\b"
            ),
            "support": re.compile(
                r"\b([A-Z][A-Za-z0-9]{2,20}\s+(?:Support|Service|Team|Help|Desk))\b"
            ),
            "quoted": re.compile(r"[\"'“‘]([A-Z][A-Za-z0-9&\s'-]{2,50})[\"'”’]"),
        }

    def extract(self, text: str) -> List[Organization]:
        try:
            text = sanitize_text(text)
            if not text:
                return []

            timestamp = datetime.now()
            organizations: List[Organization] = []
            seen: Set[str] = set()

            def add(match: re.Match, confidence: float, is_known_brand: bool = False) -> None:
                value = match.group(1).strip()
                key = value.lower()
                if key in seen:
                    return
                seen.add(key)

                context = extract_context(text, match.start(1), len(value))
                risk = score_impersonation_risk(context, value)
                organizations.append(Organization(
                    value=value,
                    confidence=confidence,
                    context=context,
                    timestamp=timestamp,
                    validated=True,
                    is_known_brand=is_known_brand,
                    impersonation_risk=risk,
                    potentially_fake=risk > POTENTIALLY_FAKE_THRESHOLD,
                ))

            for pattern in self.patterns["brands"]:
                for match in pattern.finditer(text):
                    add(match, 0.95, is_known_brand=True)

            for match in self.patterns["legal_suffix"].finditer(text):
                add(match, 0.85)

            for match in self.patterns["institutional"].finditer(text):
                add(match, 0.75)

            for match in self.patterns["support"].finditer(text):
                add(match, 0.7)

            for match in self.patterns["quoted"].finditer(text):
                value = match.group(1).strip()
                # A lone word with a single capital is more likely emphasis than a name
                if len(value.split()) < 2 and sum(1 for c in value if c.isupper()) < 2:
                    continue
                add(match, 0.7)

            return organizations

        except Exception as e:
            logger.error(f"Organization extraction error: {e}", exc_info=True)
            return []
