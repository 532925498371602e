"""
Email Extraction Module
"""
import re
import logging
from datetime import datetime
from typing import List, Set

from .models import Email
from .utils import extract_context, sanitize_text

logger = logging.getLogger(__name__)

_EMAIL_SHAPE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$", re.ASCII)


def is_valid_email(email: str) -> bool:
    if not _EMAIL_SHAPE.match(email):
        return False

    local_part, domain = email.split("@", 1)

    if local_part.startswith(".") or local_part.endswith(".") or ".." in local_part:
        return False

    if "." not in domain:
        return False

    if domain.startswith((".", "-")) or domain.endswith((".", "-")):
        return False

    return True


class EmailExtractor:
    """Extract email addresses, lower-cased"""

    def __init__(self):
        self.pattern = re.compile(
            r"\b([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})\b", re.ASCII
        )

    def extract(self, text: str) -> List[Email]:
        try:
            text = sanitize_text(text)
            if not text:
                return []

            timestamp = datetime.now()
            emails: List[Email] = []
            seen: Set[str] = set()

            for match in self.pattern.finditer(text):
                value = match.group(1).lower()
                if value in seen:
                    continue
                seen.add(value)

                is_valid = is_valid_email(value)
                emails.append(Email(
                    value=value,
                    confidence=0.95 if is_valid else 0.7,
                    context=extract_context(text, match.start(1), len(value)),
                    timestamp=timestamp,
                    validated=is_valid,
                    domain=value.split("@", 1)[1],
                    format=value,
                ))

            return emails

        except Exception as e:
            logger.error(f"Email extraction error: {e}", exc_info=True)
            return []
