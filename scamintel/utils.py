"""
Utilities Module
Input sanitization, context windowing and logging setup shared by all extractors
"""
import logging
from typing import Optional

from .config import Config

logger = logging.getLogger(__name__)

# Characters kept on each side of a match for the entity context snippet
CONTEXT_RADIUS = 50

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for scripts and services embedding the engine."""
    logging.basicConfig(
        level=level or Config.LOG_LEVEL,
        format=LOG_FORMAT,
    )


def sanitize_text(text, max_length: Optional[int] = None) -> str:
    """
    Sanitize text input

    Args:
        text: Input text (non-string values are converted)
        max_length: Maximum allowed length, defaults to Config.MAX_TEXT_LENGTH

    Returns:
        Sanitized text
    """
    try:
        if text is None:
            return ""

        # Convert to string
        text = str(text)

        # Limit length
        limit = max_length if max_length is not None else Config.MAX_TEXT_LENGTH
        if len(text) > limit:
            logger.debug(f"Truncating input from {len(text)} to {limit} characters")
            text = text[:limit]

        # Remove null bytes
        text = text.replace('\x00', '')

        return text.strip()

    except Exception as e:
        logger.error(f"Text sanitization error: {e}")
        return ""


def extract_context(text: str, index: int, length: int, radius: int = CONTEXT_RADIUS) -> str:
    """
    Return the text surrounding a match, clipped to the text bounds.

    Args:
        text: Full source text
        index: Start offset of the match
        length: Length of the match
        radius: Characters kept on each side

    Returns:
        Trimmed context snippet
    """
    start = max(0, index - radius)
    end = min(len(text), index + length + radius)
    return text[start:end].strip()
