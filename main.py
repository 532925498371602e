"""
Scam Intelligence Extractor - demo runner

Usage:
    python main.py "Call +1 555 123 4567 or pay user@paytm"
    echo "message text" | python main.py
"""
import json
import logging
import sys

from scamintel.intelligence_extractor import IntelligenceExtractor
from scamintel.utils import configure_logging

configure_logging()
logger = logging.getLogger(__name__)


def main() -> int:
    text = " ".join(sys.argv[1:]) if len(sys.argv) > 1 else sys.stdin.read()
    if not text.strip():
        logger.warning("No input text provided")
        return 1

    extractor = IntelligenceExtractor()
    language = extractor.detect_language(text)
    entities = extractor.extract_entities(text, conversation_id="cli")

    print(json.dumps(
        {
            "language": language.model_dump(),
            "entities": [e.model_dump(mode="json", by_alias=True) for e in entities],
        },
        indent=2,
        ensure_ascii=False,
    ))
    return 0


if __name__ == "__main__":
    sys.exit(main())
