"""
Configuration Module
Loads and validates environment variables
"""
import os
import logging
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class Config:
    """Operational settings from environment variables"""

    # Logging
    LOG_LEVEL = os.getenv("SCAMINTEL_LOG_LEVEL", "INFO").upper()

    # Input guard: text is truncated to this length before any pattern runs
    MAX_TEXT_LENGTH = int(os.getenv("SCAMINTEL_MAX_TEXT_LENGTH", "10000"))

    # Number of prior messages joined when extracting with conversation history
    HISTORY_WINDOW = int(os.getenv("SCAMINTEL_HISTORY_WINDOW", "10"))

    @classmethod
    def validate(cls):
        """Validate configuration"""
        errors = []

        if logging.getLevelName(cls.LOG_LEVEL) == f"Level {cls.LOG_LEVEL}":
            errors.append(f"SCAMINTEL_LOG_LEVEL is not a logging level: {cls.LOG_LEVEL}")

        if cls.MAX_TEXT_LENGTH <= 0:
            errors.append("SCAMINTEL_MAX_TEXT_LENGTH must be positive")

        if cls.HISTORY_WINDOW < 0:
            errors.append("SCAMINTEL_HISTORY_WINDOW must not be negative")

        if errors:
            error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            logger.error(error_msg)
            raise ValueError(error_msg)

        logger.debug(
            f"Configuration validated: log_level={cls.LOG_LEVEL}, "
            f"max_text_length={cls.MAX_TEXT_LENGTH}, history_window={cls.HISTORY_WINDOW}"
        )

        return True


# Validate on import
Config.validate()
