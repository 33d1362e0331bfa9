"""
Enumerations shared across the Prompt Studio.
"""

from enum import Enum


class Language(str, Enum):
    """Supported interface and output languages."""

    EN = "en"
    KO = "ko"


class ModelName(str, Enum):
    """Built-in model variants offered by the studio."""

    GEMINI_FLASH = "gemini-2.5-flash"  # faster, cheaper
    GEMINI_PRO = "gemini-2.5-pro"  # higher quality
