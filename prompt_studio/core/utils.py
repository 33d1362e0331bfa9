"""
Utility functions for the Prompt Studio.
"""

import logging
import textwrap

logger = logging.getLogger(__name__)


def strip_code_fences(text: str) -> str:
    """
    Remove a surrounding markdown code block from a model response.

    Args:
        text: Raw response text

    Returns:
        The text inside the first ```json (or bare ```) block, or the
        stripped input if there is no fenced block
    """
    text = text.strip()
    if "```json" in text:
        text = text.split("```json")[1].split("```")[0].strip()
    elif "```" in text:
        text = text.split("```")[1].split("```")[0].strip()
    return text


def log_prompt_and_response(prompt: str, response: str, context: str = "") -> None:
    """Log a prompt/response pair in a readable format at debug level."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    if context:
        logger.debug("\n=== %s ===", context)
    logger.debug("\n----- Prompt -----\n%s", textwrap.indent(prompt, "> "))
    logger.debug("\n----- Response -----\n%s", textwrap.indent(response, "< "))
    logger.debug("-" * 60)
