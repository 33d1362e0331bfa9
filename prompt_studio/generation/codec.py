"""
Canonical text form of a prompt document.

`parse_document(serialize_document(doc)) == doc` holds for every valid
document. The absent optional dialogue is omitted from the text.
"""

import json
from typing import Optional

from prompt_studio.core.errors import MalformedEditError
from prompt_studio.generation.models import PromptDocument
from prompt_studio.generation.schema import validate_document


def serialize_document(document: Optional[PromptDocument]) -> str:
    """
    Render a document as pretty-printed JSON (2-space indent).

    Args:
        document: Document to render, or None

    Returns:
        The canonical text, or an empty string when there is no document
    """
    if document is None:
        return ""
    return json.dumps(document.model_dump(exclude_none=True), indent=2, ensure_ascii=False)


def parse_document(text: str) -> PromptDocument:
    """
    Parse text into a prompt document.

    Args:
        text: JSON text

    Returns:
        The validated PromptDocument

    Raises:
        MalformedEditError: If the text is not JSON or does not satisfy the schema
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedEditError(f"Invalid JSON: {e}") from e
    try:
        return validate_document(data)
    except ValueError as e:
        raise MalformedEditError(f"Document does not match the schema: {e}") from e
