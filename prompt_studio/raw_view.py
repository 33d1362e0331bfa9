"""
Raw-Text View - editable JSON text kept in sync with the prompt store.

Store -> text: every store change re-renders the canonical text.
Text -> store: an edit is parsed and, only if it is a valid document,
pushed into the store. Invalid text is kept exactly as typed and the store
is left alone.
"""

import logging
from typing import Callable, Optional

from prompt_studio.core.errors import MalformedEditError
from prompt_studio.generation.codec import parse_document, serialize_document
from prompt_studio.generation.models import PromptDocument
from prompt_studio.store import PromptStore

logger = logging.getLogger(__name__)


class RawTextView:
    """Bidirectional textual view of a PromptStore."""

    def __init__(self, store: PromptStore):
        self.store = store
        self._text = serialize_document(store.value)
        self._unsubscribe = store.subscribe(self._render)

    @property
    def text(self) -> str:
        """The text currently shown, which may be transiently invalid."""
        return self._text

    @property
    def is_in_sync(self) -> bool:
        """True if the shown text is the canonical form of the stored document."""
        return self._text == serialize_document(self.store.value)

    def _render(self, document: Optional[PromptDocument]) -> None:
        self._text = serialize_document(document)

    def edit(self, text: str) -> bool:
        """
        Apply a user edit.

        Args:
            text: The full new text

        Returns:
            True if the text parsed and was pushed into the store
        """
        self._text = text
        try:
            document = parse_document(text)
        except MalformedEditError as e:
            logger.debug(f"Ignoring invalid JSON input: {e}")
            return False
        self.store.replace(document)
        return True

    def copy_to(self, writer: Callable[[str], None]) -> bool:
        """
        Hand the current text to a clipboard-like writer. Fire-and-forget:
        failures are logged and reported through the return value.
        """
        try:
            writer(self._text)
        except Exception as e:
            logger.warning(f"Copy failed: {e}")
            return False
        return True

    def close(self) -> None:
        """Stop following the store."""
        self._unsubscribe()
