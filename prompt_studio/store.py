"""
Prompt Data Store - the single mutable cell holding the current document.

Every mutation is applied to a plain copy of the document and re-validated
as a whole before it is committed, so a present document always satisfies
the schema. Subscribers are notified with the new value after each change.
"""

import logging
from typing import Any, Callable, List, Mapping, Optional, Union

from pydantic import BaseModel

from prompt_studio.core.errors import DocumentAbsentError, InvalidUpdateError
from prompt_studio.generation.fields import FieldPath
from prompt_studio.generation.models import PromptDocument
from prompt_studio.generation.schema import validate_document

logger = logging.getLogger(__name__)

Subscriber = Callable[[Optional[PromptDocument]], None]
PathLike = Union[FieldPath, str]


def _as_path(path: PathLike) -> FieldPath:
    return path if isinstance(path, FieldPath) else FieldPath.parse(path)


def _plain(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump()
    return value


class PromptStore:
    """Holds the current PromptDocument (or None) and broadcasts changes."""

    def __init__(self, document: Optional[PromptDocument] = None):
        self._value: Optional[PromptDocument] = document
        self._subscribers: List[Subscriber] = []

    @property
    def value(self) -> Optional[PromptDocument]:
        """The current document. Treat it as read-only; mutate through the store."""
        return self._value

    @property
    def is_present(self) -> bool:
        return self._value is not None

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a change callback.

        Returns:
            A function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self) -> None:
        for callback in list(self._subscribers):
            callback(self._value)

    def replace(self, document: Union[PromptDocument, Mapping[str, Any]]) -> None:
        """
        Swap in a whole new document.

        Raises:
            InvalidUpdateError: If a mapping is given that does not satisfy the schema
        """
        if not isinstance(document, PromptDocument):
            try:
                document = validate_document(dict(document))
            except ValueError as e:
                raise InvalidUpdateError(str(e)) from e
        self._value = document
        logger.debug("Store replaced (%d characters)", len(document.characters))
        self._publish()

    def clear(self) -> None:
        """Set the value to absent."""
        if self._value is None:
            return
        self._value = None
        logger.debug("Store cleared")
        self._publish()

    def update(self, apply: Callable[[Any], None], describe: str = "update document") -> None:
        """
        Apply an arbitrary edit to a plain copy of the document and commit it
        if the result is schema-valid.

        Raises:
            DocumentAbsentError: If no document is loaded
            InvalidUpdateError: If the edit fails or the result violates the schema
        """
        if self._value is None:
            raise DocumentAbsentError(f"Cannot {describe}: no document loaded")
        data = self._value.model_dump()
        try:
            apply(data)
        except (KeyError, IndexError, TypeError) as e:
            raise InvalidUpdateError(f"Cannot {describe}: {e}") from e
        try:
            document = validate_document(data)
        except ValueError as e:
            raise InvalidUpdateError(f"Cannot {describe}: {e}") from e
        if document == self._value:
            return
        self._value = document
        self._publish()

    def update_path(self, path: PathLike, value: Any) -> None:
        """
        Set one nested field, leaving every other field untouched.

        Args:
            path: FieldPath or dotted string (e.g. "scene_settings.video_style.lighting")
            value: New value; models are converted to plain data

        Raises:
            DocumentAbsentError: If no document is loaded
            InvalidUpdateError: If the path does not exist or the result violates the schema
        """
        path = _as_path(path)
        self.update(lambda data: path.set(data, _plain(value)), f"update {path}")

    def _sequence(self, data: Any, path: FieldPath) -> list:
        sequence = path.get(data)
        if not isinstance(sequence, list):
            raise TypeError(f"{path} is not a sequence")
        return sequence

    def insert_item(self, path: PathLike, value: Any, index: Optional[int] = None) -> None:
        """
        Insert into a sequence field (append when `index` is None).

        Raises:
            DocumentAbsentError: If no document is loaded
            InvalidUpdateError: If the path is not a sequence or the item is invalid
        """
        path = _as_path(path)

        def apply(data: Any) -> None:
            sequence = self._sequence(data, path)
            if index is None:
                sequence.append(_plain(value))
            else:
                if not 0 <= index <= len(sequence):
                    raise IndexError(f"insert index {index} out of range")
                sequence.insert(index, _plain(value))

        self.update(apply, f"insert into {path}")

    def remove_item(self, path: PathLike, index: int) -> None:
        """
        Remove one entry from a sequence field.

        Raises:
            DocumentAbsentError: If no document is loaded
            InvalidUpdateError: If the path is not a sequence or the index is out of range
        """
        path = _as_path(path)

        def apply(data: Any) -> None:
            sequence = self._sequence(data, path)
            if not 0 <= index < len(sequence):
                raise IndexError(f"remove index {index} out of range")
            del sequence[index]

        self.update(apply, f"remove from {path}")

    def move_item(self, path: PathLike, source: int, target: int) -> None:
        """
        Move one entry of a sequence field to a new position.

        Raises:
            DocumentAbsentError: If no document is loaded
            InvalidUpdateError: If the path is not a sequence or an index is out of range
        """
        path = _as_path(path)

        def apply(data: Any) -> None:
            sequence = self._sequence(data, path)
            if not (0 <= source < len(sequence) and 0 <= target < len(sequence)):
                raise IndexError(f"move {source}->{target} out of range")
            sequence.insert(target, sequence.pop(source))

        self.update(apply, f"reorder {path}")
