"""
Field Editors - per-section editing of the prompt document.

Each editor turns edits into store calls and can ask the model for a
replacement value for one of its text fields. New sequence entries are
always created with every required field present.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Set

from prompt_studio.core.enums import Language, ModelName
from prompt_studio.core.errors import (
    DocumentAbsentError,
    GenerationFailedError,
    InvalidUpdateError,
    NotInitializedError,
)
from prompt_studio.core.i18n import options_for, translate
from prompt_studio.core.tracking import RequestTracker
from prompt_studio.generation.client import PromptClient
from prompt_studio.generation.fields import (
    AudioField,
    CameraField,
    CharacterField,
    FieldId,
    FieldPath,
    SceneField,
)
from prompt_studio.generation.models import Character, PromptDocument
from prompt_studio.store import PromptStore

logger = logging.getLogger(__name__)

ELEMENTS_PATH = FieldPath.of("scene_settings", "background_details", "elements")
CHARACTERS_PATH = FieldPath.of("characters")
SFX_PATH = FieldPath.of("audio", "sfx")
DIALOGUE_PATH = FieldPath.of("audio", "dialogue")


@dataclass
class EditorContext:
    """State shared by all editors of one studio session."""

    store: PromptStore
    client: PromptClient
    language: Language = Language.KO
    model: str = ModelName.GEMINI_FLASH.value
    description: str = ""
    requests: RequestTracker = field(default_factory=RequestTracker)
    busy: Set[Any] = field(default_factory=set)
    errors: Dict[Any, str] = field(default_factory=dict)

    def reset_suggestions(self) -> None:
        """Drop every outstanding suggestion: later completions are discarded."""
        self.requests.invalidate()
        self.busy.clear()
        self.errors.clear()

    def drop_suggestions(self, matches: Callable[[Any], bool]) -> None:
        """Drop the outstanding suggestions whose field id satisfies `matches`."""
        self.requests.invalidate_where(matches)
        self.busy.difference_update([key for key in self.busy if matches(key)])
        for key in [key for key in self.errors if matches(key)]:
            del self.errors[key]


class FieldEditor:
    """Base class: store access and the suggestion workflow."""

    def __init__(self, context: EditorContext):
        self.context = context

    @property
    def store(self) -> PromptStore:
        return self.context.store

    @property
    def document(self) -> PromptDocument:
        document = self.store.value
        if document is None:
            raise DocumentAbsentError("No prompt document loaded")
        return document

    def label(self, field_id: FieldId) -> str:
        """Localized label of a field, as sent to the model."""
        return translate(field_id.label_key, self.context.language)

    def value_of(self, field_id: FieldId) -> str:
        """
        Current text of a field; an absent dialogue reads as empty.

        Raises:
            DocumentAbsentError: If no document is loaded
            InvalidUpdateError: If the field does not exist (e.g. character index out of range)
        """
        try:
            return field_id.path.get(self.document.model_dump())
        except KeyError as e:
            if isinstance(field_id, AudioField) and field_id.part.startswith("dialogue_"):
                return ""
            raise InvalidUpdateError(f"No field at {field_id.path}") from e

    def set_text(self, field_id: FieldId, value: str) -> None:
        self.store.update_path(field_id.path, value)

    def is_suggesting(self, field_id: FieldId) -> bool:
        return field_id in self.context.busy

    def suggestion_error(self, field_id: FieldId) -> Optional[str]:
        return self.context.errors.get(field_id)

    async def suggest(self, field_id: FieldId) -> Optional[str]:
        """
        Ask the model for a replacement value and merge it into the field.

        Skipped when there is no project description. A completion that was
        superseded (newer request for the same field, a reset, or a removal or
        reorder of characters while a character field was pending) is dropped.

        Returns:
            The applied suggestion, or None if nothing was applied

        Raises:
            DocumentAbsentError: If no document is loaded
            InvalidUpdateError: If the field does not exist
        """
        ctx = self.context
        if not ctx.description.strip():
            logger.info("Skipping suggestion for %s: no project description", field_id)
            return None

        current_value = self.value_of(field_id)
        token = ctx.requests.issue(field_id)
        ctx.busy.add(field_id)
        ctx.errors.pop(field_id, None)

        error: Optional[str] = None
        suggestion: Optional[str] = None
        try:
            suggestion = await ctx.client.suggest_field(
                self.label(field_id),
                current_value,
                ctx.description,
                ctx.language,
                ctx.model,
            )
        except (NotInitializedError, GenerationFailedError) as e:
            error = str(e)

        if not ctx.requests.is_current(token):
            logger.info("Discarding stale suggestion for %s", field_id)
            return None
        ctx.requests.release(token)
        ctx.busy.discard(field_id)

        if error is not None:
            ctx.errors[field_id] = error
            return None
        try:
            self.set_text(field_id, suggestion)
        except (DocumentAbsentError, InvalidUpdateError) as e:
            logger.warning(f"Could not apply suggestion for {field_id}: {e}")
            return None
        return suggestion


class SceneSettingsEditor(FieldEditor):
    """Overall situation, background details and video style."""

    def set_overall_situation(self, value: str) -> None:
        self.set_text(SceneField("overall_situation"), value)

    def set_location(self, value: str) -> None:
        self.set_text(SceneField("location"), value)

    def set_genre(self, value: str) -> None:
        # any text is accepted; the options list is only a suggestion
        self.set_text(SceneField("genre"), value)

    def set_look_and_feel(self, value: str) -> None:
        self.set_text(SceneField("look_and_feel"), value)

    def set_color_palette(self, value: str) -> None:
        self.set_text(SceneField("color_palette"), value)

    def set_lighting(self, value: str) -> None:
        self.set_text(SceneField("lighting"), value)

    def add_element(self, value: str = "") -> int:
        """Append a background element; returns its index."""
        self.store.insert_item(ELEMENTS_PATH, value)
        return len(self.document.scene_settings.background_details.elements) - 1

    def set_element(self, index: int, value: str) -> None:
        self.store.update_path(ELEMENTS_PATH.child(index), value)

    def remove_element(self, index: int) -> None:
        self.store.remove_item(ELEMENTS_PATH, index)

    def move_element(self, source: int, target: int) -> None:
        self.store.move_item(ELEMENTS_PATH, source, target)

    def genre_options(self) -> List[str]:
        return list(options_for(self.context.language)["genres"])


class CharactersEditor(FieldEditor):
    """The ordered list of characters."""

    def add_character(self, character: Optional[Character] = None) -> int:
        """Append a character (blank by default); returns its index."""
        self.store.insert_item(CHARACTERS_PATH, character or Character.blank())
        return len(self.document.characters) - 1

    def remove_character(self, index: int) -> None:
        self.store.remove_item(CHARACTERS_PATH, index)
        self._drop_character_suggestions()

    def move_character(self, source: int, target: int) -> None:
        self.store.move_item(CHARACTERS_PATH, source, target)
        self._drop_character_suggestions()

    def _drop_character_suggestions(self) -> None:
        # indices shifted; a pending result could land on another character
        self.context.drop_suggestions(lambda key: isinstance(key, CharacterField))

    def set_name(self, index: int, name: str) -> None:
        self.set_text(CharacterField(index, "name"), name)

    def set_appearance(self, index: int, value: str) -> None:
        self.set_text(CharacterField(index, "appearance"), value)

    def set_action(self, index: int, value: str) -> None:
        self.set_text(CharacterField(index, "action"), value)

    def set_text(self, field_id: FieldId, value: str) -> None:
        if isinstance(field_id, CharacterField) and field_id.part == "name":
            self._rename(field_id, value)
        else:
            super().set_text(field_id, value)

    def _rename(self, field_id: CharacterField, name: str) -> None:
        """
        Rename a character. If the old name was unique and is the dialogue
        speaker, the speaker follows the rename in the same update.
        """
        def apply(data: Dict[str, Any]) -> None:
            characters = data["characters"]
            old_name = characters[field_id.index]["name"]
            field_id.path.set(data, name)
            dialogue = data["audio"].get("dialogue")
            names = [c["name"] for c in characters]
            if (
                dialogue
                and old_name
                and dialogue.get("speaker") == old_name
                and old_name not in names
            ):
                dialogue["speaker"] = name
                logger.debug("Dialogue speaker renamed %r -> %r", old_name, name)

        self.store.update(apply, f"rename character {field_id.index}")


class CameraEditor(FieldEditor):
    """Camera shot type and movement description."""

    def set_type(self, value: str) -> None:
        self.set_text(CameraField("type"), value)

    def set_description(self, value: str) -> None:
        self.set_text(CameraField("description"), value)

    def camera_type_options(self) -> List[str]:
        return list(options_for(self.context.language)["camera_types"])


class AudioEditor(FieldEditor):
    """Music, sound effects and the optional dialogue."""

    def set_music(self, value: str) -> None:
        self.set_text(AudioField("music"), value)

    def add_sfx(self, value: str = "") -> int:
        """Append a sound effect; returns its index."""
        self.store.insert_item(SFX_PATH, value)
        return len(self.document.audio.sfx) - 1

    def set_sfx(self, index: int, value: str) -> None:
        self.store.update_path(SFX_PATH.child(index), value)

    def remove_sfx(self, index: int) -> None:
        self.store.remove_item(SFX_PATH, index)

    def move_sfx(self, source: int, target: int) -> None:
        self.store.move_item(SFX_PATH, source, target)

    def set_speaker(self, value: str) -> None:
        self.set_text(AudioField("dialogue_speaker"), value)

    def set_line(self, value: str) -> None:
        self.set_text(AudioField("dialogue_line"), value)

    def clear_dialogue(self) -> None:
        self.store.update_path(DIALOGUE_PATH, None)

    def set_text(self, field_id: FieldId, value: str) -> None:
        if (
            isinstance(field_id, AudioField)
            and field_id.part.startswith("dialogue_")
            and self.document.audio.dialogue is None
        ):
            dialogue = {"speaker": "", "line": ""}
            dialogue[field_id.path.parts[-1]] = value
            self.store.update_path(DIALOGUE_PATH, dialogue)
        else:
            super().set_text(field_id, value)

    def speaker_options(self) -> List[str]:
        """Character names offered as speakers (not enforced)."""
        return self.document.character_names()
