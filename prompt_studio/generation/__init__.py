"""
Prompt document generation.

Schema, canonical text form, field addressing and the model client.
"""

from prompt_studio.generation.client import PromptClient
from prompt_studio.generation.codec import parse_document, serialize_document
from prompt_studio.generation.fields import (
    AudioField,
    CameraField,
    CharacterField,
    FieldId,
    FieldPath,
    SceneField,
    field_id_for_path,
)
from prompt_studio.generation.models import (
    AppearanceAndAction,
    Audio,
    BackgroundDetails,
    CameraMovement,
    Character,
    Dialogue,
    PromptDocument,
    SceneSettings,
    VideoStyle,
)
from prompt_studio.generation.prompts import (
    build_document_prompt,
    build_suggestion_prompt,
    get_templates,
)
from prompt_studio.generation.schema import (
    PROMPT_SCHEMA,
    missing_required_fields,
    validate_document,
)

__all__ = [
    "PromptClient",
    "parse_document",
    "serialize_document",
    "AudioField",
    "CameraField",
    "CharacterField",
    "FieldId",
    "FieldPath",
    "SceneField",
    "field_id_for_path",
    "AppearanceAndAction",
    "Audio",
    "BackgroundDetails",
    "CameraMovement",
    "Character",
    "Dialogue",
    "PromptDocument",
    "SceneSettings",
    "VideoStyle",
    "build_document_prompt",
    "build_suggestion_prompt",
    "get_templates",
    "PROMPT_SCHEMA",
    "missing_required_fields",
    "validate_document",
]
