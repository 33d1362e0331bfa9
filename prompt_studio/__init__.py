"""
Prompt Studio - build structured VEO video prompts with an LLM and keep the
structured document, per-field editors and its raw JSON text in sync.
"""

from prompt_studio.studio import PromptStudio
from prompt_studio.store import PromptStore
from prompt_studio.raw_view import RawTextView
from prompt_studio.editors import (
    AudioEditor,
    CameraEditor,
    CharactersEditor,
    EditorContext,
    SceneSettingsEditor,
)
from prompt_studio.core import (
    CredentialStore,
    StudioConfig,
    Language,
    ModelName,
    PromptStudioError,
    NotInitializedError,
    GenerationFailedError,
    MalformedEditError,
    InvalidUpdateError,
    DocumentAbsentError,
    LLMProvider,
    GeminiProvider,
    OpenAIProvider,
    AnthropicProvider,
    create_provider_from_model,
)
from prompt_studio.generation import (
    PromptClient,
    PromptDocument,
    Character,
    FieldPath,
    SceneField,
    CharacterField,
    CameraField,
    AudioField,
    PROMPT_SCHEMA,
    parse_document,
    serialize_document,
)

__all__ = [
    # Main classes
    "PromptStudio",
    "PromptStore",
    "RawTextView",
    "EditorContext",
    "SceneSettingsEditor",
    "CharactersEditor",
    "CameraEditor",
    "AudioEditor",
    # Core
    "CredentialStore",
    "StudioConfig",
    "Language",
    "ModelName",
    "PromptStudioError",
    "NotInitializedError",
    "GenerationFailedError",
    "MalformedEditError",
    "InvalidUpdateError",
    "DocumentAbsentError",
    "LLMProvider",
    "GeminiProvider",
    "OpenAIProvider",
    "AnthropicProvider",
    "create_provider_from_model",
    # Generation
    "PromptClient",
    "PromptDocument",
    "Character",
    "FieldPath",
    "SceneField",
    "CharacterField",
    "CameraField",
    "AudioField",
    "PROMPT_SCHEMA",
    "parse_document",
    "serialize_document",
]
