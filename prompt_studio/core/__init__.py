"""
Core infrastructure for the Prompt Studio.

Shared configuration, localization, errors and LLM providers.
"""

from prompt_studio.core.config import (
    CredentialStore,
    StudioConfig,
    resolve_api_key,
)
from prompt_studio.core.enums import Language, ModelName
from prompt_studio.core.errors import (
    DocumentAbsentError,
    GenerationFailedError,
    InvalidUpdateError,
    MalformedEditError,
    NotInitializedError,
    PromptStudioError,
)
from prompt_studio.core.i18n import OPTIONS, TRANSLATIONS, options_for, translate
from prompt_studio.core.llm import (
    LLMProvider,
    BaseLLMProvider,
    GeminiProvider,
    OpenAIProvider,
    AnthropicProvider,
    create_provider_from_model,
)
from prompt_studio.core.tracking import RequestToken, RequestTracker

__all__ = [
    "CredentialStore",
    "StudioConfig",
    "resolve_api_key",
    "Language",
    "ModelName",
    "DocumentAbsentError",
    "GenerationFailedError",
    "InvalidUpdateError",
    "MalformedEditError",
    "NotInitializedError",
    "PromptStudioError",
    "OPTIONS",
    "TRANSLATIONS",
    "options_for",
    "translate",
    "LLMProvider",
    "BaseLLMProvider",
    "GeminiProvider",
    "OpenAIProvider",
    "AnthropicProvider",
    "create_provider_from_model",
    "RequestToken",
    "RequestTracker",
]
