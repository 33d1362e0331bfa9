"""
Structured-Content Client - issues the two kinds of model requests.

1. Full document: free-text concept -> PromptDocument (schema-constrained)
2. Field suggestion: field label + current value + concept -> one string

The client owns the credential lifecycle only. It never reads or writes the
prompt store; callers merge results themselves.
"""

import asyncio
import logging
import time
from typing import Callable, Dict, Optional, Union

from prompt_studio.core.enums import Language, ModelName
from prompt_studio.core.errors import GenerationFailedError, NotInitializedError
from prompt_studio.core.i18n import translate
from prompt_studio.core.llm import LLMProvider, create_provider_from_model
from prompt_studio.core.utils import log_prompt_and_response
from prompt_studio.generation.codec import serialize_document
from prompt_studio.generation.models import PromptDocument
from prompt_studio.generation.prompts import build_document_prompt, build_suggestion_prompt
from prompt_studio.generation.schema import PROMPT_SCHEMA, validate_document

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[str, Optional[str]], LLMProvider]


def _model_id(model: Union[ModelName, str]) -> str:
    return model.value if isinstance(model, ModelName) else str(model)


class PromptClient:
    """
    Client for document generation and field suggestions.

    Inactive until `initialize` is called with a credential. Providers are
    created lazily per model and dropped on `deinitialize`; requests that
    were already dispatched still complete.
    """

    def __init__(self, provider_factory: Optional[ProviderFactory] = None):
        """
        Initialize the client.

        Args:
            provider_factory: Callable building a provider from (model, api_key);
                defaults to create_provider_from_model. Tests substitute a fake.
        """
        self._provider_factory = provider_factory or create_provider_from_model
        self._api_key: Optional[str] = None
        self._providers: Dict[str, LLMProvider] = {}

    @property
    def is_initialized(self) -> bool:
        return self._api_key is not None

    def initialize(self, api_key: str) -> None:
        """
        Activate the client with a credential.

        Raises:
            ValueError: If the key is empty
        """
        api_key = (api_key or "").strip()
        if not api_key:
            raise ValueError("API key must not be empty")
        self._api_key = api_key
        self._providers.clear()
        logger.info("Prompt client initialized")

    def deinitialize(self) -> None:
        """Deactivate the client immediately; later calls fail with NotInitializedError."""
        self._api_key = None
        self._providers.clear()
        logger.info("Prompt client deinitialized")

    def _provider_for(self, model: str, language: Language) -> LLMProvider:
        if self._api_key is None:
            raise NotInitializedError(translate("ai_initialization_error", language))
        provider = self._providers.get(model)
        if provider is None:
            try:
                provider = self._provider_factory(model, self._api_key)
            except (ValueError, ImportError) as e:
                logger.error(f"Could not create provider for model {model}: {e}")
                raise GenerationFailedError(translate("error_generic", language)) from e
            self._providers[model] = provider
        return provider

    async def generate_document(
        self,
        description: str,
        language: Union[Language, str] = Language.KO,
        model: Union[ModelName, str] = ModelName.GEMINI_FLASH,
    ) -> PromptDocument:
        """
        Generate a full prompt document from a free-text concept.

        Args:
            description: The user's scene concept
            language: Language for generated text and error messages
            model: Model variant to use

        Returns:
            A schema-valid PromptDocument

        Raises:
            NotInitializedError: If no credential is active (no call is made)
            GenerationFailedError: If the call fails or the response is not a valid document
        """
        language = Language(language)
        model = _model_id(model)
        provider = self._provider_for(model, language)
        prompt = build_document_prompt(description, language)

        logger.info("Document generation: model=%s, language=%s", model, language.value)
        start_time = time.time()
        try:
            data = await asyncio.to_thread(provider.generate_structured, prompt, PROMPT_SCHEMA)
            document = validate_document(data)
        except Exception as e:
            logger.error(f"Error generating scene: {e}", exc_info=True)
            raise GenerationFailedError(translate("error_generic", language)) from e

        logger.info(
            "Document generation completed in %.2f seconds (%d characters)",
            time.time() - start_time,
            len(document.characters),
        )
        log_prompt_and_response(prompt, serialize_document(document), "Document Generation")
        return document

    async def suggest_field(
        self,
        field_label: str,
        current_value: str,
        context: str,
        language: Union[Language, str] = Language.KO,
        model: Union[ModelName, str] = ModelName.GEMINI_FLASH,
    ) -> str:
        """
        Generate a replacement value for a single field.

        Args:
            field_label: Human-readable (localized) name of the field
            current_value: The field's current text
            context: The overall scene concept
            language: Language for the suggestion and error messages
            model: Model variant to use

        Returns:
            The suggested text, trimmed

        Raises:
            NotInitializedError: If no credential is active (no call is made)
            GenerationFailedError: If the call fails
        """
        language = Language(language)
        model = _model_id(model)
        provider = self._provider_for(model, language)
        prompt = build_suggestion_prompt(field_label, current_value, context, language)

        logger.debug("Suggestion request for field '%s' (model=%s)", field_label, model)
        try:
            text = await asyncio.to_thread(provider.generate_text, prompt)
        except Exception as e:
            logger.error(f"Error generating suggestion for {field_label}: {e}", exc_info=True)
            raise GenerationFailedError(translate("error_generic", language)) from e

        suggestion = (text or "").strip()
        log_prompt_and_response(prompt, suggestion, f"Suggestion ({field_label})")
        return suggestion
