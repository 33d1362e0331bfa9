"""
Prompt Studio - composition root.

Owns the client, the store, the raw-text view and the field editors of one
session, and runs the top-level actions:
- credential setup / reset
- full prompt generation from the project description
- clearing the prompt
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from prompt_studio.core.config import CredentialStore, StudioConfig, resolve_api_key
from prompt_studio.core.enums import Language, ModelName
from prompt_studio.core.errors import GenerationFailedError, NotInitializedError
from prompt_studio.core.i18n import TRANSLATIONS
from prompt_studio.core.tracking import RequestTracker
from prompt_studio.editors import (
    AudioEditor,
    CameraEditor,
    CharactersEditor,
    EditorContext,
    FieldEditor,
    SceneSettingsEditor,
)
from prompt_studio.generation.client import PromptClient
from prompt_studio.generation.codec import parse_document, serialize_document
from prompt_studio.generation.fields import AudioField, CameraField, CharacterField, FieldId, SceneField
from prompt_studio.generation.models import PromptDocument
from prompt_studio.raw_view import RawTextView
from prompt_studio.store import PromptStore

logger = logging.getLogger(__name__)


class PromptStudio:
    """
    One editing session.

    Generation failures never propagate: they are turned into a single
    localized message in `generation_error` and the previous document (or
    its absence) is kept.
    """

    def __init__(
        self,
        config: Optional[StudioConfig] = None,
        client: Optional[PromptClient] = None,
        credentials: Optional[CredentialStore] = None,
        store: Optional[PromptStore] = None,
    ):
        """
        Initialize the studio.

        Args:
            config: Session configuration (defaults to StudioConfig())
            client: Model client; substitute one built with a fake provider for tests
            credentials: Credential store (defaults to the file under config.home_dir)
            store: Prompt store (defaults to an empty one)
        """
        self.config = config or StudioConfig()
        self.client = client or PromptClient()
        self.credentials = credentials or CredentialStore(self.config.credentials_path)
        self.store = store or PromptStore()
        self.context = EditorContext(
            store=self.store,
            client=self.client,
            language=self.config.language,
            model=self.config.model,
        )
        self.raw_view = RawTextView(self.store)
        self.scene = SceneSettingsEditor(self.context)
        self.characters = CharactersEditor(self.context)
        self.camera = CameraEditor(self.context)
        self.audio = AudioEditor(self.context)
        self._generations = RequestTracker()
        self.generation_error: Optional[str] = None

    # --- settings ---

    @property
    def language(self) -> Language:
        return self.context.language

    @language.setter
    def language(self, value: Union[Language, str]) -> None:
        self.context.language = Language(value)

    @property
    def model(self) -> str:
        return self.context.model

    @model.setter
    def model(self, value: Union[ModelName, str]) -> None:
        self.context.model = value.value if isinstance(value, ModelName) else str(value)

    @property
    def description(self) -> str:
        return self.context.description

    @description.setter
    def description(self, value: str) -> None:
        self.context.description = value

    @property
    def t(self) -> Dict[str, str]:
        """Translation table for the current language."""
        return TRANSLATIONS[self.language]

    @property
    def document(self) -> Optional[PromptDocument]:
        return self.store.value

    @property
    def is_generating(self) -> bool:
        return self._generations.is_pending()

    # --- credentials ---

    def start(self) -> bool:
        """
        Activate the client from a stored (or environment) key, if any.

        Returns:
            True if the client is initialized afterwards
        """
        api_key = resolve_api_key(self.credentials)
        if api_key:
            self.client.initialize(api_key)
        return self.client.is_initialized

    def submit_key(self, api_key: str) -> None:
        """Persist a key and activate the client with it."""
        self.credentials.save(api_key)
        self.client.initialize(api_key)

    def clear_key(self) -> None:
        """Forget the key and deactivate the client; outstanding results are dropped."""
        self.credentials.clear()
        self.client.deinitialize()
        self._invalidate_requests()

    # --- document actions ---

    def _invalidate_requests(self) -> None:
        self._generations.invalidate()
        self.context.reset_suggestions()

    async def generate_prompt(self) -> bool:
        """
        Generate a new document from the project description.

        Returns:
            True if a new document was applied to the store
        """
        if not self.description.strip():
            self.generation_error = self.t["initial_prompt_placeholder"]
            return False

        token = self._generations.issue()
        self.generation_error = None
        try:
            document = await self.client.generate_document(self.description, self.language, self.model)
        except (NotInitializedError, GenerationFailedError) as e:
            if self._generations.is_current(token):
                self._generations.release(token)
                self.generation_error = str(e)
            return False

        if not self._generations.is_current(token):
            logger.info("Discarding stale generation result")
            return False
        self._generations.release(token)
        self.store.replace(document)
        self.context.reset_suggestions()
        logger.info("Prompt generated with %d characters", len(document.characters))
        return True

    def clear_prompt(self) -> None:
        """Remove the document; outstanding results are dropped."""
        self._invalidate_requests()
        self.store.clear()

    def edit_raw_text(self, text: str) -> bool:
        """Apply an edit made in the raw-text view."""
        return self.raw_view.edit(text)

    def editor_for(self, field_id: FieldId) -> FieldEditor:
        if isinstance(field_id, SceneField):
            return self.scene
        if isinstance(field_id, CharacterField):
            return self.characters
        if isinstance(field_id, CameraField):
            return self.camera
        if isinstance(field_id, AudioField):
            return self.audio
        raise TypeError(f"Unknown field id: {field_id!r}")

    async def suggest(self, field_id: FieldId) -> Optional[str]:
        """Request and merge an AI suggestion for one field."""
        return await self.editor_for(field_id).suggest(field_id)

    # --- files ---

    def load(self, path: Union[str, Path]) -> PromptDocument:
        """
        Load a document from a JSON file into the store.

        Raises:
            MalformedEditError: If the file is not a valid document
        """
        with open(path, "r", encoding="utf-8") as f:
            document = parse_document(f.read())
        self.store.replace(document)
        return document

    def save(self, path: Union[str, Path]) -> str:
        """Write the canonical text of the current document to a file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(serialize_document(self.store.value))
            f.write("\n")
        logger.info(f"Prompt saved to: {path}")
        return str(path)
