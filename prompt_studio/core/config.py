"""
Configuration and local credential storage for the Prompt Studio.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from prompt_studio.core.enums import Language, ModelName

logger = logging.getLogger(__name__)

CREDENTIAL_KEY = "gemini-api-key"
DEFAULT_HOME = Path.home() / ".prompt_studio"


@dataclass
class StudioConfig:
    """User-facing configuration for a studio session."""

    language: Language = Language.KO
    model: str = ModelName.GEMINI_FLASH.value
    home_dir: Path = field(default_factory=lambda: DEFAULT_HOME)

    def __post_init__(self):
        """Validate and normalize configuration values."""
        try:
            self.language = Language(self.language)
        except ValueError:
            raise ValueError(
                f"language must be one of {[lang.value for lang in Language]}, got {self.language!r}"
            )
        if isinstance(self.model, ModelName):
            self.model = self.model.value
        if not self.model or not str(self.model).strip():
            raise ValueError("model must be a non-empty model identifier")
        self.home_dir = Path(self.home_dir)

    @property
    def credentials_path(self) -> Path:
        """Location of the persisted credential file."""
        return self.home_dir / "credentials.json"

    @classmethod
    def from_env(cls) -> "StudioConfig":
        """
        Build a configuration from environment variables.

        Reads PROMPT_STUDIO_LANGUAGE, PROMPT_STUDIO_MODEL and PROMPT_STUDIO_HOME,
        falling back to the defaults for anything unset.
        """
        return cls(
            language=os.getenv("PROMPT_STUDIO_LANGUAGE", Language.KO.value),
            model=os.getenv("PROMPT_STUDIO_MODEL", ModelName.GEMINI_FLASH.value),
            home_dir=Path(os.getenv("PROMPT_STUDIO_HOME", str(DEFAULT_HOME))),
        )


class CredentialStore:
    """
    Locally persisted API key.

    Holds exactly one string value under a fixed key in a small JSON file.
    Absence of the file or the key means "no credential".
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Optional[str]:
        """Return the stored key, or None if nothing usable is stored."""
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable credential file {self.path}: {e}")
            return None
        if not isinstance(data, dict):
            return None
        key = data.get(CREDENTIAL_KEY)
        return key if isinstance(key, str) and key else None

    def save(self, api_key: str) -> None:
        """Persist the key, replacing any previous value."""
        api_key = api_key.strip()
        if not api_key:
            raise ValueError("API key must not be empty")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({CREDENTIAL_KEY: api_key}, f)
        try:
            os.chmod(self.path, 0o600)
        except OSError:
            logger.debug("Could not restrict permissions on %s", self.path)
        logger.info("Credential saved to %s", self.path)

    def clear(self) -> None:
        """Remove the stored key. A missing file is not an error."""
        self.path.unlink(missing_ok=True)
        logger.info("Credential removed from %s", self.path)


def resolve_api_key(store: CredentialStore) -> Optional[str]:
    """
    Find an API key for startup.

    The stored credential wins; GEMINI_API_KEY and GOOGLE_API_KEY are
    consulted as fallbacks.
    """
    return store.load() or os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY") or None
