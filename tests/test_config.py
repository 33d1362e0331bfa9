"""Tests for configuration, credentials and request tracking."""

import json

import pytest

from prompt_studio.core.config import CREDENTIAL_KEY, CredentialStore, StudioConfig, resolve_api_key
from prompt_studio.core.enums import Language, ModelName
from prompt_studio.core.tracking import RequestTracker


def test_config_defaults(tmp_path):
    """Test the default language and model."""
    config = StudioConfig(home_dir=tmp_path)
    assert config.language == Language.KO
    assert config.model == "gemini-2.5-flash"
    assert config.credentials_path == tmp_path / "credentials.json"


def test_config_normalizes_values(tmp_path):
    """Test that strings and enum members are normalized."""
    config = StudioConfig(language="en", model=ModelName.GEMINI_PRO, home_dir=str(tmp_path))
    assert config.language is Language.EN
    assert config.model == "gemini-2.5-pro"


def test_config_rejects_bad_values(tmp_path):
    """Test configuration validation."""
    with pytest.raises(ValueError, match="language"):
        StudioConfig(language="fr", home_dir=tmp_path)
    with pytest.raises(ValueError, match="model"):
        StudioConfig(model="  ", home_dir=tmp_path)


def test_config_from_env(tmp_path, monkeypatch):
    """Test reading configuration from the environment."""
    monkeypatch.setenv("PROMPT_STUDIO_LANGUAGE", "en")
    monkeypatch.setenv("PROMPT_STUDIO_MODEL", "gemini-2.5-pro")
    monkeypatch.setenv("PROMPT_STUDIO_HOME", str(tmp_path))
    config = StudioConfig.from_env()
    assert config.language == Language.EN
    assert config.model == "gemini-2.5-pro"
    assert config.home_dir == tmp_path


def test_credential_round_trip(tmp_path):
    """Test saving, loading and clearing the key."""
    store = CredentialStore(tmp_path / "creds" / "credentials.json")
    assert store.load() is None

    store.save("  abc123  ")
    assert store.load() == "abc123"
    assert json.loads(store.path.read_text()) == {CREDENTIAL_KEY: "abc123"}

    store.clear()
    assert store.load() is None
    store.clear()


def test_credential_rejects_empty(tmp_path):
    """Test that an empty key is not stored."""
    store = CredentialStore(tmp_path / "credentials.json")
    with pytest.raises(ValueError):
        store.save("")
    assert not store.path.exists()


def test_corrupt_credential_file(tmp_path):
    """Test that an unreadable file counts as no credential."""
    path = tmp_path / "credentials.json"
    path.write_text("{broken")
    assert CredentialStore(path).load() is None


def test_resolve_api_key_prefers_stored(tmp_path, monkeypatch):
    """Test key resolution order."""
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    store = CredentialStore(tmp_path / "credentials.json")
    assert resolve_api_key(store) == "env-key"
    store.save("stored-key")
    assert resolve_api_key(store) == "stored-key"


def test_tracker_latest_token_is_current():
    """Test that a newer token supersedes an older one for the same key."""
    tracker = RequestTracker()
    first = tracker.issue("lighting")
    second = tracker.issue("lighting")
    other = tracker.issue("music")

    assert not tracker.is_current(first)
    assert tracker.is_current(second)
    assert tracker.is_current(other)


def test_tracker_release_and_pending():
    """Test pending state across release."""
    tracker = RequestTracker()
    token = tracker.issue()
    assert tracker.is_pending()
    tracker.release(token)
    assert not tracker.is_pending()
    assert not tracker.is_current(token)


def test_tracker_invalidate():
    """Test that invalidation makes every outstanding token stale."""
    tracker = RequestTracker()
    tokens = [tracker.issue(key) for key in ("a", "b", None)]
    tracker.invalidate()
    assert not any(tracker.is_current(t) for t in tokens)
    assert tracker.is_current(tracker.issue("a"))


def test_tracker_invalidate_where():
    """Test that selective invalidation only affects matching keys."""
    tracker = RequestTracker()
    character = tracker.issue(("characters", 0))
    music = tracker.issue("music")

    tracker.invalidate_where(lambda key: isinstance(key, tuple))

    assert not tracker.is_current(character)
    assert not tracker.is_pending(("characters", 0))
    assert tracker.is_current(music)
