"""Tests for the raw-text view."""

import json

from prompt_studio.generation.codec import serialize_document
from prompt_studio.generation.models import PromptDocument
from prompt_studio.raw_view import RawTextView
from prompt_studio.store import PromptStore


def test_empty_store_renders_empty_text():
    """Test that an absent document shows no text."""
    view = RawTextView(PromptStore())
    assert view.text == ""
    assert view.is_in_sync


def test_renders_replaced_document(minimal_data):
    """Test that a replace is rendered as canonical text."""
    store = PromptStore()
    view = RawTextView(store)

    store.replace(minimal_data)

    assert view.text == json.dumps(minimal_data, indent=2)
    assert view.is_in_sync


def test_follows_field_updates(sample_document):
    """Test that field updates re-render the text."""
    store = PromptStore(sample_document)
    view = RawTextView(store)
    store.update_path("audio.music", "Upbeat synth")
    assert '"music": "Upbeat synth"' in view.text


def test_invalid_text_leaves_store_untouched(sample_document):
    """Test that invalid JSON is shown as typed and not applied."""
    store = PromptStore(sample_document)
    view = RawTextView(store)

    assert view.edit("{not valid json") is False

    assert view.text == "{not valid json"
    assert store.value == sample_document
    assert not view.is_in_sync


def test_schema_violation_is_not_applied(sample_document, sample_data):
    """Test that valid JSON that violates the schema is not applied."""
    store = PromptStore(sample_document)
    view = RawTextView(store)
    del sample_data["camera_movement"]
    text = json.dumps(sample_data)

    assert view.edit(text) is False
    assert view.text == text
    assert store.value == sample_document


def test_valid_edit_updates_store_and_canonicalizes(sample_data):
    """Test that a valid edit reaches the store and is re-rendered canonically."""
    store = PromptStore()
    view = RawTextView(store)
    sample_data["audio"]["music"] = "Harp"

    assert view.edit(json.dumps(sample_data)) is True

    assert store.value.audio.music == "Harp"
    assert view.text == serialize_document(PromptDocument.model_validate(sample_data))


def test_later_store_change_overwrites_pending_invalid_text(sample_document):
    """Test that a store change replaces invalid text in progress."""
    store = PromptStore(sample_document)
    view = RawTextView(store)
    view.edit("{oops")
    store.update_path("audio.music", "Choir")
    assert view.is_in_sync


def test_copy_to_writer(sample_document):
    """Test copying the shown text."""
    view = RawTextView(PromptStore(sample_document))
    copied = []
    assert view.copy_to(copied.append) is True
    assert copied == [view.text]


def test_copy_failure_is_reported():
    """Test that a failing clipboard writer does not raise."""
    view = RawTextView(PromptStore())

    def broken(text):
        raise OSError("no clipboard")

    assert view.copy_to(broken) is False


def test_close_stops_following(sample_document):
    """Test that a closed view no longer re-renders."""
    store = PromptStore(sample_document)
    view = RawTextView(store)
    before = view.text
    view.close()
    store.update_path("audio.music", "Choir")
    assert view.text == before
