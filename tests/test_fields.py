"""Tests for field paths and typed field identifiers."""

import pytest

from prompt_studio.generation.fields import (
    AudioField,
    CameraField,
    CharacterField,
    FieldPath,
    SceneField,
    field_id_for_path,
)


def test_parse_dotted_path():
    """Test that numeric segments become indices."""
    path = FieldPath.parse("characters.0.appearance_and_action.action")
    assert path.parts == ("characters", 0, "appearance_and_action", "action")
    assert str(path) == "characters.0.appearance_and_action.action"


@pytest.mark.parametrize("text", ["", "a..b", ".a", "a."])
def test_parse_rejects_empty_segments(text):
    """Test that malformed dotted paths are rejected."""
    with pytest.raises(ValueError):
        FieldPath.parse(text)


def test_negative_index_rejected():
    """Test that negative indices are not valid path parts."""
    with pytest.raises(ValueError):
        FieldPath.of("characters", -1)


def test_get_and_set(sample_data):
    """Test reading and writing through a path."""
    path = FieldPath.parse("audio.sfx.1")
    assert path.get(sample_data) == "creaking door"
    path.set(sample_data, "footsteps")
    assert sample_data["audio"]["sfx"] == ["thunder", "footsteps"]


def test_set_does_not_create_keys(sample_data):
    """Test that writing to a missing key fails."""
    with pytest.raises(KeyError):
        FieldPath.parse("audio.volume").set(sample_data, "loud")
    assert "volume" not in sample_data["audio"]


def test_get_out_of_range_index(sample_data):
    """Test that an out-of-range index raises KeyError."""
    with pytest.raises(KeyError):
        FieldPath.parse("characters.5.name").get(sample_data)


def test_field_ids_are_distinct_keys():
    """Test that typed identifiers never collide."""
    ids = {
        SceneField("location"),
        CharacterField(0, "name"),
        CharacterField(1, "name"),
        CameraField("type"),
        AudioField("music"),
    }
    assert len(ids) == 5
    assert CharacterField(0, "action") == CharacterField(0, "action")


def test_field_id_paths_and_labels():
    """Test that identifiers know their path and label key."""
    assert str(SceneField("lighting").path) == "scene_settings.video_style.lighting"
    assert str(CharacterField(2, "appearance").path) == "characters.2.appearance_and_action.appearance"
    assert CameraField("description").label_key == "camera_description"
    assert str(AudioField("dialogue_line").path) == "audio.dialogue.line"


def test_unknown_part_rejected():
    """Test that an unknown field part is rejected."""
    with pytest.raises(ValueError, match="Unknown scene field"):
        SceneField("weather")


def test_field_id_for_path():
    """Test mapping paths back to identifiers."""
    assert field_id_for_path(FieldPath.parse("scene_settings.video_style.lighting")) == SceneField("lighting")
    assert field_id_for_path(FieldPath.parse("characters.3.name")) == CharacterField(3, "name")
    assert field_id_for_path(FieldPath.parse("camera_movement.type")) == CameraField("type")
    assert field_id_for_path(FieldPath.parse("audio.dialogue.speaker")) == AudioField("dialogue_speaker")


def test_field_id_for_non_leaf_path():
    """Test that non-text paths have no identifier."""
    with pytest.raises(ValueError):
        field_id_for_path(FieldPath.parse("audio.sfx"))
