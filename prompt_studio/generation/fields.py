"""
Addressing inside a prompt document.

`FieldPath` is a location in the plain (dumped) form of a document.
The `*Field` dataclasses are typed identifiers for the editable leaves
that support AI suggestions; each knows its path and its label key.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple, Union

PathPart = Union[str, int]


@dataclass(frozen=True)
class FieldPath:
    """An addressable location within a prompt document."""

    parts: Tuple[PathPart, ...]

    def __post_init__(self):
        if not self.parts:
            raise ValueError("A field path needs at least one part")
        for part in self.parts:
            if isinstance(part, bool) or not isinstance(part, (str, int)):
                raise ValueError(f"Invalid path part: {part!r}")
            if isinstance(part, int) and part < 0:
                raise ValueError(f"Negative index in path: {part}")

    @classmethod
    def parse(cls, text: str) -> "FieldPath":
        """
        Parse a dotted path such as "characters.0.appearance_and_action.action".

        Numeric segments become sequence indices.
        """
        segments = [s for s in text.strip().split(".")]
        if not text.strip() or any(not s for s in segments):
            raise ValueError(f"Invalid field path: {text!r}")
        return cls(tuple(int(s) if s.isdigit() else s for s in segments))

    @classmethod
    def of(cls, *parts: PathPart) -> "FieldPath":
        return cls(tuple(parts))

    def __str__(self) -> str:
        return ".".join(str(p) for p in self.parts)

    def child(self, part: PathPart) -> "FieldPath":
        return FieldPath(self.parts + (part,))

    def get(self, data: Any) -> Any:
        """
        Read the value at this path.

        Raises:
            KeyError: If a key is missing or an index is out of range
        """
        node = data
        for part in self.parts:
            node = _step(node, part, self)
        return node

    def set(self, data: Any, value: Any) -> None:
        """
        Replace the value at this path in place. Only existing keys and
        indices can be written.

        Raises:
            KeyError: If the path does not resolve
        """
        parent = data
        for part in self.parts[:-1]:
            parent = _step(parent, part, self)
        _step(parent, self.parts[-1], self)
        parent[self.parts[-1]] = value


def _step(node: Any, part: PathPart, path: FieldPath) -> Any:
    if isinstance(part, int):
        if not isinstance(node, list) or part >= len(node):
            raise KeyError(f"{path}: no index {part}")
        return node[part]
    if not isinstance(node, dict) or part not in node:
        raise KeyError(f"{path}: no field {part!r}")
    return node[part]


# part -> (path parts, translation key)
SCENE_PARTS: Dict[str, Tuple[Tuple[str, ...], str]] = {
    "overall_situation": (("scene_settings", "overall_situation"), "overall_situation"),
    "location": (("scene_settings", "background_details", "location"), "location"),
    "genre": (("scene_settings", "video_style", "genre"), "genre"),
    "look_and_feel": (("scene_settings", "video_style", "look_and_feel"), "look_and_feel"),
    "color_palette": (("scene_settings", "video_style", "color_palette"), "color_palette"),
    "lighting": (("scene_settings", "video_style", "lighting"), "lighting"),
}

CHARACTER_PARTS: Dict[str, Tuple[Tuple[str, ...], str]] = {
    "name": (("name",), "character_name"),
    "appearance": (("appearance_and_action", "appearance"), "appearance"),
    "action": (("appearance_and_action", "action"), "action"),
}

CAMERA_PARTS: Dict[str, Tuple[Tuple[str, ...], str]] = {
    "type": (("camera_movement", "type"), "camera_type"),
    "description": (("camera_movement", "description"), "camera_description"),
}

AUDIO_PARTS: Dict[str, Tuple[Tuple[str, ...], str]] = {
    "music": (("audio", "music"), "music"),
    "dialogue_speaker": (("audio", "dialogue", "speaker"), "dialogue_speaker"),
    "dialogue_line": (("audio", "dialogue", "line"), "dialogue_line"),
}


def _check_part(part: str, table: Dict[str, Any], kind: str) -> None:
    if part not in table:
        raise ValueError(f"Unknown {kind} field {part!r}. Available: {list(table)}")


@dataclass(frozen=True)
class SceneField:
    part: str

    def __post_init__(self):
        _check_part(self.part, SCENE_PARTS, "scene")

    @property
    def path(self) -> FieldPath:
        return FieldPath(SCENE_PARTS[self.part][0])

    @property
    def label_key(self) -> str:
        return SCENE_PARTS[self.part][1]


@dataclass(frozen=True)
class CharacterField:
    index: int
    part: str

    def __post_init__(self):
        if self.index < 0:
            raise ValueError(f"Character index must be non-negative, got {self.index}")
        _check_part(self.part, CHARACTER_PARTS, "character")

    @property
    def path(self) -> FieldPath:
        return FieldPath(("characters", self.index) + CHARACTER_PARTS[self.part][0])

    @property
    def label_key(self) -> str:
        return CHARACTER_PARTS[self.part][1]


@dataclass(frozen=True)
class CameraField:
    part: str

    def __post_init__(self):
        _check_part(self.part, CAMERA_PARTS, "camera")

    @property
    def path(self) -> FieldPath:
        return FieldPath(CAMERA_PARTS[self.part][0])

    @property
    def label_key(self) -> str:
        return CAMERA_PARTS[self.part][1]


@dataclass(frozen=True)
class AudioField:
    part: str

    def __post_init__(self):
        _check_part(self.part, AUDIO_PARTS, "audio")

    @property
    def path(self) -> FieldPath:
        return FieldPath(AUDIO_PARTS[self.part][0])

    @property
    def label_key(self) -> str:
        return AUDIO_PARTS[self.part][1]


FieldId = Union[SceneField, CharacterField, CameraField, AudioField]


def field_id_for_path(path: FieldPath) -> FieldId:
    """
    Map a field path back to its typed identifier.

    Raises:
        ValueError: If the path is not an editable leaf
    """
    parts = path.parts
    if len(parts) >= 3 and parts[0] == "characters" and isinstance(parts[1], int):
        for part, (suffix, _) in CHARACTER_PARTS.items():
            if parts[2:] == suffix:
                return CharacterField(parts[1], part)
    for table, cls in ((SCENE_PARTS, SceneField), (CAMERA_PARTS, CameraField), (AUDIO_PARTS, AudioField)):
        for part, (full, _) in table.items():
            if parts == full:
                return cls(part)
    raise ValueError(f"{path} is not an editable text field")
