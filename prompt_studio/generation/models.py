"""
Data models for the structured VEO prompt document.

Every object-typed field is required except `Audio.dialogue`. String values
may be empty and sequences may be empty, but they must be present.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


class BackgroundDetails(BaseModel):
    """Where the scene takes place and what fills the background."""

    location: str = Field(
        ..., description="The specific location of the scene, e.g., 'A bioluminescent forest at midnight'."
    )
    elements: List[str] = Field(
        ..., description="Key inanimate objects or environmental features in the background."
    )


class VideoStyle(BaseModel):
    """Cinematic style of the scene."""

    genre: str = Field(
        ..., description="The cinematic genre or style, e.g., 'Sci-Fi Noir', 'Cyberpunk', 'Cartoon Style'."
    )
    look_and_feel: str = Field(
        ..., description="The overall aesthetic and mood, e.g., 'Dreamy and surreal with high contrast'."
    )
    color_palette: str = Field(
        ..., description="The dominant colors of the scene, e.g., 'Neon pinks, electric blues, and deep purples'."
    )
    lighting: str = Field(
        ...,
        description="Description of the scene's lighting, e.g., 'Soft, diffused morning light streaming through a window'.",
    )


class SceneSettings(BaseModel):
    """Overall situation, background and style of the scene."""

    overall_situation: str = Field(
        ..., description="A brief, evocative summary of the entire scene's context and action."
    )
    background_details: BackgroundDetails
    video_style: VideoStyle


class AppearanceAndAction(BaseModel):
    """How a character looks and what it does."""

    appearance: str = Field(
        ..., description="Detailed description of the character's physical appearance and clothing."
    )
    action: str = Field(..., description="What the character is actively doing in the scene.")


class Character(BaseModel):
    """A character present in the scene."""

    name: str = Field(
        ..., description="The character's name or identifier, e.g., 'hero', 'villain', 'robot_sidekick'."
    )
    appearance_and_action: AppearanceAndAction

    @classmethod
    def blank(cls) -> "Character":
        """A new character with every required string present and empty."""
        return cls(name="", appearance_and_action=AppearanceAndAction(appearance="", action=""))


class CameraMovement(BaseModel):
    """Camera shot type and movement."""

    type: str = Field(
        ..., description="The type of camera shot, e.g., 'Dolly Zoom', 'Tracking Shot', 'Dutch Angle'."
    )
    description: str = Field(..., description="A detailed description of the camera's movement and focus.")


class Dialogue(BaseModel):
    """A spoken line. `speaker` refers to a character by name but is not enforced."""

    speaker: str = Field(
        "",
        description="The name of the character who is speaking (must match a name from the characters list).",
    )
    line: str = Field("", description="The dialogue line.")


class Audio(BaseModel):
    """Music, sound effects and optional dialogue."""

    music: str = Field(..., description="Description of the background music or score.")
    sfx: List[str] = Field(..., description="A list of key sound effects.")
    dialogue: Optional[Dialogue] = Field(
        None, description="Spoken lines in the scene. Can be empty if no dialogue."
    )


class PromptDocument(BaseModel):
    """Complete VEO prompt in structured JSON format."""

    scene_settings: SceneSettings
    characters: List[Character] = Field(..., description="A list of characters present in the scene.")
    camera_movement: CameraMovement
    audio: Audio

    @classmethod
    def blank(cls) -> "PromptDocument":
        """The minimal valid document: every required field present, all text empty."""
        return cls(
            scene_settings=SceneSettings(
                overall_situation="",
                background_details=BackgroundDetails(location="", elements=[]),
                video_style=VideoStyle(genre="", look_and_feel="", color_palette="", lighting=""),
            ),
            characters=[],
            camera_movement=CameraMovement(type="", description=""),
            audio=Audio(music="", sfx=[]),
        )

    def character_names(self) -> List[str]:
        """Non-empty character names, in order; used as dialogue speaker suggestions."""
        return [c.name for c in self.characters if c.name]
