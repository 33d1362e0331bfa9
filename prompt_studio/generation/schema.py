"""
Response schema handed to the model for structured generation, and the
required-field checks derived from it.
"""

from typing import Any, Dict, List, Mapping

from prompt_studio.generation.models import PromptDocument


PROMPT_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "scene_settings": {
            "type": "OBJECT",
            "properties": {
                "overall_situation": {
                    "type": "STRING",
                    "description": "A brief, evocative summary of the entire scene's context and action.",
                },
                "background_details": {
                    "type": "OBJECT",
                    "properties": {
                        "location": {
                            "type": "STRING",
                            "description": "The specific location of the scene, e.g., 'A bioluminescent forest at midnight'.",
                        },
                        "elements": {
                            "type": "ARRAY",
                            "items": {"type": "STRING"},
                            "description": "Key inanimate objects or environmental features in the background.",
                        },
                    },
                    "required": ["location", "elements"],
                },
                "video_style": {
                    "type": "OBJECT",
                    "properties": {
                        "genre": {
                            "type": "STRING",
                            "description": "The cinematic genre or style, e.g., 'Sci-Fi Noir', 'Cyberpunk', 'Cartoon Style'.",
                        },
                        "look_and_feel": {
                            "type": "STRING",
                            "description": "The overall aesthetic and mood, e.g., 'Dreamy and surreal with high contrast'.",
                        },
                        "color_palette": {
                            "type": "STRING",
                            "description": "The dominant colors of the scene, e.g., 'Neon pinks, electric blues, and deep purples'.",
                        },
                        "lighting": {
                            "type": "STRING",
                            "description": "Description of the scene's lighting, e.g., 'Soft, diffused morning light streaming through a window'.",
                        },
                    },
                    "required": ["genre", "look_and_feel", "color_palette", "lighting"],
                },
            },
            "required": ["overall_situation", "background_details", "video_style"],
        },
        "characters": {
            "type": "ARRAY",
            "description": "A list of characters present in the scene.",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {
                        "type": "STRING",
                        "description": "The character's name or identifier, e.g., 'hero', 'villain', 'robot_sidekick'.",
                    },
                    "appearance_and_action": {
                        "type": "OBJECT",
                        "properties": {
                            "appearance": {
                                "type": "STRING",
                                "description": "Detailed description of the character's physical appearance and clothing.",
                            },
                            "action": {
                                "type": "STRING",
                                "description": "What the character is actively doing in the scene.",
                            },
                        },
                        "required": ["appearance", "action"],
                    },
                },
                "required": ["name", "appearance_and_action"],
            },
        },
        "camera_movement": {
            "type": "OBJECT",
            "properties": {
                "type": {
                    "type": "STRING",
                    "description": "The type of camera shot, e.g., 'Dolly Zoom', 'Tracking Shot', 'Dutch Angle'.",
                },
                "description": {
                    "type": "STRING",
                    "description": "A detailed description of the camera's movement and focus.",
                },
            },
            "required": ["type", "description"],
        },
        "audio": {
            "type": "OBJECT",
            "properties": {
                "music": {"type": "STRING", "description": "Description of the background music or score."},
                "sfx": {
                    "type": "ARRAY",
                    "items": {"type": "STRING"},
                    "description": "A list of key sound effects.",
                },
                "dialogue": {
                    "type": "OBJECT",
                    "description": "Spoken lines in the scene. Can be empty if no dialogue.",
                    "properties": {
                        "speaker": {
                            "type": "STRING",
                            "description": "The name of the character who is speaking (must match a name from the characters list).",
                        },
                        "line": {"type": "STRING", "description": "The dialogue line."},
                    },
                },
            },
            "required": ["music", "sfx"],
        },
    },
    "required": ["scene_settings", "characters", "camera_movement", "audio"],
}


def missing_required_fields(data: Any, schema: Mapping[str, Any] = PROMPT_SCHEMA, prefix: str = "") -> List[str]:
    """
    List the required fields absent from a plain (decoded JSON) value.

    Args:
        data: Decoded JSON value to check
        schema: Schema node to check against (defaults to the full prompt schema)
        prefix: Dotted path of `data` within the document

    Returns:
        Dotted paths of missing required fields (e.g. "characters.0.name");
        empty when every required field is present
    """
    missing: List[str] = []
    node_type = schema.get("type")

    if node_type == "OBJECT":
        if not isinstance(data, Mapping):
            return [prefix.rstrip(".") or "<root>"]
        properties = schema.get("properties", {})
        for name in schema.get("required", []):
            if name not in data or data[name] is None:
                missing.append(f"{prefix}{name}")
        for name, child in properties.items():
            if name in data and data[name] is not None:
                missing.extend(missing_required_fields(data[name], child, f"{prefix}{name}."))

    elif node_type == "ARRAY" and isinstance(data, list):
        items = schema.get("items", {})
        for index, item in enumerate(data):
            missing.extend(missing_required_fields(item, items, f"{prefix}{index}."))

    return missing


def validate_document(data: Any) -> PromptDocument:
    """
    Validate decoded JSON as a prompt document.

    Args:
        data: Decoded JSON value

    Returns:
        The validated PromptDocument

    Raises:
        ValueError: If required fields are missing
        pydantic.ValidationError: If any value has the wrong type
    """
    missing = missing_required_fields(data)
    if missing:
        raise ValueError(f"Missing required fields: {', '.join(missing)}")
    return PromptDocument.model_validate(data)
