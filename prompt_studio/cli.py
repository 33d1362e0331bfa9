"""
Command-line entry point for the Prompt Studio.

Usage:
    prompt-studio set-key YOUR_GEMINI_KEY
    prompt-studio generate "A lone astronaut finds a garden on Mars" -f scene.json --lang en
    prompt-studio suggest scene_settings.video_style.lighting -f scene.json -d "A lone astronaut..."
    prompt-studio set characters.0.name "Commander Vega" -f scene.json
    prompt-studio add-character -f scene.json --name "Robot"
    prompt-studio show -f scene.json
    prompt-studio validate scene.json
"""
import argparse
import asyncio
import json
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from prompt_studio.core.config import StudioConfig
from prompt_studio.core.enums import Language, ModelName
from prompt_studio.core.errors import MalformedEditError, PromptStudioError
from prompt_studio.core.i18n import options_for
from prompt_studio.generation.fields import FieldPath, field_id_for_path
from prompt_studio.generation.models import AppearanceAndAction, Character
from prompt_studio.generation.schema import missing_required_fields
from prompt_studio.studio import PromptStudio

logger = logging.getLogger("prompt_studio_cli")

DEFAULT_FILE = "prompt.json"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _build_studio(args: argparse.Namespace) -> PromptStudio:
    config = StudioConfig.from_env()
    if args.lang:
        config = replace(config, language=Language(args.lang))
    if args.model:
        config = replace(config, model=args.model)
    studio = PromptStudio(config=config)
    studio.start()
    return studio


def _load(studio: PromptStudio, path: str) -> bool:
    try:
        studio.load(path)
    except FileNotFoundError:
        logger.error(f"No prompt file at {path}")
        return False
    except MalformedEditError as e:
        logger.error(f"{path} is not a valid prompt: {e}")
        return False
    return True


def cmd_set_key(studio: PromptStudio, args: argparse.Namespace) -> int:
    studio.submit_key(args.key)
    print(studio.t["api_key_saved"])
    return 0


def cmd_clear_key(studio: PromptStudio, args: argparse.Namespace) -> int:
    studio.clear_key()
    print(studio.t["api_key_cleared"])
    return 0


def cmd_generate(studio: PromptStudio, args: argparse.Namespace) -> int:
    if not studio.client.is_initialized:
        logger.error(studio.t["ai_initialization_error"])
        logger.info(studio.t["api_key_get_here"])
        return 1
    studio.description = args.description
    logger.info(studio.t["generating_prompt"])
    if not asyncio.run(studio.generate_prompt()):
        logger.error(studio.generation_error)
        return 1
    studio.save(args.file)
    print(studio.raw_view.text)
    return 0


def cmd_suggest(studio: PromptStudio, args: argparse.Namespace) -> int:
    if not _load(studio, args.file):
        return 1
    try:
        field_id = field_id_for_path(FieldPath.parse(args.field))
    except ValueError as e:
        logger.error(str(e))
        return 1
    studio.description = args.description
    logger.info(studio.t["generating_suggestion"])
    try:
        suggestion = asyncio.run(studio.suggest(field_id))
    except PromptStudioError as e:
        logger.error(str(e))
        return 1
    if suggestion is None:
        error = studio.context.errors.get(field_id) or studio.t["initial_prompt_placeholder"]
        logger.error(error)
        return 1
    studio.save(args.file)
    print(suggestion)
    return 0


def cmd_set(studio: PromptStudio, args: argparse.Namespace) -> int:
    if not _load(studio, args.file):
        return 1
    value = args.value
    if args.json:
        try:
            value = json.loads(value)
        except json.JSONDecodeError as e:
            logger.error(f"Value is not valid JSON: {e}")
            return 1
    try:
        path = FieldPath.parse(args.path)
        try:
            field_id = field_id_for_path(path)
        except ValueError:
            # not a text leaf (sequence item, whole section, ...)
            studio.store.update_path(path, value)
        else:
            studio.editor_for(field_id).set_text(field_id, value)
    except (PromptStudioError, ValueError) as e:
        logger.error(str(e))
        return 1
    studio.save(args.file)
    return 0


def cmd_add_character(studio: PromptStudio, args: argparse.Namespace) -> int:
    if not _load(studio, args.file):
        return 1
    character = Character(
        name=args.name,
        appearance_and_action=AppearanceAndAction(appearance=args.appearance, action=args.action),
    )
    index = studio.characters.add_character(character)
    studio.save(args.file)
    print(index)
    return 0


def cmd_show(studio: PromptStudio, args: argparse.Namespace) -> int:
    if not _load(studio, args.file):
        return 1
    print(studio.raw_view.text)
    return 0


def cmd_validate(studio: PromptStudio, args: argparse.Namespace) -> int:
    try:
        with open(args.path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        logger.error(str(e))
        return 1
    if studio.edit_raw_text(text):
        print("OK")
        return 0
    try:
        missing = missing_required_fields(json.loads(text))
    except json.JSONDecodeError as e:
        print(f"Invalid JSON: {e}")
        return 1
    if missing:
        print("Missing required fields:")
        for name in missing:
            print(f"  - {name}")
    else:
        print("Document does not match the schema")
    return 1


def cmd_options(studio: PromptStudio, args: argparse.Namespace) -> int:
    options = options_for(studio.language)
    print(f"{studio.t['genre']}: {', '.join(options['genres'])}")
    print(f"{studio.t['camera_type']}: {', '.join(options['camera_types'])}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build structured VEO prompts with an LLM")
    parser.add_argument("--lang", choices=[lang.value for lang in Language], help="Interface/output language")
    parser.add_argument(
        "--model",
        help=f"Model to use ({', '.join(m.value for m in ModelName)}, or any gpt-/claude- model)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("set-key", help="Store the API key locally")
    p.add_argument("key")
    p.set_defaults(handler=cmd_set_key)

    p = sub.add_parser("clear-key", help="Remove the stored API key")
    p.set_defaults(handler=cmd_clear_key)

    p = sub.add_parser("generate", help="Generate a prompt from a scene description")
    p.add_argument("description")
    p.add_argument("-f", "--file", default=DEFAULT_FILE, help="Output prompt file")
    p.set_defaults(handler=cmd_generate)

    p = sub.add_parser("suggest", help="Replace one field with an AI suggestion")
    p.add_argument("field", help="Dotted field path, e.g. characters.0.appearance_and_action.action")
    p.add_argument("-d", "--description", required=True, help="Overall scene description")
    p.add_argument("-f", "--file", default=DEFAULT_FILE)
    p.set_defaults(handler=cmd_suggest)

    p = sub.add_parser("set", help="Set one field")
    p.add_argument("path", help="Dotted field path")
    p.add_argument("value")
    p.add_argument("--json", action="store_true", help="Parse VALUE as JSON")
    p.add_argument("-f", "--file", default=DEFAULT_FILE)
    p.set_defaults(handler=cmd_set)

    p = sub.add_parser("add-character", help="Append a character")
    p.add_argument("--name", default="")
    p.add_argument("--appearance", default="")
    p.add_argument("--action", default="")
    p.add_argument("-f", "--file", default=DEFAULT_FILE)
    p.set_defaults(handler=cmd_add_character)

    p = sub.add_parser("show", help="Print the canonical JSON of a prompt file")
    p.add_argument("-f", "--file", default=DEFAULT_FILE)
    p.set_defaults(handler=cmd_show)

    p = sub.add_parser("validate", help="Check a prompt file against the schema")
    p.add_argument("path")
    p.set_defaults(handler=cmd_validate)

    p = sub.add_parser("options", help="List suggested genres and camera types")
    p.set_defaults(handler=cmd_options)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    try:
        studio = _build_studio(args)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2
    return args.handler(studio, args)


if __name__ == "__main__":
    sys.exit(main())
