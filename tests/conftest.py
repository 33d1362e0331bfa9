"""Pytest configuration and fixtures."""

import asyncio
import copy
import threading

import pytest

from prompt_studio.core.config import StudioConfig
from prompt_studio.core.enums import Language
from prompt_studio.generation.client import PromptClient
from prompt_studio.generation.models import PromptDocument
from prompt_studio.studio import PromptStudio


MINIMAL_DATA = {
    "scene_settings": {
        "overall_situation": "",
        "background_details": {"location": "", "elements": []},
        "video_style": {"genre": "", "look_and_feel": "", "color_palette": "", "lighting": ""},
    },
    "characters": [],
    "camera_movement": {"type": "", "description": ""},
    "audio": {"music": "", "sfx": []},
}

SAMPLE_DATA = {
    "scene_settings": {
        "overall_situation": "A lighthouse keeper meets a stranded robot",
        "background_details": {
            "location": "A rocky island lighthouse",
            "elements": ["crashing waves", "rusted lantern"],
        },
        "video_style": {
            "genre": "Fantasy",
            "look_and_feel": "Moody and cinematic",
            "color_palette": "Slate greys and amber",
            "lighting": "Sweeping lighthouse beam",
        },
    },
    "characters": [
        {
            "name": "Mira",
            "appearance_and_action": {"appearance": "Weathered raincoat", "action": "Climbs the stairs"},
        },
        {
            "name": "Bolt",
            "appearance_and_action": {"appearance": "Dented copper shell", "action": "Blinks slowly"},
        },
    ],
    "camera_movement": {"type": "Tracking Shot", "description": "Follows Mira up the spiral stairs"},
    "audio": {
        "music": "Low cello drone",
        "sfx": ["thunder", "creaking door"],
        "dialogue": {"speaker": "Mira", "line": "Who's there?"},
    },
}


class FakeProvider:
    """
    Stand-in LLM provider.

    Responses are consumed in call order. Each queued item is a value, an
    exception instance (raised), or a zero-argument callable producing one.
    """

    def __init__(self, structured=None, text=None):
        self.model_name = "fake-model"
        self.structured_responses = list(structured or [])
        self.text_responses = list(text or [])
        self.structured_prompts = []
        self.text_prompts = []
        self._lock = threading.Lock()

    def _next(self, queue, prompts, prompt):
        with self._lock:
            prompts.append(prompt)
            response = queue.pop(0)
        if callable(response):
            response = response()
        if isinstance(response, Exception):
            raise response
        return response

    def generate_structured(self, prompt, response_schema):
        return self._next(self.structured_responses, self.structured_prompts, prompt)

    def generate_text(self, prompt):
        return self._next(self.text_responses, self.text_prompts, prompt)


def gated(value, gate):
    """A queued response that only resolves once `gate` is set."""

    def respond():
        gate.wait(timeout=5)
        return value

    return respond


async def wait_for_calls(prompts, count):
    """Wait until a fake provider has received `count` calls."""
    for _ in range(500):
        if len(prompts) >= count:
            return
        await asyncio.sleep(0.01)
    raise AssertionError(f"expected {count} provider calls, got {len(prompts)}")


@pytest.fixture
def sample_data():
    """A complete document as plain data."""
    return copy.deepcopy(SAMPLE_DATA)


@pytest.fixture
def minimal_data():
    """The smallest valid document as plain data."""
    return copy.deepcopy(MINIMAL_DATA)


@pytest.fixture
def sample_document(sample_data):
    return PromptDocument.model_validate(sample_data)


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def client(fake_provider):
    """An initialized client whose every model resolves to the fake provider."""
    client = PromptClient(provider_factory=lambda model, api_key: fake_provider)
    client.initialize("test-key")
    return client


@pytest.fixture
def studio(tmp_path, client):
    """A studio session with an isolated credential directory."""
    config = StudioConfig(language=Language.EN, home_dir=tmp_path)
    studio = PromptStudio(config=config, client=client)
    studio.description = "A lighthouse keeper meets a stranded robot"
    return studio


@pytest.fixture
def loaded_studio(studio, sample_document):
    studio.store.replace(sample_document)
    return studio
