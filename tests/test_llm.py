"""Tests for the LLM provider layer, using stub SDK clients."""

from types import SimpleNamespace

import pytest

from prompt_studio.core.llm import (
    AnthropicProvider,
    BaseLLMProvider,
    GeminiProvider,
    OpenAIProvider,
    create_provider_from_model,
    to_json_schema,
)
from prompt_studio.core.utils import strip_code_fences
from prompt_studio.generation.schema import PROMPT_SCHEMA


class RecordingCall:
    """Callable that records keyword arguments and returns a fixed response."""

    def __init__(self, response):
        self.response = response
        self.calls = []

    def __call__(self, **kwargs):
        self.calls.append(kwargs)
        return self.response


def test_strip_code_fences():
    """Test removing markdown fences around JSON."""
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('```\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_code_fences('  {"a": 1} ') == '{"a": 1}'


def test_decode_json_requires_object():
    """Test that non-object JSON is rejected."""
    assert BaseLLMProvider._decode_json('{"a": 1}') == {"a": 1}
    with pytest.raises(ValueError):
        BaseLLMProvider._decode_json("[1, 2]")
    with pytest.raises(ValueError):
        BaseLLMProvider._decode_json("")


def test_to_json_schema_lowercases_types():
    """Test converting the response schema for JSON-schema providers."""
    converted = to_json_schema(PROMPT_SCHEMA)
    assert converted["type"] == "object"
    assert converted["properties"]["characters"]["type"] == "array"
    assert converted["properties"]["characters"]["items"]["type"] == "object"
    assert PROMPT_SCHEMA["type"] == "OBJECT"


def test_gemini_structured():
    """Test Gemini JSON mode with the response schema."""
    call = RecordingCall(SimpleNamespace(text='```json\n{"ok": true}\n```'))
    client = SimpleNamespace(models=SimpleNamespace(generate_content=call))
    provider = GeminiProvider("gemini-2.5-flash", client=client)

    assert provider.generate_structured("prompt", PROMPT_SCHEMA) == {"ok": True}
    kwargs = call.calls[0]
    assert kwargs["model"] == "gemini-2.5-flash"
    assert kwargs["contents"] == "prompt"
    assert kwargs["config"].response_mime_type == "application/json"


def test_gemini_text_empty_response():
    """Test that an empty Gemini response is an error."""
    call = RecordingCall(SimpleNamespace(text=None))
    provider = GeminiProvider(client=SimpleNamespace(models=SimpleNamespace(generate_content=call)))
    with pytest.raises(ValueError):
        provider.generate_text("prompt")


def test_gemini_requires_key(monkeypatch):
    """Test that Gemini needs a key when no client is given."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    with pytest.raises(ValueError, match="API key"):
        GeminiProvider("gemini-2.5-flash")


def test_openai_structured():
    """Test OpenAI JSON mode with the schema in the prompt."""
    message = SimpleNamespace(content='{"ok": 1}')
    call = RecordingCall(SimpleNamespace(choices=[SimpleNamespace(message=message)]))
    client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=call)))
    provider = OpenAIProvider("gpt-4o", client=client)

    assert provider.generate_structured("prompt", PROMPT_SCHEMA) == {"ok": 1}
    kwargs = call.calls[0]
    assert kwargs["response_format"] == {"type": "json_object"}
    assert '"type": "object"' in kwargs["messages"][0]["content"]


def test_openai_text():
    """Test OpenAI plain text generation."""
    message = SimpleNamespace(content="misty dawn")
    call = RecordingCall(SimpleNamespace(choices=[SimpleNamespace(message=message)]))
    client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=call)))
    assert OpenAIProvider("gpt-4o", client=client).generate_text("prompt") == "misty dawn"


def test_anthropic_structured_uses_tool():
    """Test Anthropic structured output through tool use."""
    block = SimpleNamespace(type="tool_use", input={"ok": True})
    call = RecordingCall(SimpleNamespace(content=[block]))
    provider = AnthropicProvider("claude-3-5-sonnet", client=SimpleNamespace(messages=SimpleNamespace(create=call)))

    assert provider.generate_structured("prompt", PROMPT_SCHEMA) == {"ok": True}
    kwargs = call.calls[0]
    assert kwargs["tool_choice"] == {"type": "tool", "name": "generate_output"}
    assert kwargs["tools"][0]["input_schema"]["type"] == "object"


def test_anthropic_text_joins_blocks():
    """Test Anthropic text responses."""
    blocks = [SimpleNamespace(type="text", text="misty "), SimpleNamespace(type="text", text="dawn")]
    call = RecordingCall(SimpleNamespace(content=blocks))
    provider = AnthropicProvider(client=SimpleNamespace(messages=SimpleNamespace(create=call)))
    assert provider.generate_text("prompt") == "misty dawn"


def test_anthropic_missing_tool_use():
    """Test that a response without tool use is an error."""
    call = RecordingCall(SimpleNamespace(content=[SimpleNamespace(type="text", text="sorry")]))
    provider = AnthropicProvider(client=SimpleNamespace(messages=SimpleNamespace(create=call)))
    with pytest.raises(ValueError):
        provider.generate_structured("prompt", PROMPT_SCHEMA)


@pytest.mark.parametrize(
    "model, provider_cls",
    [
        ("gemini-2.5-flash", GeminiProvider),
        ("gemini-2.5-pro", GeminiProvider),
        ("gpt-4o", OpenAIProvider),
        ("claude-3-5-sonnet-20241022", AnthropicProvider),
    ],
)
def test_create_provider_from_model(model, provider_cls):
    """Test dispatch on the model name prefix."""
    provider = create_provider_from_model(model, api_key="test-key")
    assert isinstance(provider, provider_cls)
    assert provider.model_name == model


def test_create_provider_unknown_model():
    """Test that an unknown model prefix is rejected."""
    with pytest.raises(ValueError, match="Unknown model"):
        create_provider_from_model("llama-3", api_key="test-key")
