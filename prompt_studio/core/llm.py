"""
LLM Provider abstraction for structured and plain-text generation.

The studio only needs two request shapes: a JSON object constrained to a
response schema, and a single free-text answer. Each provider maps those
onto its own SDK.
"""

import copy
import json
import os
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Protocol, Tuple, Type

from prompt_studio.core.utils import strip_code_fences


class LLMProvider(Protocol):
    """What the prompt client needs from a model backend."""

    model_name: str

    def generate_structured(self, prompt: str, response_schema: Dict[str, Any]) -> Dict[str, Any]:
        """
        Generate a JSON object constrained to a response schema.

        Args:
            prompt: Full directive text
            response_schema: OpenAPI-style schema (uppercase type names) the
                response must follow

        Returns:
            The decoded JSON object
        """
        ...

    def generate_text(self, prompt: str) -> str:
        """
        Generate free text.

        Args:
            prompt: Full directive text

        Returns:
            The raw response text
        """
        ...


class BaseLLMProvider(ABC):
    """
    Shared setup for SDK-backed providers.

    Subclasses list the environment variables their key may come from and
    build their SDK client lazily, so an SDK is only imported when used.
    """

    env_vars: Tuple[str, ...] = ()

    def __init__(self, model_name: str, api_key: Optional[str] = None, client: Any = None):
        """
        Args:
            model_name: Model identifier passed to the SDK
            api_key: Credential; falls back to the provider's environment variables
            client: Pre-built SDK client (mainly for tests); skips the key check

        Raises:
            ValueError: If no key is available and no client is given
        """
        api_key = api_key or next((os.getenv(var) for var in self.env_vars if os.getenv(var)), None)
        if not api_key and client is None:
            raise ValueError(
                f"{type(self).__name__} needs an API key. "
                f"Pass api_key or set {' / '.join(self.env_vars)}."
            )
        self.model_name = model_name
        self.api_key = api_key
        self.client = client if client is not None else self._build_client()

    @abstractmethod
    def _build_client(self) -> Any:
        """Create the SDK client from `self.api_key`."""

    @abstractmethod
    def generate_structured(self, prompt: str, response_schema: Dict[str, Any]) -> Dict[str, Any]:
        """Generate a JSON object constrained to `response_schema`."""

    @abstractmethod
    def generate_text(self, prompt: str) -> str:
        """Generate free text."""

    @staticmethod
    def _decode_json(text: Optional[str]) -> Dict[str, Any]:
        """Decode a JSON object from response text, tolerating code fences."""
        if not text:
            raise ValueError("Empty response from model")
        data = json.loads(strip_code_fences(text))
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
        return data


def to_json_schema(schema: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert an OpenAPI-style response schema (uppercase type names) into a
    plain JSON Schema (lowercase type names) for providers that expect one.
    """
    converted = copy.deepcopy(schema)

    def _walk(node: Any) -> None:
        if isinstance(node, dict):
            if isinstance(node.get("type"), str):
                node["type"] = node["type"].lower()
            for value in node.values():
                _walk(value)
        elif isinstance(node, list):
            for item in node:
                _walk(item)

    _walk(converted)
    return converted


class GeminiProvider(BaseLLMProvider):
    """Google Gemini through the google-genai SDK. The default backend."""

    env_vars = ("GEMINI_API_KEY", "GOOGLE_API_KEY")

    def __init__(self, model_name: str = "gemini-2.5-flash", api_key: Optional[str] = None, client: Any = None):
        super().__init__(model_name, api_key, client)

    def _build_client(self) -> Any:
        try:
            from google import genai
        except ImportError:
            raise ImportError("google-genai package is required. Install with: pip install google-genai")
        return genai.Client(api_key=self.api_key)

    def generate_structured(self, prompt: str, response_schema: Dict[str, Any]) -> Dict[str, Any]:
        """JSON mode with the schema enforced server-side."""
        from google.genai import types

        response = self.client.models.generate_content(
            model=self.model_name,
            contents=prompt,
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=response_schema,
            ),
        )
        return self._decode_json(response.text)

    def generate_text(self, prompt: str) -> str:
        response = self.client.models.generate_content(model=self.model_name, contents=prompt)
        if not response.text:
            raise ValueError("Gemini returned an empty response")
        return response.text


class OpenAIProvider(BaseLLMProvider):
    """OpenAI chat completions. The schema travels in the prompt (json_object mode)."""

    env_vars = ("OPENAI_API_KEY",)

    def __init__(self, model_name: str = "gpt-4o", api_key: Optional[str] = None, client: Any = None):
        super().__init__(model_name, api_key, client)

    def _build_client(self) -> Any:
        try:
            from openai import OpenAI
        except ImportError:
            raise ImportError("openai package is required. Install with: pip install openai")
        return OpenAI(api_key=self.api_key)

    def _complete(self, content: str, **options: Any) -> Optional[str]:
        response = self.client.chat.completions.create(
            model=self.model_name,
            messages=[{"role": "user", "content": content}],
            **options,
        )
        return response.choices[0].message.content

    def generate_structured(self, prompt: str, response_schema: Dict[str, Any]) -> Dict[str, Any]:
        schema_text = json.dumps(to_json_schema(response_schema), indent=2)
        content = self._complete(
            f"{prompt}\n\nOutput valid JSON matching this schema:\n{schema_text}",
            response_format={"type": "json_object"},
        )
        return self._decode_json(content)

    def generate_text(self, prompt: str) -> str:
        content = self._complete(prompt)
        if not content:
            raise ValueError("OpenAI returned an empty response")
        return content


class AnthropicProvider(BaseLLMProvider):
    """Anthropic messages. Structured output is forced through a single tool call."""

    env_vars = ("ANTHROPIC_API_KEY",)
    TOOL_NAME = "generate_output"

    def __init__(
        self,
        model_name: str = "claude-3-5-sonnet-20241022",
        api_key: Optional[str] = None,
        client: Any = None,
    ):
        super().__init__(model_name, api_key, client)

    def _build_client(self) -> Any:
        try:
            from anthropic import Anthropic
        except ImportError:
            raise ImportError("anthropic package is required. Install with: pip install anthropic")
        return Anthropic(api_key=self.api_key)

    def generate_structured(self, prompt: str, response_schema: Dict[str, Any]) -> Dict[str, Any]:
        tool = {
            "name": self.TOOL_NAME,
            "description": "Return the requested object",
            "input_schema": to_json_schema(response_schema),
        }
        response = self.client.messages.create(
            model=self.model_name,
            max_tokens=4096,
            messages=[{"role": "user", "content": prompt}],
            tools=[tool],
            tool_choice={"type": "tool", "name": self.TOOL_NAME},
        )
        tool_inputs = [b.input for b in response.content or [] if getattr(b, "type", None) == "tool_use"]
        if not tool_inputs:
            raise ValueError("Anthropic response has no tool call")
        if not isinstance(tool_inputs[0], dict):
            raise ValueError("Anthropic tool input is not a JSON object")
        return tool_inputs[0]

    def generate_text(self, prompt: str) -> str:
        response = self.client.messages.create(
            model=self.model_name,
            max_tokens=1024,
            messages=[{"role": "user", "content": prompt}],
        )
        text = "".join(b.text for b in response.content or [] if getattr(b, "type", None) == "text")
        if not text:
            raise ValueError("Anthropic response has no text")
        return text


# model-name prefixes -> provider
PROVIDER_PREFIXES: Tuple[Tuple[Tuple[str, ...], Type[BaseLLMProvider]], ...] = (
    (("gemini-",), GeminiProvider),
    (("gpt-", "o1-"), OpenAIProvider),
    (("claude-",), AnthropicProvider),
)


def create_provider_from_model(model: str, api_key: Optional[str] = None) -> BaseLLMProvider:
    """
    Pick and build the provider for a model id by its prefix.

    Args:
        model: Model id, e.g. "gemini-2.5-flash", "gpt-4o", "claude-3-5-sonnet-20241022"
        api_key: Credential handed to the provider; environment variables otherwise

    Raises:
        ValueError: If no provider serves the model, or no key is available
    """
    for prefixes, provider_cls in PROVIDER_PREFIXES:
        if model.lower().startswith(prefixes):
            return provider_cls(model_name=model, api_key=api_key)
    known = ", ".join(p for prefixes, _ in PROVIDER_PREFIXES for p in prefixes)
    raise ValueError(f"Unknown model: {model}. Supported prefixes: {known}")
