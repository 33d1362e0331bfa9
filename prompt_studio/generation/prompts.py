"""
Prompt templates for document generation and field suggestions.
"""

from dataclasses import dataclass
from typing import Dict, Union

from prompt_studio.core.enums import Language


@dataclass
class DirectiveTemplates:
    """Localized directive text for one language."""

    document_system_prompt: str
    output_language_instruction: str
    suggestion_language_instruction: str


DOCUMENT_USER_TEMPLATE = """{system_prompt}

USER CONCEPT: "{description}"

{language_instruction}"""

SUGGESTION_TEMPLATE = """Based on the overall video concept, provide a creative suggestion to replace the current value for a specific field.

Overall Concept: "{context}"

Field to improve: "{field_label}"
Current value: "{current_value}"

Provide only the new suggested text, without any labels or extra formatting.
{language_instruction}"""


TEMPLATES: Dict[Language, DirectiveTemplates] = {
    Language.EN: DirectiveTemplates(
        document_system_prompt="""You are a creative video director. A user will provide a concept for a video scene. Your task is to transform this concept into a detailed, structured VEO prompt JSON object.
Creatively fill in detailed cinematic properties for scene settings, characters, camera, and audio.
The output must be a single JSON object that strictly adheres to the provided schema.""",
        output_language_instruction="",
        suggestion_language_instruction="The suggestion must be in English.",
    ),
    Language.KO: DirectiveTemplates(
        document_system_prompt="""당신은 창의적인 비디오 감독입니다. 사용자가 비디오 장면에 대한 컨셉을 제공할 것입니다. 당신의 임무는 이 컨셉을 VEO를 위한 상세하고 구조화된 JSON 프롬프트 객체로 변환하는 것입니다.
장면 설정, 캐릭터, 카메라, 오디오에 대한 상세한 영화적 속성을 창의적으로 채워 넣으십시오.
출력은 제공된 스키마를 엄격히 준수하는 단일 JSON 객체여야 합니다.""",
        output_language_instruction="모든 텍스트 값은 한국어로 작성되어야 합니다.",
        suggestion_language_instruction="The suggestion must be in Korean.",
    ),
}


def get_templates(language: Union[Language, str]) -> DirectiveTemplates:
    """
    Get the directive templates for a language.

    Raises:
        ValueError: If the language is not supported
    """
    return TEMPLATES[Language(language)]


def build_document_prompt(description: str, language: Union[Language, str]) -> str:
    """Directive for generating a full document from a free-text concept."""
    templates = get_templates(language)
    return DOCUMENT_USER_TEMPLATE.format(
        system_prompt=templates.document_system_prompt,
        description=description,
        language_instruction=templates.output_language_instruction,
    ).rstrip()


def build_suggestion_prompt(
    field_label: str,
    current_value: str,
    context: str,
    language: Union[Language, str],
) -> str:
    """Directive for generating a single replacement value for one field."""
    templates = get_templates(language)
    return SUGGESTION_TEMPLATE.format(
        context=context,
        field_label=field_label,
        current_value=current_value,
        language_instruction=templates.suggestion_language_instruction,
    )
