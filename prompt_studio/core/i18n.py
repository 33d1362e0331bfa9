"""
Localization table: user-facing labels, error messages and the suggested
value lists for the semi-constrained fields (genre, camera type).
"""

from typing import Dict, List, Union

from prompt_studio.core.enums import Language


TRANSLATIONS: Dict[Language, Dict[str, str]] = {
    Language.EN: {
        # Header
        "title": "Ainspire VEO 3.1 Prompt Generator",
        "description": "Automatically design sophisticated JSON-based prompts",
        "reset_api_key": "Reset API Key",
        # API key setup
        "api_key_setup_title": "Set up your Gemini API Key",
        "api_key_setup_description": (
            "To use this application, please enter your Google Gemini API key. "
            "Your key will be stored locally and will not be shared."
        ),
        "api_key_input_placeholder": "Enter your API Key",
        "api_key_saved": "API key saved.",
        "api_key_cleared": "API key removed.",
        "api_key_get_here": "Get your API key here: https://aistudio.google.com/app/apikey",
        # Settings panel
        "initial_prompt_placeholder": "Describe the video scene you want to create...",
        "generate_prompt": "Generate Prompt",
        "regenerate_prompt": "Regenerate Prompt",
        "generating_prompt": "Generating Prompt...",
        "clear_prompt": "Clear Prompt",
        "replace_with_ai": "Replace with AI suggestion",
        "generating_suggestion": "Generating...",
        # Editors
        "scene_settings": "Scene Settings",
        "overall_situation": "Overall Situation",
        "background_details": "Background Details",
        "location": "Location",
        "elements": "Elements",
        "add_element": "Add Element",
        "video_style": "Video Style",
        "genre": "Style",
        "look_and_feel": "Look & Feel",
        "color_palette": "Color Palette",
        "lighting": "Lighting",
        "characters": "Characters",
        "character_name": "Character Name",
        "appearance_and_action": "Appearance & Action",
        "appearance": "Appearance",
        "action": "Action",
        "add_character": "Add Character",
        "remove_character": "Remove Character",
        "camera_movement": "Camera Movement",
        "camera_type": "Type",
        "camera_description": "Description",
        "audio": "Audio",
        "music": "Music",
        "sfx": "Sound Effects (SFX)",
        "add_sfx": "Add SFX",
        "dialogue": "Dialogue",
        "dialogue_speaker": "Speaker",
        "dialogue_line": "Line",
        # Result panel
        "copy_json": "Copy JSON",
        "copied": "Copied!",
        "result_placeholder": "Your generated prompt will appear here in real-time",
        # Errors
        "error_generic": "Failed to generate prompt. Please adjust your input or try again later.",
        "ai_initialization_error": "AI not initialized. Please set your API key.",
    },
    Language.KO: {
        "title": "Ainspire VEO 3.1 Prompt Generator",
        "description": "정교한 JSON 기반 프롬프트를 자동 설계",
        "reset_api_key": "API 키 재설정",
        "api_key_setup_title": "Gemini API 키 설정",
        "api_key_setup_description": (
            "이 애플리케이션을 사용하려면 Google Gemini API 키를 입력하세요. 키는 공유되지 않습니다."
        ),
        "api_key_input_placeholder": "API 키를 입력하세요",
        "api_key_saved": "API 키가 저장되었습니다.",
        "api_key_cleared": "API 키가 삭제되었습니다.",
        "api_key_get_here": "여기에서 API 키를 받으세요: https://aistudio.google.com/app/apikey",
        "initial_prompt_placeholder": "만들고 싶은 영상 장면을 설명해주세요...",
        "generate_prompt": "프롬프트 생성",
        "regenerate_prompt": "프롬프트 다시 생성",
        "generating_prompt": "프롬프트 생성 중...",
        "clear_prompt": "프롬프트 지우기",
        "replace_with_ai": "AI 추천으로 교체",
        "generating_suggestion": "생성 중...",
        "scene_settings": "장면 설정",
        "overall_situation": "전체 상황",
        "background_details": "배경 상세",
        "location": "장소",
        "elements": "구성 요소",
        "add_element": "요소 추가",
        "video_style": "비디오 스타일",
        "genre": "스타일",
        "look_and_feel": "룩앤필",
        "color_palette": "색상 팔레트",
        "lighting": "조명",
        "characters": "캐릭터",
        "character_name": "캐릭터 이름",
        "appearance_and_action": "외형 및 행동",
        "appearance": "외형",
        "action": "행동",
        "add_character": "캐릭터 추가",
        "remove_character": "캐릭터 삭제",
        "camera_movement": "카메라 움직임",
        "camera_type": "유형",
        "camera_description": "설명",
        "audio": "오디오",
        "music": "음악",
        "sfx": "음향 효과 (SFX)",
        "add_sfx": "음향 효과 추가",
        "dialogue": "대사",
        "dialogue_speaker": "화자",
        "dialogue_line": "대사",
        "copy_json": "JSON 복사",
        "copied": "복사됨!",
        "result_placeholder": "생성된 프롬프트가 여기에 실시간으로 표시됩니다",
        "error_generic": "프롬프트를 생성하지 못했습니다. 입력 내용을 수정하거나 나중에 다시 시도하십시오.",
        "ai_initialization_error": "AI가 초기화되지 않았습니다. API 키를 설정해주세요.",
    },
}


OPTIONS: Dict[Language, Dict[str, List[str]]] = {
    Language.EN: {
        "genres": [
            "Noir", "Cyberpunk", "Cartoon", "Anime", "Documentary Style",
            "Vintage Film", "Cinematic Vlog", "Hyper-realistic CGI", "Minimalist",
        ],
        "camera_types": [
            "Static Shot", "Panning Shot", "Tilting Shot", "Dolly Shot", "Trucking Shot",
            "Tracking Shot", "Crane Shot", "Handheld Shot", "Zoom", "Dolly Zoom",
            "Dutch Angle", "Point of View (POV) Shot", "Extreme Close Up", "Close Up",
            "Medium Shot", "Long Shot", "Establishing Shot",
        ],
    },
    Language.KO: {
        "genres": [
            "느와르", "사이버펑크", "카툰 스타일", "애니메이션", "다큐멘터리 스타일",
            "빈티지 필름", "시네마틱 브이로그", "초현실적 CGI", "미니멀리스트",
        ],
        "camera_types": [
            "고정 샷", "패닝 샷", "틸팅 샷", "달리 샷", "트래킹 샷", "추적 샷", "크레인 샷",
            "핸드헬드 샷", "줌", "달리 줌", "더치 앵글", "1인칭 시점 (POV) 샷",
            "익스트림 클로즈업", "클로즈업", "미디엄 샷", "롱 샷", "확립 샷",
        ],
    },
}


def translate(key: str, language: Union[Language, str] = Language.EN) -> str:
    """
    Look up a user-facing string.

    Args:
        key: Translation key (e.g. "error_generic")
        language: Language code or enum member

    Returns:
        The localized string

    Raises:
        KeyError: If the key is not in the table
    """
    return TRANSLATIONS[Language(language)][key]


def options_for(language: Union[Language, str]) -> Dict[str, List[str]]:
    """Return the suggested-values lists for a language."""
    return OPTIONS[Language(language)]
