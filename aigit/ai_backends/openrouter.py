"""
OpenRouter backend (OpenAI-compatible wire format with attribution headers).
"""

from typing import Dict

from .openai import OpenAIBackend


class OpenRouterBackend(OpenAIBackend):
    """OpenRouter chat completions backend."""

    DEFAULT_MODEL = "openai/gpt-4o"
    DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
    DISPLAY_NAME = "OpenRouter"

    REFERER = "https://github.com/go-goll/aigit"
    TITLE = "aigit"

    def _auth_headers(self) -> Dict[str, str]:
        headers = super()._auth_headers()
        headers["HTTP-Referer"] = self.REFERER
        headers["X-Title"] = self.TITLE
        return headers
