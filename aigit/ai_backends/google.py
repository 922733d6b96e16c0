"""
Google Gemini generateContent backend.
"""

from typing import Dict, Any

from .base import AIBackend, BackendRequest


class GoogleBackend(AIBackend):
    """Gemini backend. The API key travels as the `key` query parameter."""

    DEFAULT_MODEL = "gemini-1.5-pro"
    DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
    DISPLAY_NAME = "Google"

    def build_request(self, system_prompt: str, user_prompt: str) -> BackendRequest:
        return BackendRequest(
            url=f"{self.base_url}/models/{self.model}:generateContent",
            params={"key": self.api_key},
            payload={
                "systemInstruction": {"parts": [{"text": system_prompt}]},
                "contents": [
                    {"role": "user", "parts": [{"text": user_prompt}]},
                ],
            },
        )

    def parse_response(self, data: Dict[str, Any]) -> str:
        self.check_error(data)

        candidate = self.first_object(data.get("candidates"), "candidates")
        content = self.object_field(candidate, "content")
        part = self.first_object(content.get("parts"), "parts")
        return part.get("text") or ""
