"""
OpenAI-compatible chat completions backend.
"""

from typing import Dict, Any

from .base import AIBackend, BackendRequest


class OpenAIBackend(AIBackend):
    """OpenAI chat completions backend. Also used for compatible servers via base_url."""

    DEFAULT_MODEL = "gpt-4o"
    DEFAULT_BASE_URL = "https://api.openai.com/v1"
    DISPLAY_NAME = "OpenAI"

    def build_request(self, system_prompt: str, user_prompt: str) -> BackendRequest:
        return BackendRequest(
            url=f"{self.base_url}/chat/completions",
            headers=self._auth_headers(),
            payload={
                "model": self.model,
                "messages": [
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            },
        )

    def _auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    def parse_response(self, data: Dict[str, Any]) -> str:
        self.check_error(data)

        choice = self.first_object(data.get("choices"), "choices")
        message = self.object_field(choice, "message")
        return message.get("content") or ""
