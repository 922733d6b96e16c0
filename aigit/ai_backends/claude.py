"""
Anthropic Claude messages backend.
"""

from typing import Dict, Any

from .base import AIBackend, BackendRequest


class ClaudeBackend(AIBackend):
    """Claude messages API backend."""

    DEFAULT_MODEL = "claude-sonnet-4-20250514"
    DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
    DISPLAY_NAME = "Claude"

    API_VERSION = "2023-06-01"
    MAX_TOKENS = 4096

    def build_request(self, system_prompt: str, user_prompt: str) -> BackendRequest:
        payload = {
            "model": self.model,
            "max_tokens": self.MAX_TOKENS,
            "messages": [{"role": "user", "content": user_prompt}],
        }
        if system_prompt:
            payload["system"] = system_prompt

        return BackendRequest(
            url=f"{self.base_url}/messages",
            headers={
                "x-api-key": self.api_key,
                "anthropic-version": self.API_VERSION,
            },
            payload=payload,
        )

    def parse_response(self, data: Dict[str, Any]) -> str:
        self.check_error(data)

        block = self.first_object(data.get("content"), "content")
        return block.get("text") or ""
