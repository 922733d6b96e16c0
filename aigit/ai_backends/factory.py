"""
AI backend factory keyed by the configured provider name.
"""

from loguru import logger

from .base import AIBackend
from .openai import OpenAIBackend
from .claude import ClaudeBackend
from .google import GoogleBackend
from .openrouter import OpenRouterBackend
from ..config.settings import Settings


class BackendFactory:
    """Factory for creating AI backends from settings."""

    _backends = {
        "openai": OpenAIBackend,
        "claude": ClaudeBackend,
        "google": GoogleBackend,
        "openrouter": OpenRouterBackend,
    }

    @classmethod
    def create_backend(cls, settings: Settings) -> AIBackend:
        """Create the backend for the configured provider."""
        backend_class = cls._backend_class(settings.provider)
        backend = backend_class(
            api_key=settings.api_key,
            model=settings.model,
            base_url=settings.base_url,
        )
        logger.info(f"Using {backend.backend_type} backend ({backend.model} @ {backend.base_url})")
        return backend

    @classmethod
    def _backend_class(cls, provider: str) -> type[AIBackend]:
        if provider not in cls._backends:
            logger.warning(f"Unknown provider '{provider}', falling back to OpenAI")
            return OpenAIBackend
        return cls._backends[provider]

    @classmethod
    def default_model(cls, provider: str) -> str:
        """Default model name for a provider."""
        return cls._backend_class(provider).DEFAULT_MODEL

    @classmethod
    def default_base_url(cls, provider: str) -> str:
        """Default API base URL for a provider."""
        return cls._backend_class(provider).DEFAULT_BASE_URL

    @classmethod
    def list_supported_backends(cls) -> list[str]:
        """List all supported provider names."""
        return list(cls._backends.keys())
