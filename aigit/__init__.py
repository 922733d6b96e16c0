"""
aigit - AI-powered git commit messages and code reviews.

A CLI tool that sends your git diff to a configurable AI provider
(OpenAI, Claude, Google Gemini, OpenRouter) and turns the reply into a
commit message or a review.
"""

__version__ = "1.0.0"

from aigit.core import AiGit
from aigit.config.settings import Settings, load_settings

__all__ = ["AiGit", "Settings", "load_settings"]
