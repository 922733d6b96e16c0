"""
Abstract base class for AI provider backends.
"""

import asyncio
import json
import time
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, Awaitable, TypeVar
from dataclasses import dataclass, field
import aiohttp
from loguru import logger

from ..exceptions import (
    EmptyResponseError,
    ProviderError,
    ProviderRequestError,
    ProviderTimeoutError,
    ResponseParseError,
)
from ..utils.prompts import get_commit_prompt, get_review_prompt


T = TypeVar("T")


@dataclass
class BackendRequest:
    """A fully-built HTTP request for one provider call."""

    url: str
    payload: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, str] = field(default_factory=dict)


@dataclass
class AIResponse:
    """Structured AI response data."""

    content: str
    model: str
    response_time: Optional[float] = None
    backend_type: Optional[str] = None
    raw_response: Optional[Dict[str, Any]] = None


class AIBackend(ABC):
    """Abstract base class for AI backends.

    A backend turns the two aigit operations (commit message generation
    and code review) into a single JSON POST against its provider. It is
    stateless after construction; one instance lives for one command.
    """

    DEFAULT_MODEL = ""
    DEFAULT_BASE_URL = ""
    DISPLAY_NAME = ""

    def __init__(self, api_key: str, model: Optional[str] = None, base_url: Optional[str] = None):
        """Initialize the backend, falling back to provider defaults."""
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self.base_url = (base_url or self.DEFAULT_BASE_URL).rstrip('/')
        self.backend_type = self.__class__.__name__.lower().replace('backend', '')

    @abstractmethod
    def build_request(self, system_prompt: str, user_prompt: str) -> BackendRequest:
        """Build the provider-specific request for a system prompt and a diff."""
        pass

    @abstractmethod
    def parse_response(self, data: Dict[str, Any]) -> str:
        """Extract the reply text from a decoded response envelope."""
        pass

    async def generate_commit_message(self, diff: str, language: str) -> str:
        """Generate a commit message for the given diff."""
        response = await self.call_api(get_commit_prompt(language), diff)
        return response.content

    async def review_code(self, diff: str, language: str) -> str:
        """Review the given diff and return the provider's findings."""
        response = await self.call_api(get_review_prompt(language), diff)
        return response.content

    async def call_api(self, system_prompt: str, user_prompt: str) -> AIResponse:
        """Issue one request and parse the reply. No retries."""
        request = self.build_request(system_prompt, user_prompt)
        self._log_request(request, user_prompt)

        start_time = time.time()
        data = await self._post_json(request)
        content = self.parse_response(data)

        response = AIResponse(
            content=content,
            model=self.model,
            response_time=time.time() - start_time,
            backend_type=self.backend_type,
            raw_response=data,
        )
        self._log_response(response)
        return response

    async def _post_json(self, request: BackendRequest) -> Dict[str, Any]:
        """POST the request and decode the body as a JSON object."""
        headers = {"Content-Type": "application/json", **request.headers}

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    request.url,
                    json=request.payload,
                    headers=headers,
                    params=request.params or None,
                ) as response:
                    status = response.status
                    body = await response.text()
        except aiohttp.ClientError as e:
            logger.error(f"{self.DISPLAY_NAME} request failed: {e}")
            raise ProviderRequestError(f"{self.DISPLAY_NAME} request failed: {e}")

        logger.debug(f"{self.DISPLAY_NAME} responded with HTTP {status} ({len(body)} bytes)")
        return self.decode_body(body, status)

    def decode_body(self, body: str, status: int = 200) -> Dict[str, Any]:
        """Decode a raw response body into a JSON object."""
        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            raise ResponseParseError(
                f"could not parse {self.DISPLAY_NAME} response (HTTP {status}): {e}"
            )

        if not isinstance(data, dict):
            raise ResponseParseError(
                f"could not parse {self.DISPLAY_NAME} response (HTTP {status}): expected a JSON object"
            )
        return data

    def check_error(self, data: Dict[str, Any]) -> None:
        """Raise ProviderError when the envelope carries an error field."""
        error = data.get("error")
        if not error:
            return

        if isinstance(error, dict):
            message = error.get("message") or json.dumps(error)
        else:
            message = str(error)
        raise ProviderError(f"{self.DISPLAY_NAME} API error: {message}")

    def first_object(self, items: Any, field_name: str) -> Dict[str, Any]:
        """Return the first element of an envelope list, which must be a JSON object."""
        if not items:
            raise EmptyResponseError(f"no response from {self.DISPLAY_NAME}")

        first = items[0] if isinstance(items, list) else None
        if not isinstance(first, dict):
            raise ResponseParseError(
                f"could not parse {self.DISPLAY_NAME} response: {field_name}[0] is not an object"
            )
        return first

    def object_field(self, data: Dict[str, Any], key: str) -> Dict[str, Any]:
        """Return a nested object field, treating a missing value as empty."""
        value = data.get(key) or {}
        if not isinstance(value, dict):
            raise ResponseParseError(
                f"could not parse {self.DISPLAY_NAME} response: {key} is not an object"
            )
        return value

    def _log_request(self, request: BackendRequest, user_prompt: str) -> None:
        """Log the API request details."""
        logger.debug(f"AI API request to {self.backend_type}")
        logger.debug(f"URL: {request.url}")
        logger.debug(f"Model: {self.model}")
        logger.debug(f"Diff length: {len(user_prompt)} characters")

    def _log_response(self, response: AIResponse) -> None:
        """Log the API response details."""
        logger.debug(f"AI API response from {self.backend_type}")
        logger.debug(f"Response length: {len(response.content)} characters")
        if response.response_time:
            logger.debug(f"Response time: {response.response_time:.2f}s")


async def with_deadline(operation: Awaitable[T], seconds: float) -> T:
    """Await a provider call, aborting it when the deadline expires."""
    try:
        return await asyncio.wait_for(operation, timeout=seconds)
    except asyncio.TimeoutError:
        logger.error(f"AI request timed out after {seconds}s")
        raise ProviderTimeoutError(f"request timed out after {seconds:g}s")
