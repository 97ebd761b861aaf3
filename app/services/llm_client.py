"""
LLM Client - Narrow interface to the text generation provider.
Talks to the Gemini generateContent REST endpoint over httpx.
"""
import logging
from typing import Optional, Protocol

import httpx
from pydantic import BaseModel

from ..config import get_llm_config, settings
from .errors import ServiceError, TransientProviderError

logger = logging.getLogger(__name__)

SAFETY = "SAFETY"


class GenerationResult(BaseModel):
    """What the provider produced for one prompt."""
    text: Optional[str] = None
    finish_reason: Optional[str] = None
    block_reason: Optional[str] = None

    @property
    def is_blocked(self) -> bool:
        return SAFETY in (self.finish_reason, self.block_reason)


class GenerationClient(Protocol):
    """Submit a prompt, receive text or a typed error."""

    async def generate(self, prompt: str) -> GenerationResult:
        ...


class GeminiClient:
    """Async client for the Gemini REST API."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gemini-2.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1",
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        logger.info(f"Initializing GeminiClient with model={self.model}")

    @property
    def url(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def generate(self, prompt: str) -> GenerationResult:
        """
        Send one generateContent request.

        Raises:
            TransientProviderError: provider answered 503
            ServiceError: any other HTTP or transport failure
        """
        payload = {"contents": [{"parts": [{"text": prompt}]}]}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                headers = {"x-goog-api-key": self.api_key or ""}
                response = await client.post(self.url, headers=headers, json=payload)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise self._status_error(e.response) from e
            except httpx.RequestError as e:
                logger.error(f"Gemini request failed: {type(e).__name__}")
                raise ServiceError() from e

        try:
            data = response.json()
        except ValueError:
            logger.warning("Gemini returned a non-JSON body")
            data = {}

        return self._parse_result(data)

    def _status_error(self, response: httpx.Response) -> ServiceError:
        """Map an error response to the matching exception."""
        try:
            body = response.json()
        except ValueError:
            body = None

        message = None
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            message = body["error"].get("message")
            if not isinstance(message, str):
                message = None

        status = response.status_code
        if status == 503:
            return TransientProviderError(message, provider_status=status)

        logger.error(f"Gemini error {status}: {body if body is not None else response.text}")
        return ServiceError(message, provider_status=status)

    def _parse_result(self, data) -> GenerationResult:
        """Pull the first candidate's text and any block signals."""
        if not isinstance(data, dict):
            return GenerationResult()

        candidates = data.get("candidates") or []
        candidate = candidates[0] if isinstance(candidates, list) and candidates and isinstance(candidates[0], dict) else {}

        text = None
        content = candidate.get("content")
        parts = (content.get("parts") if isinstance(content, dict) else None) or []
        if isinstance(parts, list) and parts and isinstance(parts[0], dict):
            text = parts[0].get("text")

        feedback = data.get("promptFeedback")
        block_reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
        finish_reason = candidate.get("finishReason")

        return GenerationResult(
            text=text if isinstance(text, str) else None,
            finish_reason=finish_reason if isinstance(finish_reason, str) else None,
            block_reason=block_reason if isinstance(block_reason, str) else None
        )


# Global LLM client instance
llm_client: Optional[GenerationClient] = None


def get_llm_client() -> GenerationClient:
    """Get or create the global LLM client."""
    global llm_client
    if llm_client is None:
        if settings.llm_provider == "mock":
            from .mock_llm import MockGenerationClient
            llm_client = MockGenerationClient()
        else:
            config = get_llm_config()
            llm_client = GeminiClient(
                api_key=config["api_key"],
                model=config["model"],
                base_url=config["base_url"],
                timeout=config["timeout"]
            )
    return llm_client
