"""HTTP client for LLM narrative generation."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

import httpx
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
ANTHROPIC_API_URL = "https://api.anthropic.com/v1/messages"
OPENAI_API_URL = "https://api.openai.com/v1/chat/completions"

GEMINI_FALLBACK_MODELS = (
    "gemini-2.0-flash",
    "gemini-2.5-flash",
    "gemini-2.0-flash-lite",
    "gemini-flash-latest",
    "gemini-pro-latest",
)
DEFAULT_ANTHROPIC_MODEL = "claude-sonnet-4-20250514"
DEFAULT_OPENAI_MODEL = "gpt-4o"
RETRYABLE_STATUS_CODES = {404, 429}

OPENAI_SYSTEM_PROMPT = (
    "You are an expert weather-commodities trading analyst. Provide specific, actionable trading "
    "insights based on weather patterns. Use appropriate regional market instruments."
)

Sleep = Callable[[float], Awaitable[None]]


class NarrativeConfig(BaseModel):
    """Provider selection and call settings for the narrative generator."""
    provider: str = Field("gemini", description="gemini, google, anthropic, openai or none")
    api_key: str = Field("", description="Provider API key")
    model: str = Field("gemini-2.0-flash", description="Preferred model name")
    timeout_seconds: float = Field(60.0, gt=0)
    retry_delay_seconds: float = Field(0.5, ge=0)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key) and self.provider != "none"


class NarrativeGenerationError(Exception):
    """Raised when the narrative provider call fails."""

    def __init__(self, message: str, details: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.status_code = status_code


class UnknownProviderError(ValueError):
    """Raised when the configured provider is not supported."""


def gemini_model_chain(preferred: str) -> List[str]:
    """Ordered, de-duplicated model list tried on rate limits or missing models."""
    chain: List[str] = []
    for model in (preferred, *GEMINI_FALLBACK_MODELS):
        if model not in chain:
            chain.append(model)
    return chain


def _describe_http_error(error: httpx.HTTPStatusError) -> NarrativeGenerationError:
    status = error.response.status_code
    try:
        body = error.response.json()
    except ValueError:
        body = {}
    provider_message = None
    if isinstance(body, dict):
        err = body.get("error")
        provider_message = (err.get("message") if isinstance(err, dict) else None) or body.get("message")

    if status == 429:
        return NarrativeGenerationError(
            "Rate limit exceeded",
            "The AI service is temporarily unavailable due to rate limiting. Please wait a moment and try again.",
            status,
        )
    if status in (401, 403):
        return NarrativeGenerationError(
            "API authentication failed",
            "Please check that your LLM_API_KEY is valid and has the necessary permissions.",
            status,
        )
    if status == 400:
        return NarrativeGenerationError(
            "Invalid request",
            provider_message or "The request to the AI service was invalid.",
            status,
        )
    return NarrativeGenerationError(
        "Failed to generate AI analysis",
        provider_message or str(error),
        status,
    )


class NarrativeGenerator:
    """Async client that turns an analysis prompt into narrative text."""

    def __init__(
        self,
        config: NarrativeConfig,
        client: Optional[httpx.AsyncClient] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        """Initialize the generator.

        Args:
            config: Provider, key and model settings
            client: HTTP client (creates default if None)
            sleep: Awaitable delay used between fallback attempts
        """
        self.config = config
        self.client = client or httpx.AsyncClient(
            timeout=config.timeout_seconds,
            headers={"Content-Type": "application/json"},
        )
        self.sleep = sleep

    async def generate(self, prompt: str) -> str:
        """Send the prompt to the configured provider.

        Args:
            prompt: Prompt text

        Returns:
            Raw narrative text from the provider

        Raises:
            UnknownProviderError: If the provider is not supported
            NarrativeGenerationError: If the provider call fails
        """
        provider = self.config.provider
        logger.info(f"Requesting narrative analysis from provider '{provider}'")

        try:
            if provider in ("gemini", "google"):
                return await self._call_gemini(prompt)
            if provider == "anthropic":
                return await self._call_anthropic(prompt)
            if provider == "openai":
                return await self._call_openai(prompt)
        except httpx.HTTPStatusError as e:
            logger.error(f"Narrative provider error - Status: {e.response.status_code}, Details: {e.response.text}")
            raise _describe_http_error(e) from e
        except httpx.RequestError as e:
            logger.error(f"Request error to narrative provider: {e}")
            raise NarrativeGenerationError("Failed to generate AI analysis", str(e)) from e
        except (KeyError, IndexError, TypeError, AttributeError, ValueError) as e:
            # 200 response that is not JSON or lacks the expected fields
            logger.error(f"Malformed response from narrative provider '{provider}': {e!r}")
            raise NarrativeGenerationError(
                "Failed to generate AI analysis", f"Unexpected response format: {e!r}"
            ) from e

        raise UnknownProviderError(f"Unknown LLM provider: {provider}")

    async def _post(self, url: str, payload: Dict[str, Any], **kwargs: Any) -> Dict[str, Any]:
        response = await self.client.post(url, json=payload, **kwargs)
        response.raise_for_status()
        return response.json()

    async def _call_gemini(self, prompt: str) -> str:
        models = gemini_model_chain(self.config.model)
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": 0.8, "maxOutputTokens": 8192},
            "safetySettings": [
                {"category": category, "threshold": "BLOCK_ONLY_HIGH"}
                for category in (
                    "HARM_CATEGORY_HARASSMENT",
                    "HARM_CATEGORY_HATE_SPEECH",
                    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
                    "HARM_CATEGORY_DANGEROUS_CONTENT",
                )
            ],
        }

        for attempt, model in enumerate(models):
            try:
                data = await self._post(
                    GEMINI_API_URL.format(model=model),
                    payload,
                    params={"key": self.config.api_key},
                )
            except httpx.HTTPStatusError as e:
                is_last = attempt == len(models) - 1
                if e.response.status_code in RETRYABLE_STATUS_CODES and not is_last:
                    logger.warning(
                        f"Gemini model '{model}' returned {e.response.status_code}, "
                        f"falling back to '{models[attempt + 1]}'"
                    )
                    await self.sleep(self.config.retry_delay_seconds)
                    continue
                raise

            candidates = data.get("candidates") or [{}]
            parts = (candidates[0].get("content") or {}).get("parts") or [{}]
            content = parts[0].get("text")
            if not content:
                raise NarrativeGenerationError("Failed to generate AI analysis", "No content in Gemini response")
            return content

        raise NarrativeGenerationError("Failed to generate AI analysis", "No Gemini models configured")

    async def _call_anthropic(self, prompt: str) -> str:
        model = self.config.model if "claude" in self.config.model else DEFAULT_ANTHROPIC_MODEL
        data = await self._post(
            ANTHROPIC_API_URL,
            {
                "model": model,
                "max_tokens": 2000,
                "messages": [{"role": "user", "content": prompt}],
            },
            headers={"x-api-key": self.config.api_key, "anthropic-version": "2023-06-01"},
        )
        return data["content"][0]["text"]

    async def _call_openai(self, prompt: str) -> str:
        model = self.config.model if "gpt" in self.config.model else DEFAULT_OPENAI_MODEL
        data = await self._post(
            OPENAI_API_URL,
            {
                "model": model,
                "max_tokens": 2000,
                "messages": [
                    {"role": "system", "content": OPENAI_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
            },
            headers={"Authorization": f"Bearer {self.config.api_key}"},
        )
        return data["choices"][0]["message"]["content"]

    async def aclose(self):
        """Close the async HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
