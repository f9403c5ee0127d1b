"""Gemini generateContent wrapper: one prompt in, one completion text out."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from recruitmaxxing.config import DEFAULT_BASE_URL, LLMConfig
from recruitmaxxing.errors import MalformedResponse, TransportError

logger = logging.getLogger(__name__)


@dataclass
class RawModelResponse:
    """Completion text plus usage metadata."""

    text: str
    input_tokens: int = 0
    output_tokens: int = 0


class ModelGateway:
    """Async Gemini REST client.

    ``max_attempts`` defaults to 1: each ``complete`` call makes exactly one
    request. Higher values retry transport failures with exponential backoff;
    malformed responses are never retried.
    """

    retry_wait = wait_exponential(min=1, max=10)

    def __init__(
        self,
        api_key: str | None = None,
        *,
        model: str = "gemini-1.5-flash",
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 60.0,
        max_attempts: int = 1,
        temperature: float | None = None,
        max_output_tokens: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        key = api_key or os.environ.get("GEMINI_API_KEY")
        if not key:
            raise ValueError(
                "Gemini API key required. Set GEMINI_API_KEY env var or pass api_key."
            )
        self.api_key = key
        self.model = model
        self.max_attempts = max_attempts
        self.generation_config: dict = {}
        if temperature is not None:
            self.generation_config["temperature"] = temperature
        if max_output_tokens is not None:
            self.generation_config["maxOutputTokens"] = max_output_tokens
        self.client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)
        self._token_log: list[tuple[str, int, int]] = []  # (model, input_tokens, output_tokens)

    @classmethod
    def from_config(
        cls, config: LLMConfig, transport: httpx.AsyncBaseTransport | None = None
    ) -> "ModelGateway":
        return cls(
            config.api_key,
            model=config.model,
            base_url=config.base_url,
            timeout=config.timeout,
            max_attempts=config.max_attempts,
            temperature=config.temperature,
            max_output_tokens=config.max_output_tokens,
            transport=transport,
        )

    @property
    def endpoint(self) -> str:
        return f"/models/{self.model}:generateContent"

    def build_payload(self, prompt: str) -> dict:
        payload: dict = {"contents": [{"parts": [{"text": prompt}]}]}
        if self.generation_config:
            payload["generationConfig"] = dict(self.generation_config)
        return payload

    async def _post(self, payload: dict) -> dict:
        """Make one HTTP call and decode the body."""
        try:
            response = await self.client.post(
                self.endpoint, params={"key": self.api_key}, json=payload
            )
        except httpx.TimeoutException as exc:
            raise TransportError(f"Model request timed out: {exc}") from exc
        except httpx.RequestError as exc:
            raise TransportError(f"Model request failed: {exc}") from exc

        if not response.is_success:
            raise TransportError(
                f"Model endpoint returned HTTP {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponse(f"Response body is not JSON: {response.text[:200]}") from exc

    async def complete(self, prompt: str) -> RawModelResponse:
        """Send ``prompt`` and return the completion text with usage."""
        logger.debug("Model call: model=%s, prompt=%d chars", self.model, len(prompt))
        payload = self.build_payload(prompt)
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=self.retry_wait,
                retry=retry_if_exception_type(TransportError),
                reraise=True,
            ):
                with attempt:
                    data = await self._post(payload)
            text = _completion_text(data)
        except Exception:
            logger.error("Model call failed", exc_info=True)
            raise

        usage = data.get("usageMetadata") or {}
        input_tokens = int(usage.get("promptTokenCount") or 0)
        output_tokens = int(usage.get("candidatesTokenCount") or 0)
        logger.debug("Model response: %d input, %d output tokens", input_tokens, output_tokens)
        self._token_log.append((self.model, input_tokens, output_tokens))
        return RawModelResponse(text=text, input_tokens=input_tokens, output_tokens=output_tokens)

    def get_token_summary(self) -> dict:
        """Return accumulated token usage and reset the log."""
        summary = {
            "input": sum(t[1] for t in self._token_log),
            "output": sum(t[2] for t in self._token_log),
            "calls": list(self._token_log),
        }
        self._token_log.clear()
        return summary

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "ModelGateway":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def _completion_text(data: object) -> str:
    """Pull ``candidates[0].content.parts[0].text`` out of a response body."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]  # type: ignore[index]
    except (KeyError, IndexError, TypeError) as exc:
        raise MalformedResponse("Response has no candidates[0].content.parts[0].text") from exc
    if not isinstance(text, str):
        raise MalformedResponse(f"Completion text is {type(text).__name__}, not str")
    return text
