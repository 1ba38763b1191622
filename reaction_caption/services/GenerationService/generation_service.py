"""
Client for the Gemini generateContent REST endpoint.

Builds one multimodal request per call and maps every backend failure
condition to a typed error. There are no internal retries; the caller
decides whether to try again.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from reaction_caption.entities.errors import (
    ContentBlocked,
    EmptyResponse,
    GenerationFailed,
    GenerationTimeout,
    MalformedResponse,
    Truncated,
)
from reaction_caption.entities.generation import GenerationRequest
from reaction_caption.entities.media import EncodedPayload
from reaction_caption.services.GenerationService.generation_service_interface import (
    GenerationServiceInterface,
)

DEFAULT_ENDPOINT = (
    "https://generativelanguage.googleapis.com/v1beta/models/"
    "gemini-1.5-pro:generateContent"
)


class GenerationService(GenerationServiceInterface):
    def __init__(
        self,
        logger: logging.Logger,
        endpoint: str = DEFAULT_ENDPOINT,
        temperature: float = 0.8,
        top_p: float = 0.8,
        top_k: int = 15,
        timeout: float = 60.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.logger = logger
        self.endpoint = endpoint
        self.temperature = temperature
        self.top_p = top_p
        self.top_k = top_k
        self.timeout = timeout
        self._client = http_client

        self.logger.info(
            "GenerationService initialized: endpoint=%s timeout=%s",
            self.endpoint,
            self.timeout,
        )

    def build_request(
        self,
        payloads: Sequence[EncodedPayload],
        instruction: str,
        max_output_tokens: int,
    ) -> GenerationRequest:
        return GenerationRequest(
            instruction=instruction,
            payloads=tuple(payloads),
            max_output_tokens=max_output_tokens,
            temperature=self.temperature,
            top_p=self.top_p,
            top_k=self.top_k,
        )

    async def generate(
        self,
        api_key: str,
        payloads: Sequence[EncodedPayload],
        instruction: str,
        max_output_tokens: int,
    ) -> str:
        request = self.build_request(payloads, instruction, max_output_tokens)
        self.logger.info(
            "Requesting caption: %d payload(s), maxOutputTokens=%d",
            len(request.payloads),
            request.max_output_tokens,
        )

        response = await self._post(api_key, request.to_body())
        text = self._parse_response(response)

        self.logger.info("Received %d characters from backend", len(text))
        return text

    async def _post(self, api_key: str, body: dict[str, Any]) -> httpx.Response:
        try:
            if self._client is not None:
                return await self._send(self._client, api_key, body)
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                return await self._send(client, api_key, body)
        except httpx.TimeoutException as exc:
            self.logger.error("Generation request timed out after %ss", self.timeout)
            raise GenerationTimeout(self.timeout) from exc
        except httpx.RequestError as exc:
            # str(exc) is kept out of the message; the request URL holds the key.
            self.logger.error("Generation request failed: %s", type(exc).__name__)
            raise GenerationFailed(f"network error ({type(exc).__name__})") from exc

    async def _send(
        self, client: httpx.AsyncClient, api_key: str, body: dict[str, Any]
    ) -> httpx.Response:
        return await client.post(
            self.endpoint,
            params={"key": api_key},
            headers={"Content-Type": "application/json"},
            json=body,
            timeout=self.timeout,
        )

    def _parse_response(self, response: httpx.Response) -> str:
        if not response.is_success:
            message = _error_message(response)
            self.logger.error(
                "Gemini API error (status %d): %s", response.status_code, message
            )
            raise GenerationFailed(message, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedResponse("Gemini API returned a non-JSON body") from exc

        if not isinstance(data, dict):
            raise MalformedResponse()

        prompt_feedback = data.get("promptFeedback") or {}
        block_reason = (
            prompt_feedback.get("blockReason") if isinstance(prompt_feedback, dict) else None
        )
        if block_reason:
            self.logger.warning("Request blocked by safety filter: %s", block_reason)
            raise ContentBlocked(str(block_reason))

        candidates = data.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            raise EmptyResponse("No response candidates from Gemini API")

        candidate = candidates[0]
        if not isinstance(candidate, dict):
            raise MalformedResponse()

        content = candidate.get("content")
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            if candidate.get("finishReason") == "MAX_TOKENS":
                self.logger.warning("Candidate hit the token budget before any text")
                raise Truncated()
            raise MalformedResponse()

        texts = [part.get("text") for part in parts if isinstance(part, dict)]
        if any(text is not None and not isinstance(text, str) for text in texts):
            raise MalformedResponse("Gemini API returned a non-text part")

        text = "".join(text for text in texts if text).strip()
        if not text:
            raise EmptyResponse()
        return text


def _error_message(response: httpx.Response) -> str:
    try:
        error_data = response.json()
    except ValueError:
        return "Unknown error"
    if isinstance(error_data, dict):
        error = error_data.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return "Unknown error"
