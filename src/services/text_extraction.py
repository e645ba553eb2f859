import base64
import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from config import settings
from services.errors import TextExtractionError

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = {408, 429, 500, 502, 503, 504}


class TransientExtractionError(Exception):
    """Marks a failure worth retrying (network trouble, throttling, 5xx)."""


class BaseTextExtractor(ABC):
    @abstractmethod
    async def extract_text(self, image: bytes) -> str:
        pass


class VisionTextExtractor(BaseTextExtractor):
    """Google Cloud Vision ``images:annotate`` client using TEXT_DETECTION."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_attempts: Optional[int] = None,
        backoff: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.vision_api_key
        self.api_url = api_url or settings.vision_api_url
        self.timeout = timeout if timeout is not None else settings.text_extraction_timeout_seconds
        self.max_attempts = max_attempts or settings.text_extraction_max_attempts
        self.backoff = backoff if backoff is not None else settings.text_extraction_backoff_seconds
        self._transport = transport

    def _build_payload(self, image: bytes) -> dict:
        return {
            "requests": [
                {
                    "image": {"content": base64.b64encode(image).decode("ascii")},
                    "features": [{"type": "TEXT_DETECTION"}],
                }
            ]
        }

    async def _post(self, payload: dict) -> dict:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.post(
                    self.api_url, params={"key": self.api_key}, json=payload
                )
            except httpx.TransportError as e:
                raise TransientExtractionError(f"Vision transport error: {e}") from e
        if response.status_code in RETRYABLE_STATUS_CODES:
            raise TransientExtractionError(f"Vision API returned {response.status_code}")
        if response.status_code >= 400:
            raise TextExtractionError(
                f"Vision API rejected the request ({response.status_code}): {response.text[:200]}"
            )
        try:
            return response.json()
        except ValueError as e:
            raise TextExtractionError("Vision API returned a non-JSON body") from e

    def _parse_response(self, result: dict) -> str:
        responses = result.get("responses") if isinstance(result, dict) else None
        if not isinstance(responses, list) or not responses:
            raise TextExtractionError("Vision API response has no 'responses' entry")
        first = responses[0] or {}
        if "error" in first:
            message = first["error"].get("message", "unknown error")
            raise TextExtractionError(f"Vision API could not process the image: {message}")
        full_text = (first.get("fullTextAnnotation") or {}).get("text")
        if full_text:
            return full_text
        annotations = first.get("textAnnotations") or []
        if annotations:
            return annotations[0].get("description", "") or ""
        return ""

    async def extract_text(self, image: bytes) -> str:
        if not self.api_key:
            raise TextExtractionError("Vision API key is not configured")
        payload = self._build_payload(image)
        retrying = AsyncRetrying(
            reraise=True,
            stop=stop_after_attempt(max(1, self.max_attempts)),
            wait=wait_exponential(multiplier=self.backoff, max=10),
            retry=retry_if_exception_type(TransientExtractionError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
        )
        try:
            async for attempt in retrying:
                with attempt:
                    result = await self._post(payload)
        except TransientExtractionError as e:
            raise TextExtractionError(
                f"Vision API unavailable after {self.max_attempts} attempts: {e}"
            ) from e
        return self._parse_response(result)
