"""
Synchronous client the UI uses to reach the backend's extraction and chat
routes.
"""

import base64
from typing import List, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from strukly.exceptions import AssistantError, ExtractionError
from strukly.models import ChatTurn, ExtractionResult
from strukly.utils.logging_config import logger


class StruklyApiClient:
    """
    Thin httpx wrapper around POST /api/chat/ocr and POST /api/chat.

    No timeout is applied to extraction: a slow vendor keeps the caller waiting
    until the transport gives up.
    """

    def __init__(self, base_url: str, transport: Optional[httpx.BaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(base_url=self.base_url, timeout=None, transport=self.transport)

    def detect(self, image_bytes: bytes, mime_type: str = "image/jpeg") -> ExtractionResult:
        """
        Sends a receipt photo for extraction.

        Raises:
            ExtractionError: transport failure, non-2xx response or wrong JSON shape.
        """
        encoded = base64.b64encode(image_bytes).decode("utf-8")
        data_url = f"data:{mime_type};base64,{encoded}"

        try:
            with self._client() as client:
                response = client.post("/api/chat/ocr", json={"image": data_url})
        except httpx.RequestError as e:
            logger.error(f"Extraction service unavailable: {e}")
            raise ExtractionError("Extraction service unavailable", details=str(e)) from e

        if response.status_code != 200:
            logger.error(f"Extraction service error: {response.status_code} {response.text}")
            raise ExtractionError(f"Extraction failed with status {response.status_code}", details=response.text)

        try:
            return ExtractionResult.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            logger.error(f"Unexpected extraction payload: {e}")
            raise ExtractionError("Unexpected extraction payload", details=str(e)) from e

    def chat(self, message: str, history: List[ChatTurn]) -> str:
        """
        Returns the assistant reply. A 500 from the backend still carries a
        displayable fallback text, which is returned as-is.

        Raises:
            AssistantError: transport failure or a response without text.
        """
        payload = {"message": message, "history": [turn.model_dump() for turn in history]}
        try:
            with self._client() as client:
                response = client.post("/api/chat", json=payload)
            text = response.json().get("response")
        except (httpx.RequestError, ValueError, AttributeError) as e:
            logger.error(f"Chat service unavailable: {e}")
            raise AssistantError(str(e)) from e

        if not text:
            raise AssistantError(f"Chat failed with status {response.status_code}")
        return text
