"""
Extraction Service: receipt photo in, merchant name and line items out.

A single call to a hosted vision model with a fixed prompt. No retries and no
streaming; any failure surfaces as ExtractionError.
"""

import base64
from typing import Any, Dict, Optional

from openai import OpenAI, OpenAIError
from pydantic import ValidationError as PydanticValidationError

from strukly.exceptions import ExtractionError
from strukly.llm.prompts import EXTRACTION_PROMPT
from strukly.models import ExtractionResult
from strukly.parsers.model_output import parse_model_json, split_data_url
from strukly.utils.logging_config import logger


class ReceiptExtractor:
    """
    Wraps the vision model call and the parsing of its text response.
    """

    def __init__(self, openai_client: Optional[OpenAI] = None, model: str = "gpt-4o-mini"):
        """
        Args:
            openai_client: Pre-configured client. Created on first use when omitted.
            model: Vision-capable chat model name.
        """
        self._openai_client = openai_client
        self.model = model

    @property
    def openai_client(self) -> OpenAI:
        if self._openai_client is None:
            self._openai_client = OpenAI()
        return self._openai_client

    def extract_json(self, image: str) -> Dict[str, Any]:
        """
        Runs extraction for a data URL (or bare base64 payload) and returns the
        parsed JSON object exactly as the model produced it.

        Raises:
            ExtractionError: vendor failure or unusable model output.
        """
        mime, payload = split_data_url(image)
        if not payload:
            raise ExtractionError("Image payload is empty")

        try:
            logger.debug(f"Sending {mime} receipt image to {self.model}")
            response = self.openai_client.chat.completions.create(
                model=self.model,
                messages=[{
                    "role": "user",
                    "content": [
                        {"type": "text", "text": EXTRACTION_PROMPT},
                        {"type": "image_url", "image_url": {"url": f"data:{mime};base64,{payload}"}},
                    ],
                }],
                temperature=0,
            )
            text = response.choices[0].message.content or ""
        except OpenAIError as e:
            logger.error(f"Receipt extraction call failed: {e}")
            raise ExtractionError("Extraction service call failed", details=str(e)) from e
        except (IndexError, AttributeError) as e:
            logger.error(f"Unexpected extraction response shape: {e}")
            raise ExtractionError("Unexpected extraction response", details=str(e)) from e

        try:
            data = parse_model_json(text)
        except ExtractionError:
            logger.error(f"Unparseable extraction output: {text[:200]!r}")
            raise

        logger.info(f"Extracted {len(data.get('items') or [])} items from receipt image")
        return data

    def extract(self, image_bytes: bytes, mime_type: str = "image/jpeg") -> ExtractionResult:
        """
        Runs extraction for raw image bytes and validates the result shape.

        Raises:
            ExtractionError: vendor failure, unusable output, or wrong JSON shape.
        """
        encoded = base64.b64encode(image_bytes).decode('utf-8')
        data = self.extract_json(f"data:{mime_type};base64,{encoded}")
        try:
            return ExtractionResult.model_validate(data)
        except PydanticValidationError as e:
            raise ExtractionError("Extraction output has an unexpected shape", details=str(e)) from e
