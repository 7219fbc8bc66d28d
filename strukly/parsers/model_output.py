"""
Helpers for turning raw vision-model text and data-URL uploads into usable data.
"""

import json
import re
from typing import Any, Dict, Tuple

from strukly.exceptions import ExtractionError

DATA_URL_PATTERN = re.compile(r'^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,', re.IGNORECASE)
DEFAULT_IMAGE_MIME = "image/jpeg"


def split_data_url(image: str) -> Tuple[str, str]:
    """
    Strips a `data:<mime>;base64,` prefix.

    Returns:
        (mime type, base64 payload). Strings without a prefix are treated as a
        bare base64 JPEG payload.
    """
    match = DATA_URL_PATTERN.match(image)
    if not match:
        return DEFAULT_IMAGE_MIME, image.strip()
    return match.group('mime').lower(), image[match.end():].strip()


def strip_code_fences(text: str) -> str:
    """Removes Markdown ```json / ``` fences anywhere in the text."""
    return text.replace("```json", "").replace("```", "").strip()


def slice_json_object(text: str) -> str:
    """Keeps the substring between the first '{' and the last '}' when both exist."""
    first = text.find("{")
    last = text.rfind("}")
    if first != -1 and last != -1 and first < last:
        return text[first:last + 1]
    return text


def parse_model_json(text: str) -> Dict[str, Any]:
    """
    Parses the model's text response into a JSON object.

    Pipeline:
    1. Strip Markdown code fences.
    2. Slice between the first '{' and the last '}'.
    3. json.loads, requiring an object at the top level.

    Raises:
        ExtractionError: empty text, invalid JSON, or a non-object payload.
    """
    if not text or not text.strip():
        raise ExtractionError("Empty model response")

    candidate = slice_json_object(strip_code_fences(text))
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise ExtractionError("Model response is not valid JSON", details=str(e))

    if not isinstance(data, dict):
        raise ExtractionError("Model response is not a JSON object", details=type(data).__name__)
    return data
