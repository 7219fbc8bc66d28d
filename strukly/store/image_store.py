"""
Object storage for receipt photos, backed by a local directory.
"""

import io
import re
import time
from pathlib import Path

from PIL import Image, ImageOps, UnidentifiedImageError

from strukly.exceptions import StoreError
from strukly.utils.logging_config import logger

MAX_IMAGE_WIDTH = 1280
JPEG_QUALITY = 80


def compress_image(image_bytes: bytes, max_width: int = MAX_IMAGE_WIDTH, quality: int = JPEG_QUALITY) -> bytes:
    """
    Re-encodes an image as JPEG, scaling it down to `max_width` while keeping
    the aspect ratio.

    Args:
        image_bytes: Image data as bytes
        max_width: Maximum width in pixels
        quality: JPEG quality (1-95)

    Returns:
        JPEG bytes
    """
    img = Image.open(io.BytesIO(image_bytes))
    img = ImageOps.exif_transpose(img)

    width, height = img.size
    if width > max_width:
        new_height = round(height * (max_width / width))
        img = img.resize((max_width, new_height), Image.Resampling.LANCZOS)

    if img.mode not in ("RGB", "L"):
        img = img.convert("RGB")

    output = io.BytesIO()
    img.save(output, format="JPEG", quality=quality)
    return output.getvalue()


def sanitize_filename(filename: str) -> str:
    return re.sub(r'[^a-zA-Z0-9.-]', '_', filename or "receipt")


class LocalImageStore:
    """
    Stores receipt images under `root` as receipts/<user>/<millis>_<name>.jpg
    and returns that relative path as the image URL.
    """

    def __init__(self, root: str):
        self.root = Path(root)

    def save(self, user_id: str, filename: str, image_bytes: bytes) -> str:
        try:
            payload = compress_image(image_bytes)
        except (UnidentifiedImageError, OSError) as e:
            logger.warning(f"Image compression failed, storing original file: {e}")
            payload = image_bytes

        key = f"receipts/{sanitize_filename(user_id)}/{int(time.time() * 1000)}_{sanitize_filename(filename)}.jpg"
        path = self.root / key
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(payload)
        except OSError as e:
            logger.error(f"Error saving image {key}: {e}")
            raise StoreError(f"Could not save image: {e}") from e

        logger.debug(f"Saved receipt image to {path}")
        return key

    def delete(self, image_url: str) -> None:
        path = (self.root / image_url).resolve()
        if self.root.resolve() not in path.parents:
            raise StoreError(f"Image path outside the store: {image_url}")
        try:
            path.unlink()
        except OSError as e:
            logger.error(f"Error deleting image: {e}")
            raise StoreError(f"Could not delete image: {e}") from e
