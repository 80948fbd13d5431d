"""Screenshot decoding and size fitting with Pillow."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass

from PIL import Image

logger = logging.getLogger(__name__)

MAX_DIMENSION = 8000
JPEG_QUALITY = 80
DEFAULT_MIME_TYPE = "image/png"
MAX_IMAGE_PIXELS = 134_217_728


class ImageTooLargeError(ValueError):
    """Raised when an image header declares more pixels than we will decode."""


@dataclass(frozen=True)
class FittedImage:
    """Image bytes ready to be embedded in a tool response."""

    data: bytes
    mime_type: str
    width: int
    height: int
    resized: bool


def fit_image(data: bytes, max_dimension: int = MAX_DIMENSION, quality: int = JPEG_QUALITY) -> FittedImage:
    """Shrink an image so neither side exceeds ``max_dimension``.

    Images already within bounds are returned unchanged. Larger ones are
    scaled down preserving aspect ratio (never enlarged) and re-encoded
    as JPEG.

    Args:
        data: Encoded image bytes
        max_dimension: Maximum width and height in pixels (default: 8000)
        quality: JPEG quality used when re-encoding (default: 80)

    Returns:
        FittedImage with the resulting bytes, MIME type and dimensions

    Raises:
        PIL.UnidentifiedImageError: If the bytes are not a decodable image
        PIL.Image.DecompressionBombError: If Pillow's own pixel limit is exceeded
        ImageTooLargeError: If the image has more than ``MAX_IMAGE_PIXELS`` pixels
    """
    with Image.open(io.BytesIO(data)) as img:
        width, height = img.size
        # Only the header has been read at this point
        if width * height > MAX_IMAGE_PIXELS:
            raise ImageTooLargeError(
                f"Image size ({width}x{height}) exceeds limit of {MAX_IMAGE_PIXELS} pixels"
            )

        if width <= max_dimension and height <= max_dimension:
            mime_type = Image.MIME.get(img.format or "", DEFAULT_MIME_TYPE)
            return FittedImage(data=data, mime_type=mime_type, width=width, height=height, resized=False)

        img.thumbnail((max_dimension, max_dimension), Image.Resampling.LANCZOS)
        output = img if img.mode in ("RGB", "L") else img.convert("RGB")

        buffer = io.BytesIO()
        output.save(buffer, format="JPEG", quality=quality)

    logger.debug(f"Resized image from {width}x{height} to {output.width}x{output.height}")
    return FittedImage(
        data=buffer.getvalue(),
        mime_type="image/jpeg",
        width=output.width,
        height=output.height,
        resized=True,
    )
