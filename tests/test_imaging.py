"""Tests for screenshot size fitting."""

from __future__ import annotations

import io
from collections.abc import Callable

import pytest
from PIL import Image, UnidentifiedImageError

from crawlbase_mcp.imaging import MAX_DIMENSION, MAX_IMAGE_PIXELS, ImageTooLargeError, fit_image


def _size(data: bytes) -> tuple[int, int]:
    with Image.open(io.BytesIO(data)) as img:
        return img.size


class TestFitImage:
    """Tests for fit_image."""

    def test_large_image_scaled_to_bound(self, make_image: Callable[..., bytes]) -> None:
        """A 10000x5000 image is scaled so its longer side is exactly 8000."""
        data = make_image(10000, 5000, mode="L")

        fitted = fit_image(data)

        assert fitted.resized
        assert fitted.mime_type == "image/jpeg"
        assert (fitted.width, fitted.height) == (MAX_DIMENSION, 4000)
        assert _size(fitted.data) == (8000, 4000)

    def test_tall_image_preserves_aspect_ratio(self, make_image: Callable[..., bytes]) -> None:
        fitted = fit_image(make_image(300, 1000), max_dimension=400)

        assert fitted.resized
        assert fitted.height == 400
        assert fitted.width == 120
        with Image.open(io.BytesIO(fitted.data)) as img:
            assert img.format == "JPEG"

    def test_small_image_passthrough(self, make_image: Callable[..., bytes]) -> None:
        """Images within the bound are never enlarged or re-encoded."""
        data = make_image(500, 300)

        fitted = fit_image(data)

        assert not fitted.resized
        assert fitted.data == data
        assert fitted.mime_type == "image/png"
        assert (fitted.width, fitted.height) == (500, 300)

    def test_exact_bound_passthrough(self, make_image: Callable[..., bytes]) -> None:
        data = make_image(400, 200)

        fitted = fit_image(data, max_dimension=400)

        assert not fitted.resized
        assert fitted.data == data

    def test_passthrough_keeps_source_mime_type(self, make_image: Callable[..., bytes]) -> None:
        fitted = fit_image(make_image(64, 64, fmt="JPEG"))

        assert fitted.mime_type == "image/jpeg"

    def test_rgba_converted_for_jpeg(self, make_image: Callable[..., bytes]) -> None:
        fitted = fit_image(make_image(200, 100, mode="RGBA"), max_dimension=100)

        assert fitted.resized
        assert (fitted.width, fitted.height) == (100, 50)

    def test_invalid_bytes(self) -> None:
        with pytest.raises(UnidentifiedImageError):
            fit_image(b"not an image")

    def test_pixel_limit_checked_before_decoding(self, png_header: Callable[[int, int], bytes]) -> None:
        """A header declaring too many pixels is rejected without decoding."""
        data = png_header(12000, 12000)
        assert 12000 * 12000 > MAX_IMAGE_PIXELS

        with pytest.raises(ImageTooLargeError, match="exceeds limit"):
            fit_image(data)

    def test_huge_header_rejected(self, png_header: Callable[[int, int], bytes]) -> None:
        with pytest.raises((Image.DecompressionBombError, ImageTooLargeError)):
            fit_image(png_header(40000, 40000))

    def test_pillow_global_limit_untouched(self) -> None:
        assert Image.MAX_IMAGE_PIXELS == int(1024 * 1024 * 1024 // 4 // 3)
