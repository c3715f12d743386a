from __future__ import annotations

import io

from PIL import Image
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas


def _as_image(pixels: Image.Image | bytes, width: int, height: int) -> Image.Image:
    if width <= 0 or height <= 0:
        raise ValueError(f"image dimensions must be positive, got {width}x{height}")

    if isinstance(pixels, Image.Image):
        if pixels.size != (width, height):
            raise ValueError(f"image size {pixels.size} does not match {width}x{height}")
        image = pixels
    elif isinstance(pixels, (bytes, bytearray, memoryview)):
        expected = width * height * 3
        if len(pixels) != expected:
            raise ValueError(f"raw RGB buffer has {len(pixels)} bytes, expected {expected}")
        image = Image.frombytes("RGB", (width, height), bytes(pixels))
    else:
        raise TypeError("pixels must be a PIL image or a raw RGB byte buffer")

    if image.mode != "RGB":
        image = image.convert("RGB")
    return image


def package_as_single_page_pdf(pixels: Image.Image | bytes, width: int, height: int) -> bytes:
    """
    Wrap one raster into a one-page PDF whose page is exactly width x height
    points (no margin, no scaling).

    The image is embedded losslessly (Flate, not JPEG). `invariant` drops the
    creation date and random file id, so identical pixels give identical bytes.
    """

    image = _as_image(pixels, width, height)
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=(width, height), invariant=1)
    c.drawImage(ImageReader(image), 0, 0, width=width, height=height)
    c.showPage()
    c.save()
    return buf.getvalue()


def encode_png(image: Image.Image) -> bytes:
    """PNG bytes for previews."""
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()
