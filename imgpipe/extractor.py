"""
Upload extraction: pull the "image" part out of a multipart request and
decode it into a DecodedImage.
"""

import io
import logging

from PIL import Image, UnidentifiedImageError
from werkzeug.exceptions import RequestEntityTooLarge

from imgpipe.errors import (
    MalformedUpload,
    MethodNotAllowed,
    MissingFile,
    UnsupportedOrCorruptImage,
)
from imgpipe.models import DecodedImage

logger = logging.getLogger(__name__)

IMAGE_FIELD = "image"

# Formats Pillow is allowed to try when decoding an upload.
SUPPORTED_FORMATS = ("JPEG", "PNG", "GIF", "BMP", "WEBP")


def extract(req, method: str = "POST") -> DecodedImage:
    """Return the decoded upload carried by ``req``.

    Raises MethodNotAllowed, MissingFile / MalformedUpload or
    UnsupportedOrCorruptImage depending on where extraction stops.
    """
    if req.method != method:
        raise MethodNotAllowed(f"Only {method} method is allowed")

    try:
        files = req.files
    except RequestEntityTooLarge:
        raise MalformedUpload("Failed to parse multipart form: upload too large")

    file = files.get(IMAGE_FIELD)
    if file is None or not file.filename:
        raise MissingFile(f"Could not get uploaded file: missing '{IMAGE_FIELD}' field")

    data = file.read()
    logger.info(
        "Received file: %s, size: %d bytes, content-type: %s",
        file.filename,
        len(data),
        file.mimetype,
    )
    return decode(data)


def decode(data: bytes) -> DecodedImage:
    """Decode raw bytes against the supported formats."""
    try:
        img = Image.open(io.BytesIO(data), formats=SUPPORTED_FORMATS)
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as exc:
        logger.warning("Error decoding image: %s", exc)
        raise UnsupportedOrCorruptImage(f"Could not decode image: {exc}")

    encoding = img.format.lower()
    if img.width <= 0 or img.height <= 0:
        raise UnsupportedOrCorruptImage("Could not decode image: empty bounds")

    logger.info("Successfully decoded image, format: %s", encoding)
    return DecodedImage(pixels=_normalize(img), encoding=encoding)


def _normalize(img: Image.Image) -> Image.Image:
    # Primitives work on RGB, or RGBA when the source has transparency.
    has_alpha = img.mode in ("RGBA", "LA", "PA") or "transparency" in img.info
    target = "RGBA" if has_alpha else "RGB"
    if img.mode == target:
        return img
    return img.convert(target)
