"""
Response encoding: serialize a pixel buffer to JPEG or PNG bytes.
"""

import io
import logging

from imgpipe.errors import EncodingFailure
from imgpipe.models import DecodedImage, EncodedImage, TargetEncoding

logger = logging.getLogger(__name__)

PIL_FORMATS = {"jpeg": "JPEG", "png": "PNG"}

# Modes each writer accepts without conversion.
WRITABLE_MODES = {
    "jpeg": ("RGB", "L", "CMYK"),
    "png": ("RGB", "RGBA", "L", "LA", "P", "1", "I", "I;16"),
}


def encode(image: DecodedImage, encoding: TargetEncoding) -> EncodedImage:
    """Return the encoded bytes and content type for ``image``."""
    if encoding.format not in PIL_FORMATS:
        raise EncodingFailure(f"Unsupported output format: {encoding.format}")

    pixels = image.pixels
    if pixels.mode not in WRITABLE_MODES[encoding.format]:
        pixels = pixels.convert("RGB")

    save_kwargs = {"format": PIL_FORMATS[encoding.format]}
    if encoding.format == "jpeg" and encoding.quality is not None:
        save_kwargs["quality"] = encoding.quality

    buf = io.BytesIO()
    try:
        pixels.save(buf, **save_kwargs)
    except (OSError, ValueError) as exc:
        logger.error("Error encoding image to %s: %s", encoding.format, exc)
        raise EncodingFailure(f"Could not encode image: {exc}")

    return EncodedImage(data=buf.getvalue(), content_type=encoding.content_type)
