"""
Request-scoped values passed between pipeline stages.

Nothing here is mutated after construction: each stage builds a new value.
"""

from dataclasses import dataclass
from typing import Optional

from PIL import Image

CONTENT_TYPES = {
    "jpeg": "image/jpeg",
    "png": "image/png",
}


@dataclass(frozen=True)
class DecodedImage:
    """An in-memory pixel buffer plus the encoding it was decoded from."""

    pixels: Image.Image
    encoding: str

    @property
    def width(self) -> int:
        return self.pixels.width

    @property
    def height(self) -> int:
        return self.pixels.height

    @property
    def size(self):
        return self.pixels.size

    def with_pixels(self, pixels: Image.Image) -> "DecodedImage":
        return DecodedImage(pixels=pixels, encoding=self.encoding)


@dataclass(frozen=True)
class TargetEncoding:
    """Output format and, for JPEG, an explicit quality (None = codec default)."""

    format: str = "jpeg"
    quality: Optional[int] = None

    @property
    def content_type(self) -> str:
        return CONTENT_TYPES[self.format]


@dataclass(frozen=True)
class TransformResult:
    image: DecodedImage
    encoding: TargetEncoding


@dataclass(frozen=True)
class EncodedImage:
    data: bytes
    content_type: str
