"""
Per-operation parameter resolution.

Each ``resolve_*`` function takes the raw query parameters (any mapping with
``.get``) and returns a frozen, fully defaulted parameter model, or raises
InvalidParameter.

Resize and compress never fail: unparsable or out-of-range input falls back to
a default. Convert, flip, rotate and crop select a discrete choice with no safe
default, so they must be given explicitly.
"""

import logging
import re
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from imgpipe.errors import InvalidParameter
from imgpipe.models import TargetEncoding

logger = logging.getLogger(__name__)

DEFAULT_RESIZE_WIDTH = 500
DEFAULT_QUALITY = 75
MIN_QUALITY = 1
MAX_QUALITY = 100

CONVERT_FORMATS = {"jpeg": "jpeg", "jpg": "jpeg", "png": "png"}
FLIP_DIRECTIONS = ("horizontal", "vertical")
ROTATE_ANGLES = (90, 180, 270)
CROP_FIELDS = ("x", "y", "width", "height")

# Optional sign and ASCII digits only: no whitespace, underscores or other scripts.
INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class OperationParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    def target_encoding(self) -> TargetEncoding:
        return TargetEncoding()


class ResizeParams(OperationParams):
    """Target size; a zero side is derived from the source aspect ratio."""

    target_width: int = Field(ge=0)
    target_height: int = Field(ge=0)


class CompressParams(OperationParams):
    quality: int = Field(ge=MIN_QUALITY, le=MAX_QUALITY)

    def target_encoding(self) -> TargetEncoding:
        return TargetEncoding(format="jpeg", quality=self.quality)


class ConvertParams(OperationParams):
    target_format: Literal["jpeg", "png"]

    def target_encoding(self) -> TargetEncoding:
        return TargetEncoding(format=self.target_format)


class FlipParams(OperationParams):
    axis: Literal["horizontal", "vertical"]


class RotateParams(OperationParams):
    angle_degrees: Literal[90, 180, 270]


class CropParams(OperationParams):
    origin_x: int = Field(ge=0)
    origin_y: int = Field(ge=0)
    width: int = Field(gt=0)
    height: int = Field(gt=0)

    @property
    def box(self):
        return (
            self.origin_x,
            self.origin_y,
            self.origin_x + self.width,
            self.origin_y + self.height,
        )


def parse_int(text: Optional[str]) -> Optional[int]:
    """Parse query-string text as an integer; None when absent or unparsable."""
    if text is None or not INTEGER_RE.fullmatch(text):
        return None
    return int(text)


def resolve_resize(args) -> ResizeParams:
    width = parse_int(args.get("width")) or 0
    height = parse_int(args.get("height")) or 0
    width = max(width, 0)
    height = max(height, 0)

    if width == 0 and height == 0:
        width = DEFAULT_RESIZE_WIDTH

    params = ResizeParams(target_width=width, target_height=height)
    logger.debug("Resolved resize params: %s", params)
    return params


def resolve_compress(args) -> CompressParams:
    quality = parse_int(args.get("quality"))
    if quality is None or not MIN_QUALITY <= quality <= MAX_QUALITY:
        quality = DEFAULT_QUALITY

    params = CompressParams(quality=quality)
    logger.debug("Resolved compress params: %s", params)
    return params


def resolve_convert(args) -> ConvertParams:
    fmt = args.get("format")
    if fmt not in CONVERT_FORMATS:
        raise InvalidParameter(
            "format",
            "Invalid or missing 'format' parameter. Supported formats: jpeg, jpg, png",
            accepted=CONVERT_FORMATS,
        )
    return ConvertParams(target_format=CONVERT_FORMATS[fmt])


def resolve_flip(args) -> FlipParams:
    direction = args.get("direction")
    if direction not in FLIP_DIRECTIONS:
        raise InvalidParameter(
            "direction",
            "Invalid or missing 'direction' parameter. Supported: horizontal, vertical",
            accepted=FLIP_DIRECTIONS,
        )
    return FlipParams(axis=direction)


def resolve_rotate(args) -> RotateParams:
    angle = parse_int(args.get("angle"))
    if angle is None:
        raise InvalidParameter(
            "angle",
            "Invalid 'angle' parameter. Must be an integer.",
            accepted=ROTATE_ANGLES,
        )
    if angle not in ROTATE_ANGLES:
        raise InvalidParameter(
            "angle",
            "Invalid 'angle' parameter. Supported: 90, 180, 270",
            accepted=ROTATE_ANGLES,
        )
    return RotateParams(angle_degrees=angle)


def resolve_crop(args) -> CropParams:
    values = {}
    for name in CROP_FIELDS:
        raw = args.get(name)
        if raw is None:
            raise InvalidParameter(name, f"Missing '{name}' parameter. Crop requires x, y, width, height")
        value = parse_int(raw)
        if value is None:
            raise InvalidParameter(name, f"Invalid '{name}' parameter. Must be an integer.")
        values[name] = value

    try:
        params = CropParams(
            origin_x=values["x"],
            origin_y=values["y"],
            width=values["width"],
            height=values["height"],
        )
    except ValidationError as exc:
        field = exc.errors()[0]["loc"][0]
        name = {"origin_x": "x", "origin_y": "y"}.get(field, field)
        rule = "non-negative" if name in ("x", "y") else "positive"
        raise InvalidParameter(name, f"Invalid '{name}' parameter. Must be a {rule} integer.")

    logger.debug("Resolved crop params: %s", params)
    return params


RESOLVERS = {
    "resize": resolve_resize,
    "compress": resolve_compress,
    "convert": resolve_convert,
    "flip": resolve_flip,
    "rotate": resolve_rotate,
    "crop": resolve_crop,
}
