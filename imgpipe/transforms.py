"""
Transform dispatch: apply a resolved parameter set to a decoded image using
Pillow's primitives.
"""

import logging

from PIL import Image, ImageOps

from imgpipe.errors import OutOfBounds
from imgpipe.models import DecodedImage
from imgpipe.params import (
    CompressParams,
    ConvertParams,
    CropParams,
    FlipParams,
    ResizeParams,
    RotateParams,
)

logger = logging.getLogger(__name__)

# Pillow's ROTATE_* transposes turn counter-clockwise.
ROTATIONS = {
    90: Image.Transpose.ROTATE_90,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_270,
}


def scaled_size(src_size, width: int, height: int):
    """Fill in a zero side so the source aspect ratio is preserved."""
    src_w, src_h = src_size
    if width == 0:
        width = max(1, int(src_w * height / src_h + 0.5))
    elif height == 0:
        height = max(1, int(src_h * width / src_w + 0.5))
    return width, height


def resize(image: DecodedImage, params: ResizeParams) -> DecodedImage:
    size = scaled_size(image.size, params.target_width, params.target_height)
    logger.info("Resizing %dx%d to %dx%d", image.width, image.height, *size)
    return image.with_pixels(image.pixels.resize(size, Image.Resampling.LANCZOS))


def passthrough(image: DecodedImage, params) -> DecodedImage:
    # Compress and convert only change how the buffer is encoded.
    return image


def flip(image: DecodedImage, params: FlipParams) -> DecodedImage:
    if params.axis == "horizontal":
        return image.with_pixels(ImageOps.mirror(image.pixels))
    return image.with_pixels(ImageOps.flip(image.pixels))


def rotate(image: DecodedImage, params: RotateParams) -> DecodedImage:
    return image.with_pixels(image.pixels.transpose(ROTATIONS[params.angle_degrees]))


def crop(image: DecodedImage, params: CropParams) -> DecodedImage:
    left, top, right, bottom = params.box
    if right > image.width or bottom > image.height:
        raise OutOfBounds(
            f"Crop rectangle ({left}, {top}, {right}, {bottom}) exceeds "
            f"image bounds {image.width}x{image.height}"
        )
    return image.with_pixels(image.pixels.crop(params.box))


TRANSFORMS = {
    ResizeParams: resize,
    CompressParams: passthrough,
    ConvertParams: passthrough,
    FlipParams: flip,
    RotateParams: rotate,
    CropParams: crop,
}


def apply(image: DecodedImage, params) -> DecodedImage:
    """Run the transform matching ``params`` and return a new image."""
    try:
        transform = TRANSFORMS[type(params)]
    except KeyError:
        raise TypeError(f"No transform registered for {type(params).__name__}")
    return transform(image, params)
