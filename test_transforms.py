"""
Tests for transform dispatch on in-memory images.
"""

import pytest
from PIL import Image

from imgpipe import transforms
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

RED = (255, 0, 0)
BLUE = (0, 0, 255)


def _image(width=10, height=10, color=(0, 0, 0)):
    return DecodedImage(pixels=Image.new("RGB", (width, height), color), encoding="png")


def _red_blue():
    """2x1 image: red on the left, blue on the right."""
    img = Image.new("RGB", (2, 1))
    img.putpixel((0, 0), RED)
    img.putpixel((1, 0), BLUE)
    return DecodedImage(pixels=img, encoding="png")


@pytest.mark.parametrize(
    "src,target,expected",
    [
        ((10, 10), (5, 5), (5, 5)),
        ((40, 30), (500, 0), (500, 375)),
        ((40, 10), (0, 20), (80, 20)),
        ((3, 2), (4, 0), (4, 3)),
        ((1000, 1), (10, 0), (10, 1)),
    ],
)
def test_resize(src, target, expected):
    params = ResizeParams(target_width=target[0], target_height=target[1])
    out = transforms.apply(_image(*src), params)
    assert out.size == expected


def test_resize_does_not_touch_source():
    src = _image(10, 10)
    transforms.apply(src, ResizeParams(target_width=5, target_height=5))
    assert src.size == (10, 10)


@pytest.mark.parametrize("params", [CompressParams(quality=10), ConvertParams(target_format="png")])
def test_passthrough_keeps_pixels(params):
    src = _image(7, 3)
    assert transforms.apply(src, params) is src


def test_flip_horizontal():
    out = transforms.apply(_red_blue(), FlipParams(axis="horizontal"))
    assert out.pixels.getpixel((0, 0)) == BLUE
    assert out.size == (2, 1)


def test_flip_vertical():
    img = Image.new("RGB", (1, 2))
    img.putpixel((0, 0), RED)
    img.putpixel((0, 1), BLUE)
    out = transforms.apply(DecodedImage(pixels=img, encoding="png"), FlipParams(axis="vertical"))
    assert out.pixels.getpixel((0, 0)) == BLUE


def test_rotate_90_is_counter_clockwise():
    out = transforms.apply(_red_blue(), RotateParams(angle_degrees=90))
    assert out.size == (1, 2)
    assert out.pixels.getpixel((0, 0)) == BLUE


@pytest.mark.parametrize("angle,size", [(90, (3, 8)), (180, (8, 3)), (270, (3, 8))])
def test_rotate_sizes(angle, size):
    out = transforms.apply(_image(8, 3), RotateParams(angle_degrees=angle))
    assert out.size == size


def test_crop_extracts_rectangle():
    src = _red_blue()
    out = transforms.apply(src, CropParams(origin_x=1, origin_y=0, width=1, height=1))
    assert out.size == (1, 1)
    assert out.pixels.getpixel((0, 0)) == BLUE


def test_crop_full_image_is_allowed():
    out = transforms.apply(_image(10, 10), CropParams(origin_x=0, origin_y=0, width=10, height=10))
    assert out.size == (10, 10)


@pytest.mark.parametrize("x,y,w,h", [(8, 0, 5, 5), (0, 6, 5, 5), (10, 0, 1, 1), (0, 0, 11, 10)])
def test_crop_out_of_bounds(x, y, w, h):
    with pytest.raises(OutOfBounds):
        transforms.apply(_image(10, 10), CropParams(origin_x=x, origin_y=y, width=w, height=h))


def test_apply_rejects_unknown_params():
    with pytest.raises(TypeError):
        transforms.apply(_image(), object())
