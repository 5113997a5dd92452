"""
Shared fixtures for the image transformation tests.
"""

import io

import pytest
from PIL import Image

from app import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def make_image_bytes(width=10, height=10, color=(128, 64, 32), fmt="PNG", mode="RGB"):
    """Return raw bytes of a solid-colour image."""
    img = Image.new(mode, (width, height), color)
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


def upload(img_bytes, filename="test.png"):
    """Multipart form data carrying ``img_bytes`` in the "image" field."""
    return {"image": (io.BytesIO(img_bytes), filename)}


def decode_response(resp):
    return Image.open(io.BytesIO(resp.data))
