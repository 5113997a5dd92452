"""
Route table for the image service, mounted under ``/api``.
"""

from flask import Blueprint, jsonify

from imgpipe import pipeline

API_PREFIX = "/api"

api = Blueprint("api", __name__, url_prefix=API_PREFIX)


@api.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "ok"})


@api.route("/resize", methods=["POST"])
def resize():
    """Resize to ``width`` x ``height``; a missing side keeps the aspect ratio."""
    return pipeline.run("resize")


@api.route("/compress", methods=["POST"])
def compress():
    """Re-encode as JPEG at ``quality`` (1-100, default 75)."""
    return pipeline.run("compress")


@api.route("/convert", methods=["POST"])
def convert():
    """Re-encode as ``format`` (jpeg, jpg or png)."""
    return pipeline.run("convert")


@api.route("/flip", methods=["POST"])
def flip():
    return pipeline.run("flip")


@api.route("/rotate", methods=["POST"])
def rotate():
    return pipeline.run("rotate")


@api.route("/crop", methods=["POST"])
def crop():
    return pipeline.run("crop")
