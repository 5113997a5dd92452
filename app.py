"""
Image Transformation API
Python/Flask backend using Pillow for image processing.

Endpoints (all under /api):
  GET  /health    – Liveness check.
  POST /resize    – Resize to width/height (aspect ratio kept for a missing side).
  POST /compress  – Re-encode as JPEG at a given quality.
  POST /convert   – Re-encode as JPEG or PNG.
  POST /flip      – Mirror horizontally or vertically.
  POST /rotate    – Rotate by 90, 180 or 270 degrees.
  POST /crop      – Extract an x/y/width/height rectangle.

Every transform endpoint takes the upload in the multipart field "image".
"""

import logging
import os

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from imgpipe.errors import PipelineError
from imgpipe.routes import api

logging.basicConfig(
    level=getattr(logging, os.environ.get("LOG_LEVEL", "INFO").upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

DEFAULT_PORT = 8080

ALLOWED_METHODS = ["POST", "GET", "OPTIONS", "PUT", "DELETE"]
ALLOWED_HEADERS = [
    "Accept",
    "Content-Type",
    "Content-Length",
    "Accept-Encoding",
    "X-CSRF-Token",
    "Authorization",
]

app = Flask(__name__)
CORS(
    app,
    origins="*",
    send_wildcard=True,
    methods=ALLOWED_METHODS,
    allow_headers=ALLOWED_HEADERS,
)

# Maximum allowed multipart form size (32 MB)
app.config["MAX_CONTENT_LENGTH"] = 32 * 1024 * 1024

app.register_blueprint(api)


@app.before_request
def preflight():
    """Answer OPTIONS for any path with an empty 200."""
    if request.method == "OPTIONS":
        return "", 200
    return None


@app.after_request
def cors_headers(resp):
    """Advertise the allowed methods and headers on every response."""
    resp.headers["Access-Control-Allow-Methods"] = ", ".join(ALLOWED_METHODS)
    resp.headers["Access-Control-Allow-Headers"] = ", ".join(ALLOWED_HEADERS)
    return resp


@app.errorhandler(PipelineError)
def handle_pipeline_error(exc):
    return jsonify(exc.to_dict()), exc.status_code


@app.errorhandler(HTTPException)
def handle_http_error(exc):
    return jsonify({"error": exc.description, "kind": exc.name.replace(" ", "")}), exc.code


if __name__ == "__main__":
    port = int(os.environ.get("PORT", DEFAULT_PORT))
    logger.info("Starting server on http://localhost:%d", port)
    app.run(debug=False, host="0.0.0.0", port=port)
