"""
Per-operation orchestration: extract -> resolve -> apply -> encode.

Any stage may raise a PipelineError; nothing is retried and no partial image
is ever returned.
"""

import io
import logging

from flask import request, send_file

from imgpipe import encoder, extractor, transforms
from imgpipe.errors import PipelineError
from imgpipe.models import TransformResult
from imgpipe.params import RESOLVERS

logger = logging.getLogger(__name__)


def transform(req, operation: str) -> TransformResult:
    """Run the extract, resolve and apply stages for ``operation``."""
    resolve = RESOLVERS[operation]
    image = extractor.extract(req)
    params = resolve(req.args)
    out = transforms.apply(image, params)
    return TransformResult(image=out, encoding=params.target_encoding())


def run(operation: str, req=None):
    """Handle one request end to end and return the Flask response."""
    req = req if req is not None else request
    try:
        result = transform(req, operation)
        encoded = encoder.encode(result.image, result.encoding)
    except PipelineError as exc:
        level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
        logger.log(level, "%s failed (%s): %s", operation, exc.kind, exc.message)
        raise

    logger.info(
        "Successfully completed %s: %dx%d as %s",
        operation,
        result.image.width,
        result.image.height,
        encoded.content_type,
    )
    return send_file(io.BytesIO(encoded.data), mimetype=encoded.content_type)
