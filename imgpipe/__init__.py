"""
imgpipe - on-demand image transformation over HTTP.

Pipeline stages: extractor (upload -> DecodedImage), params (query ->
parameter model), transforms (Pillow primitives), encoder (pixels -> bytes)
and pipeline (orchestration), exposed through the ``routes`` blueprint.
"""

__version__ = "1.0.0"
