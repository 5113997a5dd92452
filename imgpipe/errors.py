"""
Error taxonomy for the transform pipeline.

Every stage raises one of these; the application turns them into a JSON
error body with the matching HTTP status.
"""


class PipelineError(Exception):
    """Base class for classified pipeline failures."""

    kind = "PipelineError"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message, "kind": self.kind}


class MethodNotAllowed(PipelineError):
    kind = "MethodNotAllowed"
    status_code = 405


class MissingFile(PipelineError):
    kind = "MissingFile"


class MalformedUpload(MissingFile):
    kind = "MalformedUpload"


class UnsupportedOrCorruptImage(PipelineError):
    kind = "UnsupportedOrCorruptImage"


class InvalidParameter(PipelineError):
    """A required operation parameter is absent, unparsable or out of range."""

    kind = "InvalidParameter"

    def __init__(self, parameter: str, message: str, accepted=None):
        super().__init__(message)
        self.parameter = parameter
        self.accepted = list(accepted) if accepted else []

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["parameter"] = self.parameter
        if self.accepted:
            body["accepted"] = self.accepted
        return body


class OutOfBounds(PipelineError):
    kind = "OutOfBounds"


class EncodingFailure(PipelineError):
    kind = "EncodingFailure"
    status_code = 500
