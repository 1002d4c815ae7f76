"""Errors raised while decoding a request body.

RequestBodyError carries ``code = 400`` so the error mapper renders it as
``{"code": 400, "message": ...}`` like any other coded failure.
"""


class RequestBodyError(Exception):
    """Request body that cannot be decoded into a JSON object.

    Attributes:
        message: Human-readable description of the problem.
        code: Always 400.
    """

    code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
