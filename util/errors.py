# util/errors.py
from typing import Any
from fastapi import HTTPException, status


class AppError(HTTPException):
    # Flow: raise AppError to short-circuit with a typed status & message.
    def __init__(
        self, message: str, http_status: int = status.HTTP_400_BAD_REQUEST
    ) -> None:
        super().__init__(status_code=http_status, detail=message)


class UpstreamError(Exception):
    """
    Non-2xx answer from an APS endpoint.
    Raised by the core clients; services only ever branch on the subclass.
    """

    def __init__(
        self, message: str, status_code: int, payload: Any | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


class NotFoundError(UpstreamError):
    # Expected absence (bucket, object or manifest); callers decide whether it is benign.
    def __init__(self, message: str, payload: Any | None = None) -> None:
        super().__init__(message, status.HTTP_404_NOT_FOUND, payload)
