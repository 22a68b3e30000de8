from typing import Optional

from fastapi import status
from src.libs.result import Error

INTERNAL_ERROR_MESSAGE = "Internal server error"


class ApiError(Exception):
    """A use case Error bound to the HTTP status it is reported with"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, base_error: Error, status_code: Optional[int] = None):
        self.base_error = base_error
        if status_code is not None:
            self.status_code = status_code
        super().__init__(base_error.message)

    def to_body(self, debug: bool = False) -> dict:
        error = self.base_error
        body = {"code": error.code, "message": error.message}
        if error.details:
            body["details"] = list(error.details)
        return {"error": body}


class ClientError(ApiError):
    """4xx: the caller can fix the request. Message and details are returned as-is."""

    status_code = status.HTTP_400_BAD_REQUEST


class ServerError(ApiError):
    """5xx: details stay in the log; the message is opaque unless debugging"""

    def to_body(self, debug: bool = False) -> dict:
        message = self.base_error.message if debug else INTERNAL_ERROR_MESSAGE
        return {"error": {"code": self.base_error.code, "message": message}}
