"""Error response body.

Success responses are plain resource bodies (user, list of users, token
envelope). Every error is rendered in this format:
{
    "error": "Invalid credentials",
    "code": 1003,
    "details": null,
    "request_id": "req_..."
}
"""

import uuid

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    error: str
    code: int
    details: str | None = None
    request_id: str = Field(default_factory=lambda: f"req_{uuid.uuid4().hex[:12]}")


def error_response(code: int, message: str, details: str | None = None) -> ErrorResponse:
    return ErrorResponse(error=message, code=code, details=details)
