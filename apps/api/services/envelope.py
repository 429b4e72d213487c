"""Uniform success envelope returned by every endpoint."""

from typing import Any

from pydantic import BaseModel


class ApiResponse(BaseModel):
    status: int
    data: Any = None
    message: str = "Success"
    success: bool = True


def api_response(data: Any, message: str = "Success", status: int = 200) -> ApiResponse:
    """Wrap a handler result in the response envelope."""
    return ApiResponse(status=status, data=data, message=message, success=status < 400)
