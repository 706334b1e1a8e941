"""
Uniform response envelope.

Every endpoint, including error handlers, answers with
``{"success": ..., "message": ..., "data": ...}``.
"""

from typing import Any, Generic, Optional, TypeVar

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    success: bool
    message: str
    data: Optional[T] = None


def error_response(status_code: int, message: str, data: Any = None) -> JSONResponse:
    """Build a ``success=false`` envelope for the exception handlers."""
    body = ApiResponse[Any](success=False, message=message, data=data)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))
