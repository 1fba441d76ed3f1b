from typing import Generic, Literal, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """``{status, message, data}`` body returned by events and courses."""

    status: Literal["success"] = "success"
    message: str
    data: T | None = None
