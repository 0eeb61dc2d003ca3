"""Shared schema base (camelCase JSON) and the uniform response envelope."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for API bodies: camelCase on the wire, snake_case accepted on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapping every response, successful or not."""

    success: bool = Field(..., description="False when the request failed")
    message: str = Field(default="Success", description="Human-readable outcome")
    data: T | None = Field(default=None, description="Payload; null on errors")

    @classmethod
    def ok(cls, data: T | None = None, message: str = "Success") -> "ApiResponse[T]":
        return cls(success=True, message=message, data=data)

    @classmethod
    def error(cls, message: str) -> "ApiResponse[None]":
        return cls(success=False, message=message, data=None)
