"""Request and response schemas for the HTTP API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class AnalyzeRequest(BaseModel):
    """Body of ``POST /api``.

    ``content`` defaults to an empty string and unknown keys are ignored,
    so ``{}`` is a valid (if uninteresting) request.  JSON ``null``, either
    as the whole body or as ``content``, is read the same way.
    """

    model_config = ConfigDict(extra="ignore")

    content: str = ""

    @model_validator(mode="before")
    @classmethod
    def _null_body(cls, data: Any) -> Any:
        return {} if data is None else data

    @field_validator("content", mode="before")
    @classmethod
    def _null_content(cls, value: Any) -> Any:
        return "" if value is None else value


class ErrorResponse(BaseModel):
    """Opaque error body.  Never carries internal detail."""

    error: str
    detail: str
