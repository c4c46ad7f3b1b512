"""Wire models for the click endpoint."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator

Answer = str | None
"""One prompt answer; ``None`` means the user cancelled that prompt."""


class ClickRequest(BaseModel):
    """Body of ``POST /``: which button was clicked and the prompt answers."""

    id: int = Field(ge=0, strict=True)
    answers: list[Answer] = Field(
        default_factory=list,
        validation_alias=AliasChoices("answers", "extra_responses"),
    )

    @field_validator("answers", mode="before")
    @classmethod
    def _null_means_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class ClickResponse(BaseModel):
    """Body returned for every dispatched click."""

    message: str

    @classmethod
    def from_value(cls, value: object) -> ClickResponse:
        """Wrap a handler's return value (``str`` or ``ClickResponse``)."""
        if isinstance(value, ClickResponse):
            return value
        if isinstance(value, str):
            return cls(message=value)
        msg = f"button handler must return str or ClickResponse, got {type(value).__name__}"
        raise TypeError(msg)
