from datetime import datetime
from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from .errors import RequestValidationFailed

ContentType = Literal["blog", "social", "email", "product"]
Length = Literal["short", "medium", "long"]

CONTENT_TYPES = ("blog", "social", "email", "product")
LENGTHS = ("short", "medium", "long")


class GenerateRequest(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    content_type: ContentType = Field(..., alias="contentType", description="Kind of content to write")
    prompt: str = Field(..., max_length=1000, description="Topic or brief for the content")
    tone: str = Field(..., min_length=1, description="Tone/style guidance, e.g. 'professional'")
    length: Length = Field(..., description="Content density: short, medium or long")

    @field_validator("prompt")
    @classmethod
    def _prompt_required(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("prompt_required", "Prompt is required")
        return value


class HistoryEntry(BaseModel):
    """A completed generation as remembered by the client."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    text: str
    content_type: ContentType = Field(..., alias="contentType")
    prompt: str
    created_at: datetime = Field(..., alias="createdAt")


def _error_details(exc: ValidationError) -> List[Dict[str, Any]]:
    details = []
    for err in exc.errors():
        loc = err.get("loc") or ()
        details.append(
            {
                "field": ".".join(str(part) for part in loc) if loc else "body",
                "message": err.get("msg", "Invalid value"),
                "type": err.get("type", "value_error"),
            }
        )
    return details


def validate_generation_request(body: Any) -> GenerateRequest:
    """Check a decoded JSON body against the generation schema.

    Raises RequestValidationFailed carrying one entry per violated field;
    nothing else happens on failure.
    """
    try:
        return GenerateRequest.model_validate(body)
    except ValidationError as exc:
        raise RequestValidationFailed(_error_details(exc)) from exc
