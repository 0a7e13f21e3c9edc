"""
Pydantic models for the analyze endpoint

Includes the inbound request body, the per-request parameters resolved from
it, and the response bodies.
"""
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator


# Accepted string forms for reduce_metadata (compared case-insensitively)
BOOLEAN_STRINGS = frozenset({"true", "false", "1", "0"})

# One message per body field, reported instead of pydantic's own wording
FIELD_MESSAGES = {
    "dynamic_field": "dynamic_field must be a string",
    "ai_prompt": "ai_prompt must be a string",
    "reduce_metadata": "reduce_metadata must be a boolean",
    "ai_temperature": "ai_temperature must be a float >= 0",
}


class AnalyzeRequest(BaseModel):
    """Request body for POST /azureopenai/tickets/{ticket_id}/analyze"""
    model_config = ConfigDict(extra="ignore")

    dynamic_field: Optional[StrictStr] = Field(
        None, description="Dynamic field to write the summary into"
    )
    ai_prompt: Optional[StrictStr] = Field(
        None, description="System prompt overriding the configured default"
    )
    reduce_metadata: Optional[Union[StrictBool, StrictStr]] = Field(
        None, description="Reduce the ticket before summarization (default true)"
    )
    ai_temperature: Optional[float] = Field(
        None, ge=0, allow_inf_nan=False, description="Sampling temperature"
    )

    @field_validator("reduce_metadata")
    @classmethod
    def validate_boolean_form(cls, value):
        """Strings are only accepted in their boolean forms"""
        if isinstance(value, str) and value.lower() not in BOOLEAN_STRINGS:
            raise ValueError(FIELD_MESSAGES["reduce_metadata"])
        return value

    @field_validator("ai_temperature", mode="before")
    @classmethod
    def reject_boolean_temperature(cls, value):
        """JSON true/false would otherwise coerce to 1.0/0.0"""
        if isinstance(value, bool):
            raise ValueError(FIELD_MESSAGES["ai_temperature"])
        return value


class AnalysisParameters(BaseModel):
    """Effective parameters of one analyze request"""
    model_config = ConfigDict(frozen=True)

    dynamic_field: str
    prompt: str
    reduce_metadata: bool
    temperature: float


class MessageResponse(BaseModel):
    """Plain message response (202, 404, 500 and invalid ticket id)"""
    message: str


class ValidationErrorItem(BaseModel):
    """One violation of the request body"""
    type: str = "field"
    location: str = "body"
    path: str
    value: Optional[Any] = None
    msg: str


class ValidationErrorResponse(BaseModel):
    """400 response listing every body violation"""
    errors: List[ValidationErrorItem]


def build_validation_errors(errors: List[Dict[str, Any]]) -> ValidationErrorResponse:
    """
    Collapse pydantic errors into one item per offending body field

    Union members (reduce_metadata) report one error each; only the first
    error per field is kept. Body-level errors (invalid JSON, non-object
    body) are reported with an empty path.
    """
    items: List[ValidationErrorItem] = []
    seen = set()

    for error in errors:
        loc = tuple(error.get("loc", ()))
        field = loc[1] if len(loc) > 1 and isinstance(loc[1], str) else ""
        if field in seen:
            continue
        seen.add(field)

        items.append(ValidationErrorItem(
            path=field,
            value=error.get("input") if field else None,
            msg=FIELD_MESSAGES.get(field, error.get("msg", "Invalid value"))
        ))

    return ValidationErrorResponse(errors=items)
