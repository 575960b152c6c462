"""Pydantic model for the Problem document schema."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Problem(BaseModel):
    """Model of the RFC7807 Problem document.

    Members beyond the five defined by RFC7807 are extension members; they are
    allowed and kept as-is in `model_extra`. Validation is strict, so a status
    of `"404"`, `404.0` or `true` is rejected rather than coerced.
    """

    model_config = ConfigDict(extra='allow', strict=True, frozen=True)

    type: Optional[str] = Field(
        None, description='URI reference identifying the problem type. Defaults to "about:blank".',
    )
    title: Optional[str] = Field(None, description='Short, human-readable summary of the problem type.')
    status: Optional[int] = Field(None, description='HTTP status code for this occurrence of the problem.')
    detail: Optional[str] = Field(None, description='Human-readable explanation specific to this occurrence.')
    instance: Optional[str] = Field(None, description='URI reference identifying this occurrence.')


def json_schema(name: str = 'Problem') -> Dict[str, Any]:
    """Get the JSON Schema for an RFC7807 Problem document.

    This is useful for documenting `application/problem+json` responses in
    an OpenAPI description.

    Args:
        name: The title to give the schema.

    Returns:
        The JSON Schema, as a dictionary.
    """
    schema = Problem.model_json_schema()
    schema['title'] = name
    schema['additionalProperties'] = True
    return schema
