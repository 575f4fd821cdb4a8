"""Output schemas for document commands."""

from typing import Any

from pydantic import Field

from ._base import BaseOutputSchema
from ._registry import register_output_schema


class DocumentShowOutput(BaseOutputSchema):
    path: str = Field(..., description="Definition file")
    valid: bool = Field(..., description="Whether the file parsed as a definition")
    label: str = Field(..., description="Declared label, empty string when invalid")
    fields: dict[str, Any] = Field(..., description="Structured fields keyed by attribute name")
    opaque_keys: list[str] = Field(..., description="Keys preserved without interpretation")
    raw: str = Field(..., description="Original text when requested, otherwise empty string")


register_output_schema("document", "show", DocumentShowOutput)
