"""Output schemas for config commands."""

from typing import Any

from pydantic import Field

from ._base import BaseOutputSchema
from ._registry import register_output_schema


class ConfigShowOutput(BaseOutputSchema):
    section: str = Field(..., description="Requested section, empty string for the whole configuration")
    content: dict[str, Any] = Field(..., description="Section or configuration content")
    config_path: str = Field(..., description="Path to the config file")


register_output_schema("config", "show", ConfigShowOutput)
