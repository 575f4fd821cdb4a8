"""Fields every command output carries."""

from pydantic import BaseModel, ConfigDict, Field


class BaseOutputSchema(BaseModel):
    """Base schema for command outputs.

    Unknown keys are rejected so a misspelled output key fails validation
    instead of silently reaching the JSON/YAML output.
    """

    model_config = ConfigDict(extra="forbid")

    errors: list[str] = Field(default_factory=list, description="Failures that made the command unsuccessful")
    warnings: list[str] = Field(default_factory=list, description="Problems that did not stop the command")
