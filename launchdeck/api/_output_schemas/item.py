"""Output schemas for item commands."""

from typing import Any

from pydantic import Field

from ._base import BaseOutputSchema
from ._registry import register_output_schema


class ItemListOutput(BaseOutputSchema):
    """Output schema for item list command."""
    scope: str = Field(..., description="Scope filter, empty string for all scopes")
    search: str = Field(..., description="Search text, empty string for none")
    count: int = Field(..., description="Number of items listed")
    items: list[dict[str, Any]] = Field(..., description="Items in display order")


class _ItemTransitionOutput(BaseOutputSchema):
    label: str = Field(..., description="Label, name or path the item was requested by")
    action: str = Field(..., description="Transition applied")
    item: dict[str, Any] = Field(..., description="Item as last probed, empty if not found")


class ItemLoadOutput(_ItemTransitionOutput):
    """Output schema for item load command."""


class ItemUnloadOutput(_ItemTransitionOutput):
    """Output schema for item unload command."""


class ItemEnableOutput(_ItemTransitionOutput):
    """Output schema for item enable command."""


class ItemDisableOutput(_ItemTransitionOutput):
    """Output schema for item disable command."""


class ItemDeleteOutput(BaseOutputSchema):
    """Output schema for item delete command."""
    label: str = Field(..., description="Label, name or path the item was requested by")
    path: str = Field(..., description="Definition file, empty string if not found")
    deleted: bool = Field(..., description="Whether the file was removed")


class ItemInstallOutput(BaseOutputSchema):
    """Output schema for item install command."""
    source: str = Field(..., description="File that was installed")
    label: str = Field(..., description="Label of the installed definition, empty string on error")
    path: str = Field(..., description="Installed path, empty string on error")
    installed: bool = Field(..., description="Whether the file was copied")
    replaced: bool = Field(..., description="Whether an existing file was overwritten")
    started: bool = Field(..., description="Whether enable and load both succeeded")


class ItemEditOutput(BaseOutputSchema):
    """Output schema for item edit command."""
    label: str = Field(..., description="Label, name or path the item was requested by")
    path: str = Field(..., description="Definition file, empty string if not found")
    changed: bool = Field(..., description="Whether the edits changed the serialized document")
    saved: bool = Field(..., description="Whether the file was written")
    reloaded: bool = Field(..., description="Whether the item was unloaded and loaded again")
    fields: dict[str, Any] = Field(..., description="Structured fields after the edit")


class ItemDiagnoseOutput(BaseOutputSchema):
    """Output schema for item diagnose command."""
    scopes: list[dict[str, Any]] = Field(..., description="One entry per scope directory")


register_output_schema("item", "list", ItemListOutput)
register_output_schema("item", "load", ItemLoadOutput)
register_output_schema("item", "unload", ItemUnloadOutput)
register_output_schema("item", "enable", ItemEnableOutput)
register_output_schema("item", "disable", ItemDisableOutput)
register_output_schema("item", "delete", ItemDeleteOutput)
register_output_schema("item", "install", ItemInstallOutput)
register_output_schema("item", "edit", ItemEditOutput)
register_output_schema("item", "diagnose", ItemDiagnoseOutput)
