"""Registration helper shared by the schema modules."""

from pydantic import BaseModel

from ..schema_registry import schema_registry


def register_output_schema(domain: str, command_name: str, schema_class: type[BaseModel]) -> None:
    schema_registry.register_output_schema(domain, command_name, schema_class)
