"""Output schema registry, keyed by (domain, command)."""

from pydantic import BaseModel


class SchemaRegistry:
    """Maps ``launchdeck.api.<domain>.cmd_<command>`` to the model its output must satisfy."""

    def __init__(self) -> None:
        self._schemas: dict[tuple[str, str], type[BaseModel]] = {}

    def register_output_schema(self, domain: str, command_name: str, schema_class: type[BaseModel]) -> None:
        if not (isinstance(schema_class, type) and issubclass(schema_class, BaseModel)):
            raise TypeError(f"{domain}.{command_name}: output schema must be a pydantic model, got {schema_class!r}")
        key = (domain, command_name)
        if key in self._schemas:
            raise ValueError(f"Schema already registered for {domain}.{command_name}")
        self._schemas[key] = schema_class

    def get_output_schema(self, domain: str, command_name: str) -> type[BaseModel] | None:
        return self._schemas.get((domain, command_name))

    def commands(self, domain: str) -> list[str]:
        """Command names with a registered schema in ``domain``, sorted."""
        return sorted(command for schema_domain, command in self._schemas if schema_domain == domain)


schema_registry = SchemaRegistry()
