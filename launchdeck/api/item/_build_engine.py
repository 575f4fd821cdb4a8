"""Create the engine used by the item commands."""

from ..config.LaunchdeckConfig import LaunchdeckConfig
from .Engine import Engine


def _build_engine() -> Engine:
    """Build an engine from the on-disk configuration.

    Raises:
        ValueError: If the configuration file is invalid
    """
    return Engine.from_config(LaunchdeckConfig.load())
