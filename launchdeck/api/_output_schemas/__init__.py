"""Output schemas for all API domains, registered on import."""

from . import config, document, item

__all__ = ["config", "document", "item"]
