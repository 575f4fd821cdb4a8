"""Errors raised while reading or saving a launch item definition."""


class DocumentError(Exception):
    """Base class for definition document failures."""


class InvalidFormat(DocumentError):
    """The bytes are not a property list dictionary."""

    def __init__(self, detail: str = ""):
        self.detail = detail
        message = "File is not a valid property list"
        super().__init__(f"{message}: {detail}" if detail else message)


class MissingIdentifier(DocumentError):
    """The property list has no usable Label key."""

    def __init__(self) -> None:
        super().__init__("Property list has no Label key")


class ReadOnlyDocument(DocumentError):
    """The edit session belongs to a definition that may not be modified."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"{path} is read only")
