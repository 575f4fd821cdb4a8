"""Raised when the privileged channel is declined."""


class AuthenticationError(Exception):
    """The user refused, or could not complete, the administrator prompt."""

    def __init__(self, detail: str = ""):
        self.detail = detail
        message = "Authentication failed"
        super().__init__(f"{message}: {detail}" if detail else message)
