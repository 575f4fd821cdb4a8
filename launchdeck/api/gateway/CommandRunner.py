"""Command runner contract shared by the direct and privileged channels."""

from collections.abc import Callable

# (command path, arguments) -> (succeeded, combined stdout and stderr)
CommandRunner = Callable[[str, list[str]], tuple[bool, str]]
