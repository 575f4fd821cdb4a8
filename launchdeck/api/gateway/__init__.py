"""Gateway module - direct and privileged command execution channels."""

from .AuthenticationError import AuthenticationError
from .CommandRunner import CommandRunner
from .PrivilegedRunner import PrivilegedRunner
from .run_command import run_command

__all__ = ["AuthenticationError", "CommandRunner", "PrivilegedRunner", "run_command"]
