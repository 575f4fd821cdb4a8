"""Privileged command execution through an administrator prompt."""

import shlex
import subprocess

from ...logging_config import get_logger
from .AuthenticationError import AuthenticationError

logger = get_logger("gateway")

# osascript reports a dismissed password dialog as error -128
_CANCEL_MARKERS = ("(-128)", "User canceled", "User cancelled")


def build_shell_command(command: str, arguments: list[str]) -> str:
    """Quote the command line for the shell that ``do shell script`` spawns."""
    return shlex.join([command, *arguments])


def build_apple_script(shell_command: str) -> str:
    """Embed a shell command in an AppleScript string literal."""
    escaped = shell_command.replace("\\", "\\\\").replace('"', '\\"')
    return f'do shell script "{escaped}" with administrator privileges'


class PrivilegedRunner:
    """Run commands as root, asking for the administrator password each time.

    Every call shows its own prompt; no authorization is cached between calls.
    """

    def __init__(self, osascript_path: str = "/usr/bin/osascript", timeout: float | None = None):
        self.osascript_path = osascript_path
        self.timeout = timeout

    def __call__(self, command: str, arguments: list[str]) -> tuple[bool, str]:
        """Run ``command`` with elevated privileges.

        Returns:
            (exit status was 0, stdout if any, otherwise stderr)

        Raises:
            AuthenticationError: If the user declined the prompt
        """
        script = build_apple_script(build_shell_command(command, arguments))
        logger.debug("Running with privileges: %s %s", command, " ".join(arguments))
        try:
            completed = subprocess.run(
                [self.osascript_path, "-e", script],
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning("Privileged command timed out after %ss: %s", self.timeout, command)
            return False, f"{command} timed out after {self.timeout} seconds"
        except OSError as e:
            logger.warning("Failed to execute privileged command %s: %s", command, e)
            return False, f"Failed to execute privileged command: {e}"

        stdout = completed.stdout or ""
        stderr = completed.stderr or ""
        if completed.returncode != 0 and any(marker in stderr for marker in _CANCEL_MARKERS):
            raise AuthenticationError(stderr.strip())
        return completed.returncode == 0, stdout if stdout else stderr
