"""Direct (unprivileged) command execution."""

import subprocess

from ...logging_config import get_logger

logger = get_logger("gateway")


def run_command(command: str, arguments: list[str], timeout: float | None = None) -> tuple[bool, str]:
    """Run ``command`` with ``arguments`` and wait for it to exit.

    Never raises for a failing or missing program: a spawn error or a timeout
    is returned as an unsuccessful result whose output describes it.

    Returns:
        (exit status was 0, stdout followed by stderr)
    """
    logger.debug("Running: %s %s", command, " ".join(arguments))
    try:
        completed = subprocess.run(
            [command, *arguments],
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        logger.warning("Command timed out after %ss: %s", timeout, command)
        return False, f"{command} timed out after {timeout} seconds"
    except OSError as e:
        logger.warning("Command could not be started: %s (%s)", command, e)
        return False, str(e)

    output = (completed.stdout or "") + (completed.stderr or "")
    logger.debug("Command finished with status %s: %s", completed.returncode, output[:200])
    return completed.returncode == 0, output
