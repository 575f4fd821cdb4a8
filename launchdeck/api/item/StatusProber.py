"""Query launchctl for the live state of a label."""

import os
import re

from ...logging_config import get_logger
from ..gateway.CommandRunner import CommandRunner
from .ItemStatus import ItemStatus
from .Scope import Scope

logger = get_logger("prober")

LAUNCHCTL = "/bin/launchctl"

_RUNNING = re.compile(r"state\s*=\s*running", re.IGNORECASE)


class StatusProber:
    """Reads load, run and enablement state through the unprivileged channel.

    Probing never needs elevation, even for system scopes.
    """

    def __init__(self, runner: CommandRunner, launchctl: str = LAUNCHCTL, uid: int | None = None):
        self.runner = runner
        self.launchctl = launchctl
        self.uid = os.getuid() if uid is None else uid

    def domain(self, scope: Scope) -> str:
        return scope.domain(self.uid)

    def probe(self, label: str, scope: Scope) -> tuple[ItemStatus, bool]:
        """Return (status, is_loaded) from ``launchctl print``."""
        ok, output = self.runner(self.launchctl, ["print", f"{self.domain(scope)}/{label}"])
        if not ok:
            logger.debug("%s is not loaded", label)
            return ItemStatus.STOPPED, False
        running = bool(_RUNNING.search(output))
        logger.debug("%s is loaded (running=%s)", label, running)
        return (ItemStatus.RUNNING if running else ItemStatus.STOPPED), True

    def probe_enabled(self, label: str, scope: Scope) -> bool:
        """False only when ``launchctl print-disabled`` lists the label as disabled.

        An unsuccessful query counts as enabled.
        """
        ok, output = self.runner(self.launchctl, ["print-disabled", self.domain(scope)])
        if not ok:
            logger.debug("print-disabled failed for %s; assuming enabled", self.domain(scope))
            return True
        return f'"{label}" => disabled' not in output
