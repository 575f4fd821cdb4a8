"""Launch item scopes."""

import os
import pwd
from enum import Enum
from pathlib import Path


class Scope(str, Enum):
    """Storage and privilege tier of a launch item definition."""

    USER_AGENT = "user_agent"
    SYSTEM_AGENT = "system_agent"
    SYSTEM_DAEMON = "system_daemon"

    @property
    def title(self) -> str:
        return {
            Scope.USER_AGENT: "User Agent",
            Scope.SYSTEM_AGENT: "System Agent",
            Scope.SYSTEM_DAEMON: "System Daemon",
        }[self]

    @property
    def directory(self) -> Path:
        """Default definition directory for the scope."""
        if self is Scope.USER_AGENT:
            home = os.environ.get("HOME")
            if not home:
                home = pwd.getpwuid(os.getuid()).pw_dir
            return Path(home) / "Library" / "LaunchAgents"
        if self is Scope.SYSTEM_AGENT:
            return Path("/Library/LaunchAgents")
        return Path("/Library/LaunchDaemons")

    @property
    def requires_privilege(self) -> bool:
        return self is not Scope.USER_AGENT

    def domain(self, uid: int) -> str:
        """launchctl domain target for the scope."""
        if self is Scope.USER_AGENT:
            return f"gui/{uid}"
        return "system"
