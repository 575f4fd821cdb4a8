"""Scope directory overrides."""

from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from ..item.Scope import Scope


class ScopesConfig(BaseModel):
    """Optional replacement directories for the three launch item scopes."""

    model_config = ConfigDict(extra="forbid")

    user_agents: str | None = Field(None, description="Per-user agents directory (default ~/Library/LaunchAgents)")
    system_agents: str | None = Field(None, description="System agents directory (default /Library/LaunchAgents)")
    system_daemons: str | None = Field(None, description="System daemons directory (default /Library/LaunchDaemons)")

    def directory_for(self, scope: "Scope") -> Path:
        """Return the configured directory for a scope, or the scope's own default."""
        from ..item.Scope import Scope

        override = {
            Scope.USER_AGENT: self.user_agents,
            Scope.SYSTEM_AGENT: self.system_agents,
            Scope.SYSTEM_DAEMON: self.system_daemons,
        }[scope]
        if override:
            return Path(override).expanduser()
        return scope.directory
