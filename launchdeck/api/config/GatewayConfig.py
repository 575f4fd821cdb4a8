"""Command gateway configuration."""

from pydantic import BaseModel, ConfigDict, Field


class GatewayConfig(BaseModel):
    """Paths of the external programs launchdeck drives, and their time limit."""

    model_config = ConfigDict(extra="forbid")

    launchctl_path: str = Field("/bin/launchctl", description="Service manager executable")
    rm_path: str = Field("/bin/rm", description="Executable used to remove files with elevated privileges")
    osascript_path: str = Field("/usr/bin/osascript", description="Executable used to request administrator privileges")
    command_timeout_secs: float | None = Field(
        None, gt=0, description="Kill external commands running longer than this; no limit when unset"
    )
