"""Config API module."""

from .GatewayConfig import GatewayConfig
from .LaunchdeckConfig import LaunchdeckConfig
from .LogConfig import LogConfig
from .ScopesConfig import ScopesConfig

__all__ = ["GatewayConfig", "LaunchdeckConfig", "LogConfig", "ScopesConfig"]
