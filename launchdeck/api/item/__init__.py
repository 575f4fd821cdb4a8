"""Item module - launch item discovery, status and the reconciliation engine."""

from .Engine import Engine, validate_definition
from .EngineError import CommandFailure, CopyFailed, EngineError, IOFailure, ReplaceConfirmationRequired
from .InstallResult import InstallResult
from .ItemStatus import ItemStatus
from .Scope import Scope
from .ServiceItem import ServiceItem
from .StatusProber import StatusProber
from .filter_items import filter_items
from .scan_scope import ScanResult, ScopeDiagnostic, scan_scope

__all__ = [
    "CommandFailure",
    "CopyFailed",
    "Engine",
    "EngineError",
    "IOFailure",
    "InstallResult",
    "ItemStatus",
    "ReplaceConfirmationRequired",
    "ScanResult",
    "Scope",
    "ScopeDiagnostic",
    "ServiceItem",
    "StatusProber",
    "filter_items",
    "scan_scope",
    "validate_definition",
]
