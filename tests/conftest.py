"""Shared pytest configuration and fixtures for all tests."""

import plistlib
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from launchdeck.api.item.Engine import Engine
from launchdeck.api.item.Scope import Scope

MARKERS = {
    "unit": "fast tests without external programs",
    "smoke": "end-to-end CLI checks",
    "integration": "tests that talk to a real launchd",
    "config": "configuration loading and commands",
    "document": "property list documents",
    "gateway": "command execution channels",
    "item": "launch item discovery and control",
    "cli": "typer command line",
}


def pytest_configure(config):
    for name, description in MARKERS.items():
        config.addinivalue_line("markers", f"{name}: {description}")


def pytest_collection_modifyitems(config, items):
    """Automatically apply markers based on test file location."""
    for item in items:
        path_str = str(item.fspath)
        if "/smoke/" in path_str:
            item.add_marker(pytest.mark.smoke)
        elif "/unit/" in path_str:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in path_str:
            item.add_marker(pytest.mark.integration)


# =============================================================================
# Command Helpers
# =============================================================================


def run_cmd(cmd_func, *args, **kwargs):
    """Execute a cmd function and return the result with progress_callback executed."""
    return cmd_func(*args, **kwargs).drain()


class FakeRunner:
    """Scripted stand-in for a command channel.

    Records every call. Responses are looked up by the first argument
    (the launchctl subcommand); a response may be a ``(ok, output)`` tuple,
    an exception to raise, or a callable taking the argument list.
    """

    DEFAULTS: dict[str, tuple[bool, str]] = {
        "print": (False, "Could not find service in domain for port"),
        "print-disabled": (True, "disabled services = {\n}\n"),
    }

    def __init__(self, responses: dict[str, Any] | None = None):
        self.responses: dict[str, Any] = dict(self.DEFAULTS)
        self.responses.update(responses or {})
        self.calls: list[tuple[str, list[str]]] = []

    def __call__(self, command: str, arguments: list[str]) -> tuple[bool, str]:
        self.calls.append((command, list(arguments)))
        response = self.responses.get(arguments[0] if arguments else "", (True, ""))
        if isinstance(response, BaseException):
            raise response
        if callable(response):
            return response(arguments)
        return response

    def subcommands(self) -> list[str]:
        return [arguments[0] for _, arguments in self.calls if arguments]

    def mutations(self) -> list[list[str]]:
        """Calls other than the status probes."""
        return [arguments for _, arguments in self.calls if arguments and arguments[0] not in self.DEFAULTS]


def loaded_service(running: bool = True) -> Callable[[list[str]], tuple[bool, str]]:
    """A ``print`` response for a loaded service."""
    state = "running" if running else "not running"
    return lambda arguments: (True, f"{arguments[1]} = {{\n\tactive count = 1\n\tstate = {state}\n}}\n")


def write_definition(directory: Path, name: str, label: str | None, **keys: Any) -> Path:
    """Write an XML property list definition and return its path."""
    directory.mkdir(parents=True, exist_ok=True)
    data: dict[str, Any] = {}
    if label is not None:
        data["Label"] = label
    data.update(keys)
    path = directory / name
    path.write_bytes(plistlib.dumps(data, fmt=plistlib.FMT_XML, sort_keys=False))
    return path


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def launchdeck_home(tmp_path, monkeypatch) -> Path:
    """Isolated LAUNCHDECK_HOME with no config file."""
    home = tmp_path / "launchdeck-home"
    home.mkdir()
    monkeypatch.setenv("LAUNCHDECK_HOME", str(home))
    return home


@pytest.fixture
def scope_dirs(tmp_path) -> dict[Scope, Path]:
    dirs = {
        Scope.USER_AGENT: tmp_path / "LaunchAgents-user",
        Scope.SYSTEM_AGENT: tmp_path / "LaunchAgents",
        Scope.SYSTEM_DAEMON: tmp_path / "LaunchDaemons",
    }
    for directory in dirs.values():
        directory.mkdir()
    return dirs


@pytest.fixture
def direct_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def privileged_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def engine(direct_runner, privileged_runner, scope_dirs) -> Engine:
    return Engine(
        direct=direct_runner,
        privileged=privileged_runner,
        directories=scope_dirs,
        launchctl="/bin/launchctl",
        uid=501,
    )
