"""Unit tests for installing user agents."""

import asyncio
import plistlib

import pytest

from launchdeck.api.document.DocumentError import InvalidFormat, MissingIdentifier
from launchdeck.api.item.Engine import validate_definition
from launchdeck.api.item.EngineError import CopyFailed, ReplaceConfirmationRequired
from launchdeck.api.item.Scope import Scope
from tests.unit.conftest import write_definition

pytestmark = pytest.mark.item


@pytest.fixture
def source(tmp_path):
    return write_definition(tmp_path / "downloads", "com.example.new.plist", "com.example.new", Program="/bin/true")


def test_validate_definition(source, tmp_path):
    assert validate_definition(source) == "com.example.new"

    broken = tmp_path / "broken.plist"
    broken.write_text("nope")
    with pytest.raises(InvalidFormat, match="broken.plist"):
        validate_definition(broken)

    with pytest.raises(InvalidFormat):
        validate_definition(tmp_path / "missing.plist")

    unlabeled = write_definition(tmp_path, "unlabeled.plist", None, Program="/bin/true")
    with pytest.raises(MissingIdentifier):
        validate_definition(unlabeled)


def test_install_copies_and_refreshes(engine, scope_dirs, source, direct_runner):
    result = asyncio.run(engine.install_user_agent(source))

    destination = scope_dirs[Scope.USER_AGENT] / "com.example.new.plist"
    assert result.path == destination
    assert result.label == "com.example.new"
    assert not result.replaced
    assert not result.started
    assert destination.read_bytes() == source.read_bytes()
    assert engine.find("com.example.new") is not None
    assert direct_runner.mutations() == []


def test_install_invalid_file_copies_nothing(engine, scope_dirs, tmp_path):
    broken = tmp_path / "broken.plist"
    broken.write_text("nope")
    with pytest.raises(InvalidFormat):
        asyncio.run(engine.install_user_agent(broken))
    assert list(scope_dirs[Scope.USER_AGENT].iterdir()) == []


def test_install_existing_requires_confirmation(engine, scope_dirs, source):
    existing = write_definition(scope_dirs[Scope.USER_AGENT], "com.example.new.plist", "com.example.old")
    before = existing.read_bytes()

    with pytest.raises(ReplaceConfirmationRequired) as exc_info:
        asyncio.run(engine.install_user_agent(source))
    assert exc_info.value.destination == existing
    assert existing.read_bytes() == before
    assert engine.user_agent_exists("com.example.new.plist")

    result = asyncio.run(engine.install_user_agent(source, replace=True))
    assert result.replaced
    assert plistlib.loads(existing.read_bytes())["Label"] == "com.example.new"


def test_install_and_start(engine, source, direct_runner):
    result = asyncio.run(engine.install_user_agent(source, enable_and_start=True))
    assert result.started
    assert result.warnings == []
    assert direct_runner.mutations() == [
        ["enable", "gui/501/com.example.new"],
        ["bootstrap", "gui/501", str(result.path)],
    ]
    assert engine.error_message is None


def test_failed_follow_up_is_a_warning(engine, source, direct_runner):
    direct_runner.responses["bootstrap"] = (False, "Bootstrap failed: 5: Input/output error")
    result = asyncio.run(engine.install_user_agent(source, enable_and_start=True))

    assert result.path.exists()
    assert not result.started
    assert result.warnings == ["start failed: Bootstrap failed: 5: Input/output error"]
    assert engine.error_message.startswith("Agent copied but")
    assert engine.find("com.example.new") is not None


def test_copy_failure(engine, source, tmp_path):
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("")
    engine.directories[Scope.USER_AGENT] = blocker / "LaunchAgents"

    with pytest.raises(CopyFailed) as exc_info:
        asyncio.run(engine.install_user_agent(source))
    assert str(exc_info.value).startswith("Copy failed:")


def test_install_without_auto_refresh(engine, source):
    engine.auto_refresh_after_install = False
    asyncio.run(engine.install_user_agent(source))
    assert engine.items == []


def test_install_file_already_in_place(engine, scope_dirs):
    existing = write_definition(scope_dirs[Scope.USER_AGENT], "com.example.a.plist", "com.example.a")
    before = existing.read_bytes()

    result = asyncio.run(engine.install_user_agent(existing, replace=True))

    assert result.path == existing
    assert existing.read_bytes() == before
    assert engine.find("com.example.a") is not None


def test_failed_copy_keeps_existing_file(engine, scope_dirs, source, monkeypatch):
    import shutil

    existing = write_definition(scope_dirs[Scope.USER_AGENT], "com.example.new.plist", "com.example.old")
    before = existing.read_bytes()

    def failing_copy(src, dst):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(shutil, "copyfile", failing_copy)
    with pytest.raises(CopyFailed, match="No space left on device"):
        asyncio.run(engine.install_user_agent(source, replace=True))

    assert existing.read_bytes() == before
    assert sorted(p.name for p in scope_dirs[Scope.USER_AGENT].iterdir()) == ["com.example.new.plist"]


def test_new_install_keeps_source_mode(engine, scope_dirs, source):
    import os
    import stat

    os.chmod(source, 0o644)
    result = asyncio.run(engine.install_user_agent(source))
    assert stat.S_IMODE(result.path.stat().st_mode) == 0o644
