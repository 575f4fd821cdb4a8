"""Unit tests for Engine refresh, transitions, delete and reload."""

import asyncio

import pytest

from launchdeck.api.config.LaunchdeckConfig import LaunchdeckConfig
from launchdeck.api.gateway.AuthenticationError import AuthenticationError
from launchdeck.api.gateway.PrivilegedRunner import PrivilegedRunner
from launchdeck.api.item.Engine import Engine
from launchdeck.api.item.ItemStatus import ItemStatus
from launchdeck.api.item.Scope import Scope
from tests.unit.conftest import loaded_service, write_definition

pytestmark = pytest.mark.item


@pytest.fixture
def populated(engine, scope_dirs):
    write_definition(scope_dirs[Scope.USER_AGENT], "zeta.plist", "com.example.zeta")
    write_definition(scope_dirs[Scope.USER_AGENT], "alpha.plist", "com.example.alpha")
    write_definition(scope_dirs[Scope.SYSTEM_DAEMON], "daemon.plist", "org.other.daemon")
    asyncio.run(engine.refresh())
    return engine


def test_refresh_collects_every_scope(populated):
    assert sorted(item.label for item in populated.items) == [
        "com.example.alpha",
        "com.example.zeta",
        "org.other.daemon",
    ]
    assert all(item.status is ItemStatus.STOPPED for item in populated.items)
    assert populated.error_message is None
    assert populated.scan_errors == []


def test_refresh_reports_bad_files_without_failing(engine, scope_dirs):
    write_definition(scope_dirs[Scope.USER_AGENT], "good.plist", "com.example.good")
    (scope_dirs[Scope.USER_AGENT] / "bad.plist").write_text("junk")
    asyncio.run(engine.refresh())
    assert [item.label for item in engine.items] == ["com.example.good"]
    assert len(engine.scan_errors) == 1
    assert engine.error_message is None


def test_refresh_replaces_list_and_clears_error(populated, scope_dirs):
    populated.error_message = "stale"
    (scope_dirs[Scope.USER_AGENT] / "zeta.plist").unlink()
    asyncio.run(populated.refresh())
    assert sorted(item.label for item in populated.items) == ["com.example.alpha", "org.other.daemon"]
    assert populated.error_message is None


def test_find_by_label_name_and_path(populated, scope_dirs):
    assert populated.find("com.example.zeta").display_name == "zeta"
    assert populated.find("alpha").label == "com.example.alpha"
    path = scope_dirs[Scope.SYSTEM_DAEMON] / "daemon.plist"
    assert populated.find(str(path)).label == "org.other.daemon"
    assert populated.find("missing") is None


def test_filtered(populated):
    assert [item.display_name for item in populated.filtered(scope=Scope.USER_AGENT)] == ["alpha", "zeta"]
    assert [item.display_name for item in populated.filtered(search="other")] == ["daemon"]


def test_load_user_agent(populated, direct_runner, privileged_runner):
    item = populated.find("com.example.zeta")
    direct_runner.responses["print"] = loaded_service(running=True)

    assert asyncio.run(populated.load(item)) is True
    assert ["bootstrap", "gui/501", str(item.path)] in direct_runner.mutations()
    assert privileged_runner.calls == []
    assert item.is_loaded
    assert item.status is ItemStatus.RUNNING


def test_system_transitions_use_privileged_runner(populated, direct_runner, privileged_runner):
    item = populated.find("org.other.daemon")
    assert asyncio.run(populated.enable(item)) is True
    assert asyncio.run(populated.disable(item)) is True
    assert privileged_runner.mutations() == [
        ["enable", "system/org.other.daemon"],
        ["disable", "system/org.other.daemon"],
    ]
    assert direct_runner.mutations() == []


def test_unload_and_disable_reprobe(populated, direct_runner):
    item = populated.find("com.example.alpha")
    item.apply_probe(ItemStatus.RUNNING, True, True)
    direct_runner.responses["print-disabled"] = (True, '"com.example.alpha" => disabled')

    assert asyncio.run(populated.unload(item)) is True
    assert ["bootout", "gui/501/com.example.alpha"] in direct_runner.mutations()
    assert not item.is_loaded
    assert item.status is ItemStatus.STOPPED
    assert not item.is_enabled


def test_failed_transition_keeps_state_and_records_error(populated, direct_runner):
    item = populated.find("com.example.zeta")
    direct_runner.responses["bootstrap"] = (False, "Bootstrap failed: 5: Input/output error\n")
    probes_before = direct_runner.subcommands().count("print")

    assert asyncio.run(populated.load(item)) is False
    assert populated.error_message == "Failed to load zeta: Bootstrap failed: 5: Input/output error"
    assert not item.is_loaded
    assert direct_runner.subcommands().count("print") == probes_before


def test_declined_authentication_fails_transition(populated, privileged_runner):
    item = populated.find("org.other.daemon")
    privileged_runner.responses["bootstrap"] = AuthenticationError("User canceled. (-128)")
    assert asyncio.run(populated.load(item)) is False
    assert "Authentication failed" in populated.error_message


def test_reload_loaded_item(populated, direct_runner):
    item = populated.find("com.example.alpha")
    item.apply_probe(ItemStatus.RUNNING, True, True)
    direct_runner.responses["print"] = loaded_service(running=True)

    assert asyncio.run(populated.reload(item)) is True
    assert direct_runner.mutations() == [
        ["bootout", "gui/501/com.example.alpha"],
        ["bootstrap", "gui/501", str(item.path)],
    ]
    assert item.status is ItemStatus.RUNNING


def test_reload_unloaded_item_only_loads(populated, direct_runner):
    item = populated.find("com.example.alpha")
    assert asyncio.run(populated.reload(item)) is True
    assert direct_runner.mutations() == [["bootstrap", "gui/501", str(item.path)]]


def test_reload_records_unload_when_load_fails(populated, direct_runner):
    item = populated.find("com.example.alpha")
    item.apply_probe(ItemStatus.RUNNING, True, True)
    direct_runner.responses["bootstrap"] = (False, "Load failed")

    assert asyncio.run(populated.reload(item)) is False
    assert populated.error_message == "Failed to reload alpha: Load failed"
    assert not item.is_loaded


def test_delete_user_agent(populated, direct_runner, privileged_runner):
    item = populated.find("com.example.zeta")
    item.apply_probe(ItemStatus.RUNNING, True, True)

    assert asyncio.run(populated.delete(item)) is True
    assert not item.path.exists()
    assert populated.find("com.example.zeta") is None
    assert ["bootout", "gui/501/com.example.zeta"] in direct_runner.mutations()
    assert privileged_runner.calls == []


def test_delete_unloaded_item_skips_bootout(populated, direct_runner):
    item = populated.find("com.example.zeta")
    assert asyncio.run(populated.delete(item)) is True
    assert direct_runner.mutations() == []


def test_delete_continues_when_unload_fails(populated, direct_runner):
    item = populated.find("com.example.zeta")
    item.apply_probe(ItemStatus.STOPPED, True, True)
    direct_runner.responses["bootout"] = (False, "Boot-out failed: 3: No such process")
    assert asyncio.run(populated.delete(item)) is True
    assert not item.path.exists()


def test_delete_system_item_uses_privileged_rm(populated, privileged_runner):
    item = populated.find("org.other.daemon")
    assert asyncio.run(populated.delete(item)) is True
    assert privileged_runner.calls == [("/bin/rm", ["-f", str(item.path)])]
    # The fake rm removed nothing; the item is gone from the list all the same
    assert populated.find("org.other.daemon") is None


def test_delete_failure_keeps_item(populated, privileged_runner):
    item = populated.find("org.other.daemon")
    privileged_runner.responses["-f"] = (False, "rm: Operation not permitted")
    assert asyncio.run(populated.delete(item)) is False
    assert populated.find("org.other.daemon") is item
    assert populated.error_message == "Failed to delete daemon: rm: Operation not permitted"


def test_delete_declined_authentication_keeps_item(populated, privileged_runner):
    item = populated.find("org.other.daemon")
    item.apply_probe(ItemStatus.STOPPED, True, True)
    privileged_runner.responses["bootout"] = AuthenticationError("User canceled. (-128)")
    assert asyncio.run(populated.delete(item)) is False
    assert item.path.exists()
    assert populated.find("org.other.daemon") is item


def test_open_editor_writability(populated):
    assert populated.open_editor(populated.find("com.example.zeta")).editable
    assert not populated.open_editor(populated.find("org.other.daemon")).editable


def test_diagnose(populated, scope_dirs):
    diagnostics = {d.scope: d for d in populated.diagnose()}
    assert diagnostics[Scope.USER_AGENT].definition_count == 2
    assert diagnostics[Scope.SYSTEM_AGENT].definition_count == 0
    assert diagnostics[Scope.SYSTEM_DAEMON].directory == scope_dirs[Scope.SYSTEM_DAEMON]


def test_missing_scope_directories_are_empty(direct_runner, privileged_runner, tmp_path):
    engine = Engine(
        direct=direct_runner,
        privileged=privileged_runner,
        directories={scope: tmp_path / scope.value for scope in Scope},
        uid=501,
    )
    asyncio.run(engine.refresh())
    assert engine.items == []
    assert engine.error_message is None


def test_from_config(launchdeck_home, tmp_path):
    config = LaunchdeckConfig(
        gateway={"launchctl_path": "/opt/bin/launchctl", "command_timeout_secs": 5},
        scopes={"user_agents": str(tmp_path / "agents")},
    )
    engine = Engine.from_config(config)
    assert engine.launchctl == "/opt/bin/launchctl"
    assert engine.directory_for(Scope.USER_AGENT) == tmp_path / "agents"
    assert isinstance(engine.privileged, PrivilegedRunner)
    assert engine.privileged.timeout == 5


def test_transitions_on_one_item_are_serialized(populated, direct_runner):
    import threading
    import time

    active = {"now": 0, "max": 0}
    guard = threading.Lock()

    def slow(arguments):
        with guard:
            active["now"] += 1
            active["max"] = max(active["max"], active["now"])
        time.sleep(0.05)
        with guard:
            active["now"] -= 1
        return True, ""

    direct_runner.responses["enable"] = slow
    direct_runner.responses["disable"] = slow
    item = populated.find("com.example.alpha")

    async def both():
        return await asyncio.gather(populated.enable(item), populated.disable(item))

    assert asyncio.run(both()) == [True, True]
    assert active["max"] == 1


def test_delete_refreshes_status_when_unloaded_but_file_remains(populated, privileged_runner):
    item = populated.find("org.other.daemon")
    item.apply_probe(ItemStatus.RUNNING, True, True)
    privileged_runner.responses["-f"] = (False, "rm: Operation not permitted")

    assert asyncio.run(populated.delete(item)) is False
    assert ["bootout", "system/org.other.daemon"] in privileged_runner.mutations()
    assert populated.find("org.other.daemon") is item
    assert not item.is_loaded
    assert item.status is ItemStatus.STOPPED
